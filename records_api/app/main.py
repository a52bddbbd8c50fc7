"""
Main entrypoint for the Records API.

This module assembles the FastAPI application, sets up logging,
attaches the record store and includes the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, so it can be served
with::

    uvicorn records_api.app.main:app --reload
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import SqliteStore, get_database_path, init_db
from .core.errors import RecordsError, StoreError, records_error_handler
from .core.logging_config import setup_logging
from .services.auth_service import AuthService

logger = logging.getLogger(__name__)


def create_app(database_path: Optional[str] = None, static_dir: Optional[str] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database_path : Optional[str]
        SQLite file to use.  Defaults to ``settings.database_url``
        resolved by ``get_database_path``.
    static_dir : Optional[str]
        Directory with the static front-end, mounted at ``/``.
        Defaults to ``settings.static_dir``; nothing is mounted when
        empty or missing.

    Returns
    -------
    FastAPI
        A configured application.  The schema is migrated and the
        default account created when the application starts.
    """
    setup_logging(settings)

    db_path = database_path or get_database_path()
    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.store = SqliteStore(db_path)

    app.add_exception_handler(RecordsError, records_error_handler)
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db(db_path)
        logger.info("Database ready at %s", db_path)
        try:
            await AuthService(app.state.store).bootstrap_default_account()
        except StoreError:
            # Serve anyway; login fails until the account can be created.
            logger.error("Error creating the default account; continuing without it")

    # Mounted last so the API routes take precedence over files.
    static_dir = static_dir if static_dir is not None else settings.static_dir
    if static_dir:
        if os.path.isdir(static_dir):
            app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        else:
            logger.warning("Static directory %s does not exist; not serving files", static_dir)

    return app


app = create_app()
