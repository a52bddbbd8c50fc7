"""
Logging configuration for the Records API.

``setup_logging`` installs one console handler (plus a file handler
when ``LOG_FILE`` is set) on the root logger and makes Uvicorn's own
loggers propagate to it, so server, access and application messages
share a single format and level.  ``run.py`` starts Uvicorn with
``log_config=None`` to keep Uvicorn from installing handlers of its
own.
"""

import logging
from pathlib import Path

from .config import Settings

HANDLER_NAME = "records_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(config: Settings) -> None:
    """Configure the root and Uvicorn loggers from ``config``.

    Safe to call more than once (tests build several applications):
    handlers are only added on the first call.

    Parameters
    ----------
    config : Settings
        Provides ``log_level`` (case insensitive; unknown names fall
        back to ``INFO``) and ``log_file`` (empty for console only).
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
        uvicorn_logger.setLevel(level)

    if any(handler.get_name() == HANDLER_NAME for handler in root.handlers):
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(Path(config.log_file).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
        root.addHandler(handler)
