"""
Application package initializer.

The service is organised into ``core`` (configuration, logging,
errors, store, password hashing), ``schemas`` (request/response
models and the collection registry), ``services`` (business logic)
and ``api`` (versioned HTTP routers).
"""

from .main import app  # noqa: F401
