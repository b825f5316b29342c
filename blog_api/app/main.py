"""
Main entrypoint for the Blog API.

This module assembles the FastAPI application: it configures logging,
builds the credential service from the settings, registers the
exception handlers and includes the versioned router.  ``create_app``
does the work; the ASGI server imports the factory, e.g.::

    uvicorn blog_api.app.main:create_app --factory --reload

Settings are read from the environment.  A missing ``JWT_SECRET``
aborts start‑up.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .api.v1.router import router as v1_router
from .core import db
from .core.config import Settings, load_settings
from .core.exceptions import (
    BlogAPIError,
    blog_api_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
)
from .core.logging_config import setup_logging
from .core.security import CredentialService


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Explicit settings, mainly for tests.  When omitted they are
        loaded from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.credentials = CredentialService(
        settings.jwt_secret, token_ttl=settings.access_token_expire_seconds
    )

    app.add_exception_handler(BlogAPIError, blog_api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.middleware("http")
    async def bind_database(request: Request, call_next):
        with db.using_database(settings.database_url):
            return await call_next(request)

    # Apply migrations before the first request so the tables exist.
    db.configure(settings.database_url)
    db.init_db()
    logger.info("Database ready at %s", db.get_database_path())

    return app
