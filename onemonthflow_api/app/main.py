"""
Main entrypoint for the OneMonthFlow API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds and configures the
app, which is then instantiated at module import time as ``app`` so it
can be served directly::

    uvicorn onemonthflow_api.app.main:app --reload

Tests call ``create_app`` with their own ``Settings`` instead.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import SqlService, init_db
from .core.logging_config import setup_logging


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Raises
    ------
    ConfigurationError
        If the settings are unusable (e.g. no connection string).
    """
    settings = (settings or default_settings).validate()
    setup_logging(settings.log_level, settings.log_file)
    sql = SqlService(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Creates the database file on first start and applies migrations.
        init_db(sql)
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.sql = sql

    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()
