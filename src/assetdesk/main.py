"""FastAPI application factory.

create_app() returns a configured FastAPI instance. The lifespan creates
missing tables at startup and disposes of the engine at shutdown.
Middleware, CORS, exception handlers and routers are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assetdesk import __version__
from assetdesk.api import api_router
from assetdesk.config import settings
from assetdesk.db import engine as db_engine
from assetdesk.errors import setup_exception_handlers
from assetdesk.middleware.request_id import RequestIdMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "assetdesk.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    if settings.create_tables:
        await db_engine.create_tables()
        logger.info("assetdesk.tables_ready")

    yield

    logger.info("assetdesk.shutdown")
    await db_engine.engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="assetdesk",
        description="Multi-tenant asset management backend",
        version=__version__,
        lifespan=lifespan,
    )

    # Starlette runs middleware in reverse order of registration:
    # RequestId → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    setup_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: assetdesk.main:app)
app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "assetdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
