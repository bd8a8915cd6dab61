"""Health check endpoint.

Verifies the server is running and the database is reachable.
"""

import structlog
from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from assetdesk import __version__
from assetdesk.db import engine as db_engine

router = APIRouter()

logger = structlog.get_logger()


@router.get("/health")
async def health_check():
    """Check server health and database connectivity."""
    checks = {"version": __version__}

    try:
        async with db_engine.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("health.database_unreachable", error=str(e))
        checks["database"] = f"error: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
