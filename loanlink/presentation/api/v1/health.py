"""Health check endpoint for service monitoring."""

import structlog
from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from loanlink import __version__
from loanlink.infrastructure.database import db_manager

logger = structlog.get_logger(__name__)

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    database: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service and its database.",
)
async def health_check() -> HealthResponse:
    database = "ok"

    if db_manager.engine is None:
        database = "uninitialized"
    else:
        try:
            async with db_manager.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning("health_database_unreachable", error=str(e))
            database = "unreachable"

    status = "healthy" if database == "ok" else "degraded"
    return HealthResponse(status=status, version=__version__, database=database)
