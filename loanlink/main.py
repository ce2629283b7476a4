"""
LoanLink API service.

Borrowers browse loan offers and apply for them, managers approve or
reject applications, and application fees are paid through a hosted card
checkout whose success callback is settled exactly once.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from loanlink import __version__
from loanlink.core.config import settings
from loanlink.core.logging import setup_logging
from loanlink.core.metrics import get_metrics, get_metrics_content_type
from loanlink.infrastructure.database import db_manager
from loanlink.presentation.api import api_router
from loanlink.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)

OPENAPI_TAGS = [
    {"name": "Applications", "description": "Submit, review and withdraw loan applications"},
    {"name": "Payments", "description": "Application-fee checkout, settlement and history"},
    {"name": "Loans", "description": "Loan offer catalog"},
    {"name": "Users", "description": "Account registration and administration"},
    {"name": "Health", "description": "Liveness and database status"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Bring the marketplace up and down.

    Startup configures structured logging, opens the database pool and,
    when DB_CREATE_TABLES is set, creates the application, payment, loan
    and user tables. Missing provider credentials are logged so that a
    misconfigured deployment shows up before the first checkout or login.
    """
    setup_logging()
    logger = structlog.get_logger(__name__)

    db_manager.init()
    if settings.db_create_tables:
        await db_manager.create_tables()

    if not settings.payment_secret_key:
        logger.warning("payment_secret_key_missing", payment_api_url=settings.payment_api_url)
    if not settings.identity_api_key:
        logger.warning("identity_api_key_missing", identity_api_url=settings.identity_api_url)

    logger.info(
        "loanlink_started",
        version=__version__,
        currency=settings.payment_currency,
        client_url=settings.client_url,
    )

    yield

    await db_manager.close()
    logger.info("loanlink_stopped")


app = FastAPI(
    title="LoanLink",
    description="Microloan marketplace: loan catalog, application lifecycle and fee settlement",
    version=__version__,
    openapi_tags=OPENAPI_TAGS,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", RequestContextMiddleware.HEADER_NAME],
    expose_headers=[RequestContextMiddleware.HEADER_NAME],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus scrape target for lifecycle, settlement and upstream metrics."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")
