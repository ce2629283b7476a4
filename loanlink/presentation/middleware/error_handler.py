"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import structlog

from loanlink.domain.exceptions import (
    ConflictException,
    DomainException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
    UpstreamException,
    ValidationException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exception categories to HTTP responses. Handlers are
    resolved along the exception's MRO, so subclasses inherit the status
    of their category.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle malformed request bodies and parameters."""
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        return _error_response(400, "VALIDATION_ERROR", details or "Invalid request")

    @app.exception_handler(ValidationException)
    async def validation_handler(
        request: Request,
        exc: ValidationException,
    ) -> JSONResponse:
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(UnauthorizedException)
    async def unauthorized_handler(
        request: Request,
        exc: UnauthorizedException,
    ) -> JSONResponse:
        return _error_response(401, exc.code, exc.message)

    @app.exception_handler(ForbiddenException)
    async def forbidden_handler(
        request: Request,
        exc: ForbiddenException,
    ) -> JSONResponse:
        logger.info(
            "request_forbidden",
            request_id=get_request_id(),
            code=exc.code,
            path=request.url.path,
        )
        return _error_response(403, exc.code, exc.message)

    @app.exception_handler(NotFoundException)
    async def not_found_handler(
        request: Request,
        exc: NotFoundException,
    ) -> JSONResponse:
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(ConflictException)
    async def conflict_handler(
        request: Request,
        exc: ConflictException,
    ) -> JSONResponse:
        return _error_response(409, exc.code, exc.message)

    @app.exception_handler(UpstreamException)
    async def upstream_handler(
        request: Request,
        exc: UpstreamException,
    ) -> JSONResponse:
        """Handle identity and payment provider failures."""
        logger.error(
            "upstream_error",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(502, exc.code, exc.message)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        logger.exception(
            "storage_error",
            request_id=get_request_id(),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "STORAGE_ERROR", "A storage error occurred.")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
