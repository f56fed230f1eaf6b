"""Exception handlers that render failures as the `{"error": {...}}` envelope."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from portfolio_site.exceptions import ErrorCode, PortfolioException
from portfolio_site.logging_config import get_logger, log_with_context
from portfolio_site.models.base_models import ErrorBody, ErrorResponse

logger = get_logger(__name__)


def error_response(status_code: int, code: ErrorCode, message: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details or {}))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def portfolio_exception_handler(request: Request, exc: PortfolioException) -> JSONResponse:
    # 5xx are ours or upstream's; 4xx are the caller's
    log_with_context(
        logger,
        "error" if exc.status_code >= 500 else "warning",
        "Request failed",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        path=request.url.path,
        event_type="portfolio_error",
    )
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, answer with a generic 500."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)
    return error_response(500, ErrorCode.INTERNAL_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortfolioException, portfolio_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, general_exception_handler)
