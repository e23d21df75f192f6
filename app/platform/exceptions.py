from typing import Optional, Tuple

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.config import settings
from app.platform.logger import get_logger
from app.platform.response import error_response

logger = get_logger(__name__)


class SEOCheckError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class URLValidationError(SEOCheckError):
    """Malformed or disallowed URL. Never retried."""


class ScrapeError(SEOCheckError):
    """The rendering provider could not be reached after all retries."""

    def __init__(self, message: str, attempts: int, last_error: Optional[str] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class AnalysisError(SEOCheckError):
    """Parsing or section derivation failed."""


def classify_error(message: str) -> Tuple[int, str]:
    """
    Map an error message onto an HTTP status and a public message.
    Order matters: the first matching rule wins.
    """
    lowered = (message or "").lower()

    if "invalid url" in lowered:
        return status.HTTP_400_BAD_REQUEST, "Invalid URL provided"
    if "timeout" in lowered:
        return status.HTTP_504_GATEWAY_TIMEOUT, "Analysis timed out"
    if "rate limit" in lowered:
        return status.HTTP_429_TOO_MANY_REQUESTS, "Rate limit exceeded"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"


def _validation_details(exc: RequestValidationError) -> list:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details.append({
            "field": ".".join(loc),
            "message": err.get("msg", ""),
            "value": err.get("input"),
        })
    return details


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(
            error=str(exc.detail) or "Error",
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            error="Validation failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=_validation_details(exc),
        )

    @app.exception_handler(URLValidationError)
    async def url_validation_exception_handler(request: Request, exc: URLValidationError):
        return error_response(
            error="Validation failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=[{"field": "url", "message": exc.message}],
        )

    @app.exception_handler(SEOCheckError)
    async def seo_check_exception_handler(request: Request, exc: SEOCheckError):
        status_code, public_message = classify_error(exc.message)
        logger.error(f"SEO analysis failed for {request.url.path}: {exc.message}")
        return error_response(
            error=public_message,
            message=exc.message if settings.expose_error_details else public_message,
            status_code=status_code,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return error_response(
            error="Internal server error",
            message=str(exc) if settings.expose_error_details else "Something went wrong",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
