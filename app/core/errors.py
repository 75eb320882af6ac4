"""
Unified error handling.

Provides:
- An application exception hierarchy carrying HTTP status and error code
- One set of FastAPI exception handlers that classify every error and answer
  with the standard JSON envelope
- Sentry reporting for unclassified errors (when a DSN is configured)

Data-access and service code raise these (or let store/driver errors
propagate); nothing below the HTTP layer builds error responses.

Usage:
    raise NotFound("Blog not found")

    # in the app factory
    register_exception_handlers(app, settings)
"""

import re
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt
import sentry_sdk
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings
from app.core.context import get_client_ip, get_context_dict

logger = structlog.get_logger(__name__)

__all__ = [
    "AppError",
    "BadRequest",
    "ValidationFailed",
    "NotFound",
    "Conflict",
    "Unauthorized",
    "Forbidden",
    "RateLimitExceeded",
    "register_exception_handlers",
    "init_sentry",
    "capture_exception",
]

_sentry_initialized: bool = False


class AppError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: Optional[str] = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_INPUT"


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "RESOURCE_NOT_FOUND"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "RESOURCE_CONFLICT"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class RateLimitExceeded(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, message: str, code: Optional[str] = None, retry_after: int = 0):
        super().__init__(message, code=code)
        self.retry_after = retry_after


# Messages for unique violations, keyed by column name
DUPLICATE_KEY_MESSAGES = {
    "slug": "A record with this slug already exists. Please choose a different slug.",
    "blog_id": "A blog with this ID already exists.",
    "type_id": "A blog type with this ID already exists.",
    "name": "A blog type with this name already exists. Please choose a different name.",
    "card_id": "An investment card with this ID already exists.",
    "page_type": "Content for this page type already exists.",
    "is_deleted": "A live record of this kind already exists.",
}

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?:\w+\.)?(\w+)")
_POSTGRES_UNIQUE = re.compile(r"Key \((\w+)(?:,\s*\w+)*\)=")


def _duplicate_key_field(error: IntegrityError) -> Optional[str]:
    """Return the offending column for a unique violation, or None if it is another integrity error."""
    text = str(error.orig) if error.orig is not None else str(error)
    match = _SQLITE_UNIQUE.search(text) or _POSTGRES_UNIQUE.search(text)
    if match:
        return match.group(1)
    if "duplicate key" in text.lower() or "unique" in text.lower():
        return "field"
    return None


def _envelope(
    status_code: int,
    message: str,
    code: Optional[str],
    exc: Optional[BaseException] = None,
    include_stack: bool = False,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "message": message, "data": None}
    if code:
        body["code"] = code
    if include_stack and exc is not None:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _log_failure(request: Request, exc: BaseException, status_code: int) -> None:
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request failed",
        error=str(exc),
        error_type=type(exc).__name__,
        status_code=status_code,
        method=request.method,
        path=request.url.path,
        ip=get_client_ip(request),
    )


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Attach the handlers that turn every error into the standard envelope."""
    include_stack = not settings.is_production

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        _log_failure(request, exc, exc.status_code)
        headers = None
        if isinstance(exc, RateLimitExceeded):
            headers = {"Retry-After": str(exc.retry_after)}
        return _envelope(exc.status_code, exc.message, exc.code, exc, include_stack, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query"))
            details.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
        _log_failure(request, exc, status.HTTP_400_BAD_REQUEST)
        return _envelope(
            status.HTTP_400_BAD_REQUEST,
            f"Validation failed: {', '.join(details)}",
            "VALIDATION_ERROR",
        )

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
        field = _duplicate_key_field(exc)
        _log_failure(request, exc, status.HTTP_409_CONFLICT if field else status.HTTP_400_BAD_REQUEST)
        if field is None:
            return _envelope(status.HTTP_400_BAD_REQUEST, "Validation failed", "VALIDATION_ERROR", exc, include_stack)
        message = DUPLICATE_KEY_MESSAGES.get(field, f"{field} already exists. Please choose a different value.")
        return _envelope(status.HTTP_409_CONFLICT, message, "DUPLICATE_KEY_ERROR", exc, include_stack)

    @app.exception_handler(jwt.ExpiredSignatureError)
    async def handle_token_expired(request: Request, exc: jwt.ExpiredSignatureError) -> JSONResponse:
        _log_failure(request, exc, status.HTTP_401_UNAUTHORIZED)
        return _envelope(status.HTTP_401_UNAUTHORIZED, "Token expired", "TOKEN_EXPIRED")

    @app.exception_handler(jwt.InvalidTokenError)
    async def handle_invalid_token(request: Request, exc: jwt.InvalidTokenError) -> JSONResponse:
        _log_failure(request, exc, status.HTTP_401_UNAUTHORIZED)
        return _envelope(status.HTTP_401_UNAUTHORIZED, "Invalid token", "INVALID_TOKEN")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Route {request.url.path} not found"
            code = "RESOURCE_NOT_FOUND"
        else:
            message = str(exc.detail)
            code = None
        _log_failure(request, exc, exc.status_code)
        return _envelope(exc.status_code, message, code, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        capture_exception(exc, context={"method": request.method, "path": request.url.path})
        return _envelope(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            "INTERNAL_ERROR",
            exc,
            include_stack,
        )


def init_sentry(dsn: str, environment: str = "production", traces_sample_rate: float = 0.1) -> bool:
    """
    Initialize Sentry SDK for error tracking.

    Returns:
        True if initialization happened, False when no DSN is configured
    """
    global _sentry_initialized

    if not dsn:
        logger.info("Sentry disabled (no DSN provided)")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        integrations=[FastApiIntegration(transaction_style="endpoint")],
        before_send=_before_send,
    )
    _sentry_initialized = True
    logger.info("Sentry initialized", environment=environment)
    return True


def _before_send(event: Dict[str, Any], hint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Drop health check noise and tag events with the request id."""
    if "request" in event and "/health" in event["request"].get("url", ""):
        return None

    request_id = get_context_dict().get("request_id")
    if request_id:
        event.setdefault("tags", {})["request_id"] = request_id
    return event


def capture_exception(exc: BaseException, context: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """
    Log an exception with structlog and forward it to Sentry when enabled.

    Returns:
        Sentry event ID or None if not sent
    """
    enriched_context = {
        **get_context_dict(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "error_type": type(exc).__name__,
        **(context or {}),
    }
    logger.error("Exception captured", exc_info=exc, **enriched_context)

    if not _sentry_initialized:
        return None

    with sentry_sdk.new_scope() as scope:
        for key, value in enriched_context.items():
            if value is not None:
                scope.set_extra(key, value)
        return sentry_sdk.capture_exception(exc)
