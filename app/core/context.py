"""
Request context management.

Carries the request id for log correlation across the middleware, services and
error handlers. Uses contextvars for async-safe propagation.
"""

from contextvars import ContextVar
from typing import Optional
import uuid

from starlette.requests import Request

__all__ = [
    "set_request_id",
    "get_request_id",
    "generate_request_id",
    "clear_context",
    "get_context_dict",
    "get_client_ip",
]

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    """
    Generate a new request ID.

    Format: req_{16 hex chars}
    """
    return f"req_{uuid.uuid4().hex[:16]}"


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id.get()


def clear_context() -> None:
    """Called at end of request to prevent context leaking."""
    _request_id.set(None)


def get_context_dict() -> dict:
    return {"request_id": get_request_id()}


def get_client_ip(request: Request) -> str:
    """Extract client IP, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First IP in the list is the client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"
