"""
Request audit logging.

AuditMiddleware wraps every request:
- before: assign the request id (X-Request-ID, generated when absent or
  unsafe) and bind it to structlog so every log line carries it
- after: log method, path, client ip, user agent, status and duration;
  info for successes, error for status >= 400

Write routes also depend on ``security_audit``, which captures the request
body and query before the handler runs. The middleware emits that record as
a "Security audit" warning once the response status is known.
"""

import re
import time
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.context import clear_context, generate_request_id, get_client_ip, set_request_id

logger = structlog.get_logger(__name__)

# Request ID validation to prevent log injection attacks
MAX_ID_LENGTH = 64
SAFE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_\-]+$")


def _validate_id(value: Optional[str]) -> Optional[str]:
    if not value or len(value) > MAX_ID_LENGTH:
        return None
    if not SAFE_ID_PATTERN.match(value):
        return None
    return value


async def security_audit(request: Request) -> None:
    """Dependency for write routes: stash body and query for the audit log."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    request.state.audit = {"body": body, "query": dict(request.query_params)}


class AuditMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _validate_id(request.headers.get("X-Request-ID")) or generate_request_id()
        set_request_id(request_id)
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        ip = get_client_ip(request)
        start_time = time.perf_counter()
        status_code = 500  # Default to error in case of exception

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 1)
            log = logger.error if status_code >= 400 else logger.info
            log(
                "Request completed",
                method=request.method,
                path=request.url.path,
                ip=ip,
                user_agent=request.headers.get("user-agent"),
                status_code=status_code,
                duration_ms=duration_ms,
            )

            audit = getattr(request.state, "audit", None)
            if audit is not None:
                logger.warning(
                    "Security audit",
                    method=request.method,
                    path=request.url.path,
                    ip=ip,
                    user_agent=request.headers.get("user-agent"),
                    body=audit["body"],
                    query=audit["query"],
                    status_code=status_code,
                )

            # Clean up context to prevent leaking to next request
            clear_context()
            structlog.contextvars.clear_contextvars()
