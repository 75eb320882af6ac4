"""
Bearer-token auth dependencies.

Available for routes that need them; the content endpoints are currently
public, so nothing in the routers depends on these yet.
"""
from typing import Callable, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from app.core.errors import Forbidden, Unauthorized
from app.core.jwt import decode_token

bearer_scheme = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    id: str
    email: str
    role: Optional[str] = None


def _principal_from_token(request: Request, token: str) -> Principal:
    payload = decode_token(token, request.app.state.context.settings)
    subject = payload.get("sub") or payload.get("id")
    if not subject:
        raise Unauthorized("Invalid token", code="INVALID_TOKEN")
    return Principal(id=str(subject), email=payload.get("email", ""), role=payload.get("role"))


def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """
    Resolve the caller from the Authorization: Bearer header.

    Expired and malformed tokens propagate as PyJWT errors and are answered
    with 401 TOKEN_EXPIRED / INVALID_TOKEN by the error handlers.
    """
    if not credentials or not credentials.credentials:
        raise Unauthorized("Access token is required")
    return _principal_from_token(request, credentials.credentials)


def require_roles(*roles: str) -> Callable[..., Principal]:
    """Dependency factory: the caller must hold one of ``roles`` (any role when empty)."""

    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if roles and (principal.role or "") not in roles:
            raise Forbidden("Insufficient permissions")
        return principal

    return dependency


def get_optional_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """Like get_current_principal, but anonymous or bad tokens resolve to None."""
    if not credentials or not credentials.credentials:
        return None
    try:
        return _principal_from_token(request, credentials.credentials)
    except (jwt.PyJWTError, Unauthorized):
        return None
