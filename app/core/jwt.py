from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from app.core.config import Settings, settings as default_settings


def create_access_token(
    subject: str,
    email: str,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    settings: Settings = default_settings,
) -> str:
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode: Dict[str, Any] = {"exp": expire, "sub": str(subject), "email": email}
    if role:
        to_encode["role"] = role
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, settings: Settings = default_settings) -> Dict[str, Any]:
    """
    Verify and decode a token.

    Raises jwt.ExpiredSignatureError / jwt.InvalidTokenError; the error
    handlers turn these into 401 TOKEN_EXPIRED / INVALID_TOKEN.
    """
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
