"""
Password hashing and JWT helpers for Sistema Splice.

Passwords are hashed with bcrypt directly; tokens are signed with
python-jose using the secret and algorithm from the application settings.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.config import get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Password helpers
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    # bcrypt raises ValueError for hashes it cannot parse
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash has an invalid format")
        return False


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------


def create_access_token(data: dict[str, Any], expires_minutes: int | None = None) -> str:
    """Create a signed JWT access token.

    Args:
        data: Claims to embed. ``sub`` should hold ``str(user.id)``;
              ``exp`` and ``iat`` are set here.
        expires_minutes: Overrides ``JWT_EXPIRATION_MINUTES``.

    Returns:
        A compact JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRATION_MINUTES

    payload = data.copy()
    payload["exp"] = now + timedelta(minutes=minutes)
    payload["iat"] = now
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT access token.

    Raises:
        ValueError: If the signature is wrong, the token expired, or it
            cannot be decoded. Callers map this to HTTP 401.
    """
    settings = get_settings()
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("JWT verification failed: %s", exc)
        raise ValueError("Token inválido ou expirado") from exc
