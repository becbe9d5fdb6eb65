"""JWT service for the rental backend."""

from datetime import datetime, timedelta, timezone

import jwt

from ...config import settings


def create_access_token(
    user_id: str,
    role: str,
    phone: str,
    name: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT access token carrying the user's identity."""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.access_token_expire_days)

    payload = {
        "sub": str(user_id),
        "role": role,
        "phone": phone,
        "name": name,
        "exp": now + expires_delta,
        "iat": now,
        "type": "access",
    }

    return jwt.encode(
        payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT access token.

    Returns:
        Token payload if valid, None if invalid or expired.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except jwt.InvalidTokenError:
        return None
    if payload.get("type") != "access":
        return None
    return payload


def get_token_expiry_seconds() -> int:
    """Get access token expiry in seconds."""
    return settings.access_token_expire_days * 24 * 60 * 60
