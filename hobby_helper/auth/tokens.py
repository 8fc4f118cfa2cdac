from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from ..config import Settings, get_settings
from ..errors import AuthError


def create_access_token(user_id: object, settings: Settings | None = None) -> str:
    """Sign a bearer token carrying the user id, valid for ``jwt_expires_seconds``."""
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "_id": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_expires_seconds),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> str:
    """Return the user id stored in *token*, or raise :class:`AuthError`."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthError("Invalid token") from exc

    user_id = payload.get("_id")
    if not user_id:
        raise AuthError("Invalid token")
    return str(user_id)
