from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from ..database.client import get_db, to_object_id
from ..database.collections import USERS_COLLECTION
from ..errors import AuthError
from .tokens import decode_access_token

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def _load_user(db: Database, token: str) -> dict[str, Any] | None:
    user_id = to_object_id(decode_access_token(token))
    if user_id is None:
        raise AuthError("Invalid token")
    return db[USERS_COLLECTION].find_one({"_id": user_id})


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Database = Depends(get_db),
) -> dict[str, Any] | None:
    """Return the user document for a valid bearer token, or ``None`` for guests."""
    if credentials is None:
        return None
    try:
        return _load_user(db, credentials.credentials)
    except AuthError as exc:
        logger.debug("Ignoring bearer token on optional route: %s", exc.message)
        return None


def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    """Raise 401 unless the request carries a token for an existing user."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        user = _load_user(db, credentials.credentials)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail="Unauthorized") from exc
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user
