from __future__ import annotations

from typing import Any

import bcrypt
from pymongo.database import Database

from ..config import get_settings
from ..database.collections import USERS_COLLECTION


def hash_password(plain: str) -> str:
    rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def normalize_email(email: str) -> str:
    return email.strip().lower()


def authenticate(db: Database, email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the raw user document or ``None``."""
    user = db[USERS_COLLECTION].find_one({"email": normalize_email(email)})
    if user and verify_password(password, user.get("password", "")):
        return user
    return None
