"""MongoDB collection names used by the API."""

from __future__ import annotations

USERS_COLLECTION = "users"
HOBBIES_COLLECTION = "hobbies"
USER_HOBBIES_COLLECTION = "userhobbies"

__all__ = [
    "USERS_COLLECTION",
    "HOBBIES_COLLECTION",
    "USER_HOBBIES_COLLECTION",
]
