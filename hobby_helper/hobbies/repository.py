from __future__ import annotations

import logging
import re
from typing import Any

from pymongo.database import Database

from ..database.client import serialize_document, to_object_id, utcnow
from ..database.collections import HOBBIES_COLLECTION
from .models import HobbyCreate
from .moods import infer_mood_effects

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY_LEVELS = [{"level": "Beginner", "youtubeLinks": []}]


def list_hobbies(db: Database) -> list[dict[str, Any]]:
    return [serialize_document(doc) for doc in db[HOBBIES_COLLECTION].find()]


def find_hobbies_by_name(db: Database, name: str) -> list[dict[str, Any]]:
    """Case-insensitive exact name match; *name* is treated literally."""
    pattern = f"^{re.escape(name)}$"
    logger.debug("Searching hobby with pattern %r", pattern)
    cursor = db[HOBBIES_COLLECTION].find({"name": {"$regex": pattern, "$options": "i"}})
    return [serialize_document(doc) for doc in cursor]


def get_hobby(db: Database, hobby_id: Any) -> dict[str, Any] | None:
    oid = to_object_id(hobby_id)
    if oid is None:
        return None
    doc = db[HOBBIES_COLLECTION].find_one({"_id": oid})
    return serialize_document(doc) if doc else None


def create_hobby(db: Database, payload: HobbyCreate) -> dict[str, Any]:
    doc = payload.model_dump(mode="json", by_alias=True)
    if not doc.get("difficultyLevels"):
        doc["difficultyLevels"] = [dict(level) for level in DEFAULT_DIFFICULTY_LEVELS]
    if not doc.get("moodEffects"):
        doc["moodEffects"] = infer_mood_effects(doc["tags"])
    doc["createdAt"] = utcnow()

    result = db[HOBBIES_COLLECTION].insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info("Created custom hobby %s (%s)", doc["name"], result.inserted_id)
    return serialize_document(doc)
