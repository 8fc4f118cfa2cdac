from __future__ import annotations

import logging
from typing import Any

import pymongo
from bson import ObjectId
from pymongo.database import Database

from ..database.client import serialize_document, utcnow
from ..database.collections import HOBBIES_COLLECTION, USER_HOBBIES_COLLECTION
from .models import UserHobbyCreate

logger = logging.getLogger(__name__)


def create_user_hobby(db: Database, body: UserHobbyCreate) -> dict[str, Any]:
    now = utcnow()
    doc: dict[str, Any] = {
        "user": ObjectId(body.user),
        "hobby": ObjectId(body.hobby),
        "performedAt": body.performed_at,
        "createdAt": now,
        "updatedAt": now,
    }
    if body.rating is not None:
        doc["rating"] = body.rating
    if body.notes is not None:
        doc["notes"] = body.notes

    result = db[USER_HOBBIES_COLLECTION].insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info("Recorded hobby %s for user %s (rating=%s)", body.hobby, body.user, body.rating)
    return serialize_document(doc)


def _find_for_user(db: Database, user_id: ObjectId) -> list[dict[str, Any]]:
    cursor = db[USER_HOBBIES_COLLECTION].find({"user": user_id}).sort(
        "performedAt", pymongo.DESCENDING
    )
    return list(cursor)


def _hobbies_by_id(db: Database, records: list[dict[str, Any]]) -> dict[ObjectId, dict[str, Any]]:
    ids = list({r["hobby"] for r in records if r.get("hobby") is not None})
    if not ids:
        return {}
    return {h["_id"]: h for h in db[HOBBIES_COLLECTION].find({"_id": {"$in": ids}})}


def list_user_hobbies(db: Database, user_id: ObjectId) -> list[dict[str, Any]]:
    """The user's records, newest first, with ``hobby`` replaced by the hobby document.

    A record whose hobby no longer exists keeps ``hobby`` as ``None``.
    """
    records = _find_for_user(db, user_id)
    hobbies = _hobbies_by_id(db, records)
    populated = []
    for record in records:
        populated.append({**record, "hobby": hobbies.get(record.get("hobby"))})
    return serialize_document(populated)


def get_hobby_history(db: Database, user_id: ObjectId) -> list[dict[str, Any]]:
    records = _find_for_user(db, user_id)
    hobbies = _hobbies_by_id(db, records)

    history = []
    for record in records:
        hobby = hobbies.get(record.get("hobby"))
        history.append({
            "id": str(record["_id"]),
            "hobbyId": str(record["hobby"]) if record.get("hobby") else None,
            "name": (hobby or {}).get("name") or "Unknown Hobby",
            "date": record["performedAt"],
            "duration": "N/A",
            "rating": record.get("rating") or 0,
            "notes": record.get("notes") or "",
        })
    return history
