from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from ..auth.users import hash_password, normalize_email
from ..database.client import serialize_document, utcnow
from ..database.collections import USERS_COLLECTION
from .models import Preferences, RegisterRequest, UserUpdate

logger = logging.getLogger(__name__)


class EmailTakenError(Exception):
    pass


def public_user(doc: dict[str, Any]) -> dict[str, Any]:
    """Strip the password hash and stringify ids."""
    return serialize_document({k: v for k, v in doc.items() if k != "password"})


def find_user_by_email(db: Database, email: str) -> dict[str, Any] | None:
    return db[USERS_COLLECTION].find_one({"email": normalize_email(email)})


def create_user(db: Database, body: RegisterRequest) -> dict[str, Any]:
    email = normalize_email(body.email)
    if db[USERS_COLLECTION].find_one({"email": email}):
        raise EmailTakenError(email)

    now = utcnow()
    doc = {
        "name": body.name,
        "email": email,
        "password": hash_password(body.password),
        "favouriteTags": list(body.favourite_tags),
        "hobbies": [],
        "preferences": Preferences().model_dump(by_alias=True),
        "createdAt": now,
        "updatedAt": now,
    }
    try:
        result = db[USERS_COLLECTION].insert_one(doc)
    except DuplicateKeyError as exc:
        raise EmailTakenError(email) from exc
    doc["_id"] = result.inserted_id
    logger.info("Registered user %s", result.inserted_id)
    return doc


def update_user(db: Database, user_id: ObjectId, body: UserUpdate) -> dict[str, Any] | None:
    """Apply a partial update; empty strings and omitted fields are left alone."""
    update: dict[str, Any] = {}
    if body.name:
        update["name"] = body.name
    email = normalize_email(body.email or "")
    if email:
        clash = db[USERS_COLLECTION].find_one({"email": email, "_id": {"$ne": user_id}})
        if clash:
            raise EmailTakenError(email)
        update["email"] = email
    if body.favourite_tags is not None:
        update["favouriteTags"] = list(body.favourite_tags)
    if body.preferences is not None:
        update["preferences"] = body.preferences.model_dump(by_alias=True)
    if body.password:
        update["password"] = hash_password(body.password)
    update["updatedAt"] = utcnow()

    try:
        return db[USERS_COLLECTION].find_one_and_update(
            {"_id": user_id},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError as exc:
        raise EmailTakenError(update.get("email", "")) from exc


def add_performed_hobby(
    db: Database,
    user_id: ObjectId,
    hobby_id: ObjectId,
    performed_at: datetime,
    notes: str | None = None,
) -> dict[str, Any]:
    entry: dict[str, Any] = {"hobby": hobby_id, "performedAt": performed_at}
    if notes:
        entry["notes"] = notes
    db[USERS_COLLECTION].update_one(
        {"_id": user_id},
        {"$push": {"hobbies": entry}, "$set": {"updatedAt": utcnow()}},
    )
    return entry
