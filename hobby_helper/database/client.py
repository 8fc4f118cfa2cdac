from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import pymongo
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

from ..config import get_settings
from .collections import HOBBIES_COLLECTION, USER_HOBBIES_COLLECTION, USERS_COLLECTION

logger = logging.getLogger(__name__)

_client: MongoClient | None = None
_db: Database | None = None


def connect(uri: str, retries: int = 3) -> MongoClient:
    """Connect to MongoDB, pinging the server to make sure it is reachable."""
    last_error: Exception | None = None
    for attempt in range(1, retries + 1):
        try:
            client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=5000, tz_aware=True)
            client.admin.command("ping")
            logger.info("MongoDB connection successful (attempt %d)", attempt)
            return client
        except PyMongoError as exc:
            last_error = exc
            logger.warning("MongoDB connection attempt %d/%d failed: %s", attempt, retries, exc)
    raise ConnectionFailure(f"MongoDB connection failed after {retries} attempts: {last_error}")


def get_db() -> Database:
    """Return the configured database, connecting on first call."""
    global _client, _db
    if _db is None:
        settings = get_settings()
        _client = connect(settings.mongo_uri)
        _db = _client[settings.mongo_db_name]
    return _db


def set_database(db: Database | None) -> None:
    """Install an already-opened database handle (or clear it with ``None``)."""
    global _db
    _db = db


def close_client() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
        logger.info("MongoDB connection closed")
    _client = None
    _db = None


def ensure_indexes(db: Database) -> None:
    db[USERS_COLLECTION].create_index([("email", pymongo.ASCENDING)], unique=True)
    db[USER_HOBBIES_COLLECTION].create_index(
        [("user", pymongo.ASCENDING), ("performedAt", pymongo.DESCENDING)]
    )
    db[HOBBIES_COLLECTION].create_index([("name", pymongo.ASCENDING)])


# ── Document helpers ─────────────────────────────────────────────────────


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(value: Any) -> ObjectId | None:
    """Parse *value* into an ObjectId, returning ``None`` when it is not one."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize_document(value: Any) -> Any:
    """Recursively replace ObjectIds with their hex strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: serialize_document(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_document(v) for v in value]
    return value
