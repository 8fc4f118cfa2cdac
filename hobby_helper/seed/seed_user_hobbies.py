from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from bson import ObjectId
from pydantic import TypeAdapter, ValidationError
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..database.client import close_client, get_db, utcnow
from ..database.collections import USER_HOBBIES_COLLECTION
from ..user_hobbies.models import UserHobbyCreate

logger = logging.getLogger(__name__)

DEFAULT_USER_HOBBIES_PATH = Path(__file__).resolve().parent / "data" / "userHobbies.json"

_record_list = TypeAdapter(list[UserHobbyCreate])


def _to_document(record: UserHobbyCreate) -> dict[str, Any]:
    now = utcnow()
    doc: dict[str, Any] = {
        "user": ObjectId(record.user),
        "hobby": ObjectId(record.hobby),
        "performedAt": record.performed_at,
        "createdAt": now,
        "updatedAt": now,
    }
    if record.rating is not None:
        doc["rating"] = record.rating
    if record.notes is not None:
        doc["notes"] = record.notes
    return doc


def load_user_hobbies(path: Path) -> list[dict[str, Any]]:
    """Read and validate a history file; ids must be ObjectId strings."""
    records = _record_list.validate_python(json.loads(path.read_text(encoding="utf-8")))
    return [_to_document(record) for record in records]


def seed_user_hobbies(db: Database, path: Path = DEFAULT_USER_HOBBIES_PATH) -> int:
    docs = load_user_hobbies(path)
    db[USER_HOBBIES_COLLECTION].delete_many({})
    if docs:
        db[USER_HOBBIES_COLLECTION].insert_many(docs)
    logger.info("Seeded %d user hobby records from %s", len(docs), path)
    return len(docs)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replace the user hobby history with a JSON file")
    parser.add_argument("path", nargs="?", type=Path, default=DEFAULT_USER_HOBBIES_PATH)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        count = seed_user_hobbies(get_db(), args.path)
    except (OSError, ValueError, ValidationError, PyMongoError):
        logger.exception("Error seeding user hobbies")
        return 1
    finally:
        close_client()
    print(f"UserHobbies seeded successfully ({count} documents).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
