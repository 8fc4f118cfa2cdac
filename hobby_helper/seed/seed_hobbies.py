from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..database.client import close_client, get_db, utcnow
from ..database.collections import HOBBIES_COLLECTION
from ..hobbies.models import HobbySeed
from ..hobbies.moods import infer_mood_effects

logger = logging.getLogger(__name__)

DEFAULT_HOBBIES_PATH = Path(__file__).resolve().parent / "data" / "hobbies.json"

_hobby_list = TypeAdapter(list[HobbySeed])


def load_hobbies(path: Path) -> list[dict[str, Any]]:
    """Read and validate a catalogue file, returning documents ready to insert."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    hobbies = _hobby_list.validate_python(raw)

    docs = []
    for hobby in hobbies:
        doc = hobby.model_dump(mode="python", by_alias=True)
        if not doc.get("moodEffects"):
            doc["moodEffects"] = infer_mood_effects(doc["tags"])
        else:
            doc["moodEffects"] = [m.value for m in hobby.mood_effects]
        doc["createdAt"] = doc.get("createdAt") or utcnow()
        docs.append(doc)
    return docs


def seed_hobbies(db: Database, path: Path = DEFAULT_HOBBIES_PATH) -> int:
    docs = load_hobbies(path)
    db[HOBBIES_COLLECTION].delete_many({})
    if docs:
        db[HOBBIES_COLLECTION].insert_many(docs)
    logger.info("Seeded %d hobbies from %s", len(docs), path)
    return len(docs)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replace the hobby catalogue with a JSON file")
    parser.add_argument("path", nargs="?", type=Path, default=DEFAULT_HOBBIES_PATH)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        count = seed_hobbies(get_db(), args.path)
    except (OSError, ValueError, ValidationError, PyMongoError):
        logger.exception("Error seeding hobbies")
        return 1
    finally:
        close_client()
    print(f"Hobbies seeded successfully ({count} documents).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
