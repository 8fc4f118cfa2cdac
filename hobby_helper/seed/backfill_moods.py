"""
Fill in ``moodEffects`` for hobbies created before moods existed.

Usage:
    python -m hobby_helper.seed.backfill_moods --dry-run
    python -m hobby_helper.seed.backfill_moods
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from pymongo import UpdateOne
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..database.client import close_client, get_db
from ..database.collections import HOBBIES_COLLECTION
from ..hobbies.moods import infer_mood_effects

logger = logging.getLogger(__name__)

MISSING_MOODS_QUERY: dict[str, Any] = {
    "$or": [{"moodEffects": {"$exists": False}}, {"moodEffects": {"$size": 0}}]
}
BATCH_SIZE = 500


def preview_backfill(db: Database, limit: int = 10) -> list[dict[str, Any]]:
    """Show what a backfill would write, without touching the collection."""
    cursor = db[HOBBIES_COLLECTION].find(MISSING_MOODS_QUERY, {"name": 1, "tags": 1}).limit(limit)
    return [
        {"name": doc.get("name"), "tags": doc.get("tags") or [], "moods": infer_mood_effects(doc.get("tags"))}
        for doc in cursor
    ]


def backfill_moods(db: Database, batch_size: int = BATCH_SIZE) -> dict[str, int]:
    collection = db[HOBBIES_COLLECTION]
    updated = 0
    ops: list[UpdateOne] = []

    for doc in collection.find(MISSING_MOODS_QUERY, {"tags": 1}):
        moods = infer_mood_effects(doc.get("tags"))
        ops.append(UpdateOne({"_id": doc["_id"]}, {"$set": {"moodEffects": moods}}))
        if len(ops) >= batch_size:
            updated += collection.bulk_write(ops, ordered=False).modified_count
            ops = []
            logger.info("...updated so far: %d", updated)

    if ops:
        updated += collection.bulk_write(ops, ordered=False).modified_count

    remaining = collection.count_documents(MISSING_MOODS_QUERY)
    return {"updated": updated, "remaining": remaining}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Backfill hobby moodEffects from tags")
    parser.add_argument("--dry-run", "--dryRun", dest="dry_run", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        db = get_db()
        total_missing = db[HOBBIES_COLLECTION].count_documents(MISSING_MOODS_QUERY)
        print(f"Hobbies missing moodEffects: {total_missing}")
        if total_missing == 0:
            print("Nothing to backfill.")
            return 0

        if args.dry_run:
            print("Dry run: showing up to 10 examples that would be updated")
            for item in preview_backfill(db):
                print(f"  {item['name']} -> {item['moods']} (from tags: {item['tags']})")
            print("Run again without --dry-run to apply changes.")
            return 0

        result = backfill_moods(db)
        print(f"Backfill complete. Updated {result['updated']}. Remaining without moods: {result['remaining']}")
        return 0
    except PyMongoError:
        logger.exception("Backfill error")
        return 1
    finally:
        close_client()


if __name__ == "__main__":
    sys.exit(main())
