from __future__ import annotations

import logging
from typing import Any

from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..config import get_settings
from ..database.client import serialize_document
from ..database.collections import HOBBIES_COLLECTION
from .models import SuggestionFilters

logger = logging.getLogger(__name__)

# (filter attribute, preference key, hobby document field)
ACCESSIBILITY_FIELDS = [
    ("wheelchair_accessible", "wheelchairAccessible", "wheelchairAccessible"),
    ("eco_friendly", "ecoFriendly", "ecoFriendly"),
    ("trial_available", "trialAvailable", "locations.trialAvailable"),
]


def _has_enabled_preference(user: dict[str, Any] | None) -> bool:
    if not user:
        return False
    preferences = user.get("preferences") or {}
    return any(value is True for value in preferences.values())


def build_match_stage(
    user: dict[str, Any] | None,
    filters: SuggestionFilters,
) -> dict[str, Any]:
    """Build the ``$match`` document for a suggestion request.

    Explicit filters always apply. Profile preferences fill in the
    accessibility fields the caller left unset, but only for a signed-in
    user with at least one preference switched on.
    """
    match: dict[str, Any] = {}

    if filters.duration:
        match["durationOptions"] = {"$in": [filters.duration]}
    if filters.location:
        match["locationOptions"] = {"$in": [filters.location]}
    if filters.mood:
        match["moodEffects"] = {"$in": [filters.mood.value]}

    use_preferences = _has_enabled_preference(user)
    preferences = (user or {}).get("preferences") or {}

    for attr, pref_key, field in ACCESSIBILITY_FIELDS:
        explicit = getattr(filters, attr)
        if explicit is not None:
            match[field] = explicit
        elif use_preferences and preferences.get(pref_key):
            match[field] = True

    return match


def _performed_hobby_ids(user: dict[str, Any]) -> set[str]:
    return {str(entry.get("hobby")) for entry in user.get("hobbies") or [] if entry.get("hobby")}


def _tag_overlap(hobby: dict[str, Any], favourite_tags: set[str]) -> int:
    return sum(1 for tag in hobby.get("tags") or [] if tag in favourite_tags)


def generate_recommendations(
    db: Database,
    user: dict[str, Any] | None,
    filters: SuggestionFilters,
    sample_size: int | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    settings = get_settings()
    sample_size = sample_size or settings.suggestion_sample_size
    limit = limit or settings.suggestion_limit

    match = build_match_stage(user, filters)
    logger.info(
        "Suggestions for %s with match stage %s",
        user["_id"] if user else "guest",
        match,
    )

    try:
        hobbies = list(db[HOBBIES_COLLECTION].aggregate([
            {"$match": match},
            {"$sample": {"size": sample_size}},
        ]))
    except PyMongoError:
        logger.error("Suggestion aggregation failed", exc_info=True)
        raise
    logger.debug("Sampled %d hobbies", len(hobbies))

    if filters.try_new and user:
        performed = _performed_hobby_ids(user)
        hobbies = [h for h in hobbies if str(h["_id"]) not in performed]
        logger.debug("%d hobbies left after removing performed ones", len(hobbies))

    # sorted() is stable: equal overlaps keep the order the sample came back in
    favourite_tags = set((user or {}).get("favouriteTags") or [])
    ranked = sorted(hobbies, key=lambda h: _tag_overlap(h, favourite_tags), reverse=True)

    return [serialize_document(h) for h in ranked[:limit]]
