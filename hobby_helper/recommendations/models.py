from __future__ import annotations

from fastapi import Query
from pydantic import BaseModel

from ..hobbies.models import Mood


class SuggestionFilters(BaseModel):
    duration: str | None = None
    location: str | None = None
    mood: Mood | None = None
    try_new: bool | None = None
    wheelchair_accessible: bool | None = None
    eco_friendly: bool | None = None
    trial_available: bool | None = None


def suggestion_filters(
    duration: str | None = Query(default=None),
    location: str | None = Query(default=None),
    mood: Mood | None = Query(default=None),
    try_new: bool | None = Query(default=None, alias="tryNew"),
    wheelchair_accessible: bool | None = Query(default=None, alias="wheelchairAccessible"),
    eco_friendly: bool | None = Query(default=None, alias="ecoFriendly"),
    trial_available: bool | None = Query(default=None, alias="trialAvailable"),
) -> SuggestionFilters:
    """FastAPI dependency reading the suggestion filters from the query string."""
    return SuggestionFilters(
        duration=duration or None,
        location=location or None,
        mood=mood,
        try_new=try_new,
        wheelchair_accessible=wheelchair_accessible,
        eco_friendly=eco_friendly,
        trial_available=trial_available,
    )
