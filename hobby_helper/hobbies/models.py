from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field, HttpUrl

from ..models import CamelModel


class Mood(str, Enum):
    stressed = "stressed"
    energized = "energized"
    creative = "creative"
    relaxed = "relaxed"
    neutral = "neutral"


class DifficultyLevel(CamelModel):
    level: str
    youtube_links: list[str] = Field(default_factory=list)


class HobbyLocation(CamelModel):
    name: str
    address: str = ""
    lat: float | None = None
    lng: float | None = None
    trial_available: bool = False


class HobbyOut(CamelModel):
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    duration_options: list[str] = Field(default_factory=list)
    location_options: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    difficulty_levels: list[DifficultyLevel] = Field(default_factory=list)
    locations: list[HobbyLocation] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    cost_estimate: str = ""
    safety_notes: str = ""
    wheelchair_accessible: bool = False
    eco_friendly: bool = False
    mood_effects: list[Mood] = Field(default_factory=list)
    created_at: datetime | None = None


# ── Custom hobby creation ────────────────────────────────────────────────


class DifficultyLevelIn(CamelModel):
    level: str = Field(..., min_length=3)
    youtube_links: list[HttpUrl] = Field(default_factory=list)


class HobbyLocationIn(CamelModel):
    name: str = Field(..., min_length=1)
    address: str = ""
    lat: float | None = None
    lng: float | None = None
    trial_available: bool = False


class HobbyCreate(CamelModel):
    name: str = Field(..., min_length=2)
    description: str = Field(..., min_length=10)
    duration_options: list[str] = Field(default_factory=list)
    location_options: list[str] = Field(default_factory=list)
    tags: list[str] = Field(..., min_length=1)
    difficulty_levels: list[DifficultyLevelIn] | None = None
    locations: list[HobbyLocationIn] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    cost_estimate: str = ""
    safety_notes: str = ""
    wheelchair_accessible: bool = False
    eco_friendly: bool = False
    mood_effects: list[Mood] | None = None


# ── Seed data ────────────────────────────────────────────────────────────


class DifficultyLevelSeed(CamelModel):
    level: str
    youtube_links: list[str]


class HobbyLocationSeed(CamelModel):
    name: str
    address: str
    lat: float
    lng: float
    trial_available: bool


class HobbySeed(CamelModel):
    """Strict schema for catalogue files: every field must be present."""

    name: str
    description: str
    duration_options: list[str]
    location_options: list[str]
    tags: list[str]
    difficulty_levels: list[DifficultyLevelSeed]
    locations: list[HobbyLocationSeed]
    equipment: list[str]
    cost_estimate: str
    safety_notes: str
    wheelchair_accessible: bool
    eco_friendly: bool
    mood_effects: list[Mood] | None = None
    created_at: datetime | None = None
