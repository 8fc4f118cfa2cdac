from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ..models import CamelModel, ObjectIdStr
from ..notifications.models import Reminder


class Preferences(CamelModel):
    wheelchair_accessible: bool = False
    eco_friendly: bool = False
    trial_available: bool = False


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    favourite_tags: list[str] = Field(default_factory=list)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    token: str


class UserUpdate(CamelModel):
    name: str | None = None
    email: str | None = None
    favourite_tags: list[str] | None = None
    password: str | None = None
    preferences: Preferences | None = None


class PerformedHobby(CamelModel):
    hobby: str
    performed_at: datetime
    notes: str | None = None


class UserOut(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    favourite_tags: list[str] = Field(default_factory=list)
    hobbies: list[PerformedHobby] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class HobbyHistoryItem(CamelModel):
    id: str
    hobby_id: str | None = None
    name: str
    date: datetime
    duration: str = "N/A"
    rating: int = 0
    notes: str = ""


class UserProfile(UserOut):
    hobby_history: list[HobbyHistoryItem] = Field(default_factory=list)


class StartHobbyRequest(CamelModel):
    hobby_id: ObjectIdStr
    performed_at: datetime | None = None
    notes: str | None = None
    delay_seconds: int = Field(default=7200, ge=0)


class StartHobbyResponse(CamelModel):
    entry: PerformedHobby
    reminder: Reminder
