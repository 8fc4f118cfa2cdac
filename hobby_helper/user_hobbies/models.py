from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ..hobbies.models import HobbyOut
from ..models import CamelModel, ObjectIdStr


class UserHobbyCreate(CamelModel):
    user: ObjectIdStr
    hobby: ObjectIdStr
    performed_at: datetime
    rating: int | None = Field(default=None, ge=1, le=5)
    notes: str | None = None


class UserHobbyOut(CamelModel):
    id: str = Field(alias="_id")
    user: str
    hobby: HobbyOut | str | None = None
    performed_at: datetime
    rating: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
