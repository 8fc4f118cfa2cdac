from __future__ import annotations

from datetime import datetime

from ..models import CamelModel


class Reminder(CamelModel):
    title: str
    body: str
    data: dict[str, str]
    delay_seconds: int
    fire_at: datetime
    channel_id: str
    sound: bool = True
