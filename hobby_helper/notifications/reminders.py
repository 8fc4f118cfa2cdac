from __future__ import annotations

import random
from datetime import datetime, timedelta

from ..database.client import utcnow
from .models import Reminder

RATING_REMINDER_DELAY_SECONDS = 7200
NUDGE_DELAY_SECONDS = 30

NUDGE_MESSAGES = [
    "Let's try something creative today! 🎨",
    "Mini challenge: 10 mins of focused fun? 🎯",
    "How about a chill activity to reset? 🧊",
    "Feeling energetic? Try a quick burst! ⚡",
    "Call a friend and do something social? 🗣️",
    "Learn one new thing today. 🧠",
]


def build_rating_reminder(
    hobby_id: str,
    delay_seconds: int = RATING_REMINDER_DELAY_SECONDS,
    now: datetime | None = None,
) -> Reminder:
    """Reminder asking the user to rate a hobby they just started."""
    now = now or utcnow()
    return Reminder(
        title="How was your hobby?",
        body="Please rate your experience with the hobby.",
        data={"hobbyId": str(hobby_id)},
        delay_seconds=delay_seconds,
        fire_at=now + timedelta(seconds=delay_seconds),
        channel_id="default",
    )


def build_nudge(
    delay_seconds: int = NUDGE_DELAY_SECONDS,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> Reminder:
    """Silent nudge with a random encouragement message."""
    rng = rng or random.Random()
    now = now or utcnow()
    return Reminder(
        title="Quick nudge",
        body=rng.choice(NUDGE_MESSAGES),
        data={"type": "nudge"},
        delay_seconds=delay_seconds,
        fire_at=now + timedelta(seconds=delay_seconds),
        channel_id="nudges",
        sound=False,
    )
