from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from hobby_helper.app import app
from hobby_helper.notifications.reminders import NUDGE_MESSAGES, build_nudge, build_rating_reminder

client = TestClient(app)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestRatingReminder:
    def test_fires_two_hours_later_by_default(self):
        reminder = build_rating_reminder("abc123", now=NOW)
        assert reminder.delay_seconds == 7200
        assert reminder.fire_at == NOW + timedelta(hours=2)

    def test_carries_hobby_id(self):
        reminder = build_rating_reminder("abc123", delay_seconds=5, now=NOW)
        assert reminder.data == {"hobbyId": "abc123"}
        assert reminder.title == "How was your hobby?"
        assert reminder.channel_id == "default"
        assert reminder.sound is True

    def test_serialises_camel_case(self):
        dumped = build_rating_reminder("abc123", now=NOW).model_dump(by_alias=True)
        assert "fireAt" in dumped
        assert "channelId" in dumped


class TestNudge:
    def test_message_comes_from_pool(self):
        nudge = build_nudge(rng=random.Random(7), now=NOW)
        assert nudge.body in NUDGE_MESSAGES
        assert nudge.title == "Quick nudge"
        assert nudge.data == {"type": "nudge"}

    def test_is_silent_on_its_own_channel(self):
        nudge = build_nudge(now=NOW)
        assert nudge.sound is False
        assert nudge.channel_id == "nudges"

    def test_same_seed_same_message(self):
        a = build_nudge(rng=random.Random(3), now=NOW)
        b = build_nudge(rng=random.Random(3), now=NOW)
        assert a.body == b.body

    def test_default_delay(self):
        nudge = build_nudge(now=NOW)
        assert nudge.fire_at - NOW == timedelta(seconds=30)


def test_nudge_endpoint():
    resp = client.get("/api/notifications/nudge")
    assert resp.status_code == 200
    body = resp.json()
    assert body["body"] in NUDGE_MESSAGES
    assert body["delaySeconds"] == 30
    assert body["channelId"] == "nudges"


def test_nudge_endpoint_custom_delay():
    resp = client.get("/api/notifications/nudge", params={"delaySeconds": 120})
    assert resp.json()["delaySeconds"] == 120


def test_nudge_endpoint_rejects_negative_delay():
    resp = client.get("/api/notifications/nudge", params={"delaySeconds": -1})
    assert resp.status_code == 400
