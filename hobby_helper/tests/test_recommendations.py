from __future__ import annotations

from unittest.mock import MagicMock

from bson import ObjectId
from fastapi.testclient import TestClient

from hobby_helper.app import app
from hobby_helper.hobbies.models import Mood
from hobby_helper.recommendations.models import SuggestionFilters
from hobby_helper.recommendations.retrieval import build_match_stage, generate_recommendations

client = TestClient(app)


def _user(**overrides):
    user = {
        "_id": ObjectId(),
        "favouriteTags": [],
        "hobbies": [],
        "preferences": {"wheelchairAccessible": False, "ecoFriendly": False, "trialAvailable": False},
    }
    user.update(overrides)
    return user


def _fake_db(hobbies):
    db = MagicMock()
    db.__getitem__.return_value.aggregate.return_value = list(hobbies)
    return db


def _hobby(name, tags=(), **extra):
    return {"_id": ObjectId(), "name": name, "tags": list(tags), **extra}


def _insert_hobby(db, name, **overrides):
    doc = {
        "name": name,
        "description": "",
        "durationOptions": ["1 hour"],
        "locationOptions": ["Indoor"],
        "tags": [],
        "locations": [{"name": "Studio", "address": "", "lat": None, "lng": None, "trialAvailable": False}],
        "wheelchairAccessible": False,
        "ecoFriendly": False,
        "moodEffects": ["neutral"],
    }
    doc.update(overrides)
    return str(db["hobbies"].insert_one(doc).inserted_id)


def _login(c, **profile):
    token = c.post("/api/register", json={
        "name": "Ada", "email": "ada@example.com", "password": "pw", **profile,
    }).json()["token"]
    return {"Authorization": f"Bearer {token}"}


# ── Match stage ──────────────────────────────────────────────────────────


class TestBuildMatchStage:
    def test_guest_without_filters_matches_everything(self):
        assert build_match_stage(None, SuggestionFilters()) == {}

    def test_duration_location_and_mood(self):
        filters = SuggestionFilters(duration="30 min", location="Outdoor", mood=Mood.relaxed)
        assert build_match_stage(None, filters) == {
            "durationOptions": {"$in": ["30 min"]},
            "locationOptions": {"$in": ["Outdoor"]},
            "moodEffects": {"$in": ["relaxed"]},
        }

    def test_guest_gets_only_explicit_flags(self):
        filters = SuggestionFilters(eco_friendly=False, trial_available=True)
        assert build_match_stage(None, filters) == {
            "ecoFriendly": False,
            "locations.trialAvailable": True,
        }

    def test_user_preferences_fill_unset_flags(self):
        user = _user(preferences={"wheelchairAccessible": True, "ecoFriendly": False, "trialAvailable": True})
        assert build_match_stage(user, SuggestionFilters()) == {
            "wheelchairAccessible": True,
            "locations.trialAvailable": True,
        }

    def test_explicit_filter_overrides_preference(self):
        user = _user(preferences={"wheelchairAccessible": True, "ecoFriendly": True, "trialAvailable": False})
        filters = SuggestionFilters(wheelchair_accessible=False)
        assert build_match_stage(user, filters) == {
            "wheelchairAccessible": False,
            "ecoFriendly": True,
        }

    def test_user_without_enabled_preferences_behaves_like_guest(self):
        user = _user()
        filters = SuggestionFilters(eco_friendly=True)
        assert build_match_stage(user, filters) == {"ecoFriendly": True}

    def test_user_with_missing_preferences(self):
        user = _user(preferences=None)
        assert build_match_stage(user, SuggestionFilters()) == {}


# ── Sampling, exclusion and ranking ──────────────────────────────────────


class TestGenerateRecommendations:
    def test_pipeline_is_match_then_sample(self):
        db = _fake_db([])
        generate_recommendations(db, None, SuggestionFilters(duration="1 hour"), sample_size=10)
        pipeline = db.__getitem__.return_value.aggregate.call_args.args[0]
        assert pipeline == [
            {"$match": {"durationOptions": {"$in": ["1 hour"]}}},
            {"$sample": {"size": 10}},
        ]

    def test_ranks_by_favourite_tag_overlap(self):
        a = _hobby("A", ["social"])
        b = _hobby("B", ["art", "creative"])
        c = _hobby("C", ["art"])
        user = _user(favouriteTags=["art", "creative"])
        result = generate_recommendations(_fake_db([a, b, c]), user, SuggestionFilters(), limit=3)
        assert [h["name"] for h in result] == ["B", "C", "A"]

    def test_ties_keep_sampled_order(self):
        hobbies = [_hobby(n, ["art"]) for n in ("first", "second", "third")]
        user = _user(favouriteTags=["art"])
        result = generate_recommendations(_fake_db(hobbies), user, SuggestionFilters(), limit=3)
        assert [h["name"] for h in result] == ["first", "second", "third"]

    def test_guest_keeps_sampled_order(self):
        hobbies = [_hobby(n, ["art"]) for n in ("x", "y")]
        result = generate_recommendations(_fake_db(hobbies), None, SuggestionFilters(), limit=3)
        assert [h["name"] for h in result] == ["x", "y"]

    def test_limit_applies_after_ranking(self):
        hobbies = [_hobby(str(i)) for i in range(5)] + [_hobby("fav", ["art"])]
        user = _user(favouriteTags=["art"])
        result = generate_recommendations(_fake_db(hobbies), user, SuggestionFilters(), limit=3)
        assert len(result) == 3
        assert result[0]["name"] == "fav"

    def test_try_new_drops_performed_hobbies(self):
        done = _hobby("done")
        fresh = _hobby("fresh")
        user = _user(hobbies=[{"hobby": done["_id"], "performedAt": None}])
        result = generate_recommendations(_fake_db([done, fresh]), user, SuggestionFilters(try_new=True))
        assert [h["name"] for h in result] == ["fresh"]

    def test_performed_hobbies_kept_without_try_new(self):
        done = _hobby("done")
        user = _user(hobbies=[{"hobby": done["_id"], "performedAt": None}])
        result = generate_recommendations(_fake_db([done]), user, SuggestionFilters(try_new=False))
        assert [h["name"] for h in result] == ["done"]

    def test_try_new_ignored_for_guests(self):
        result = generate_recommendations(_fake_db([_hobby("a")]), None, SuggestionFilters(try_new=True))
        assert len(result) == 1

    def test_ids_are_serialised(self):
        hobby = _hobby("a")
        result = generate_recommendations(_fake_db([hobby]), None, SuggestionFilters())
        assert result[0]["_id"] == str(hobby["_id"])


# ── Endpoint ─────────────────────────────────────────────────────────────


def test_suggestions_for_guest_returns_at_most_three(db):
    for i in range(6):
        _insert_hobby(db, f"Hobby {i}")
    resp = client.get("/api/hobbies/suggestions")
    assert resp.status_code == 200
    assert len(resp.json()) == 3


def test_suggestions_empty_catalogue():
    resp = client.get("/api/hobbies/suggestions")
    assert resp.status_code == 200
    assert resp.json() == []


def test_suggestions_apply_query_filters(db):
    _insert_hobby(db, "Accessible", wheelchairAccessible=True, durationOptions=["30 min"])
    _insert_hobby(db, "Stairs", wheelchairAccessible=False, durationOptions=["30 min"])
    _insert_hobby(db, "Long", wheelchairAccessible=True, durationOptions=["2 hours"])
    resp = client.get("/api/hobbies/suggestions", params={"wheelchairAccessible": "true", "duration": "30 min"})
    assert [h["name"] for h in resp.json()] == ["Accessible"]


def test_suggestions_filter_on_trial_locations(db):
    _insert_hobby(db, "Trial", locations=[{"name": "Gym", "trialAvailable": True}])
    _insert_hobby(db, "NoTrial")
    resp = client.get("/api/hobbies/suggestions", params={"trialAvailable": "true"})
    assert [h["name"] for h in resp.json()] == ["Trial"]


def test_suggestions_filter_on_mood(db):
    _insert_hobby(db, "Calm", moodEffects=["relaxed"])
    _insert_hobby(db, "Loud", moodEffects=["energized"])
    resp = client.get("/api/hobbies/suggestions", params={"mood": "relaxed"})
    assert [h["name"] for h in resp.json()] == ["Calm"]


def test_suggestions_reject_unknown_mood():
    resp = client.get("/api/hobbies/suggestions", params={"mood": "sleepy"})
    assert resp.status_code == 400


def test_suggestions_use_profile_preferences(db):
    _insert_hobby(db, "Eco", ecoFriendly=True)
    _insert_hobby(db, "Plastic", ecoFriendly=False)
    headers = _login(client)
    client.patch("/api/users/profile", headers=headers, json={"preferences": {"ecoFriendly": True}})

    resp = client.get("/api/hobbies/suggestions", headers=headers)
    assert [h["name"] for h in resp.json()] == ["Eco"]

    resp = client.get("/api/hobbies/suggestions", headers=headers, params={"ecoFriendly": "false"})
    assert [h["name"] for h in resp.json()] == ["Plastic"]


def test_suggestions_try_new_excludes_started_hobbies(db):
    done = _insert_hobby(db, "Done")
    _insert_hobby(db, "Fresh")
    headers = _login(client)
    client.post("/api/users/history", headers=headers, json={"hobbyId": done})

    resp = client.get("/api/hobbies/suggestions", headers=headers, params={"tryNew": "true"})
    assert [h["name"] for h in resp.json()] == ["Fresh"]


def test_suggestions_rank_by_favourite_tags(db):
    _insert_hobby(db, "Plain", tags=["social"])
    _insert_hobby(db, "Match", tags=["art"])
    headers = _login(client, favouriteTags=["art"])
    resp = client.get("/api/hobbies/suggestions", headers=headers)
    assert resp.json()[0]["name"] == "Match"


def test_suggestions_treat_bad_token_as_guest(db):
    _insert_hobby(db, "Any")
    resp = client.get("/api/hobbies/suggestions", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 200
    assert len(resp.json()) == 1


def test_suggestions_reject_unparseable_flag():
    resp = client.get("/api/hobbies/suggestions", params={"wheelchairAccessible": "maybe"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation failed"
