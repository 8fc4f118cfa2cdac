from __future__ import annotations

import mongomock
import pytest

from hobby_helper.database.client import ensure_indexes, set_database


@pytest.fixture(autouse=True)
def db():
    """A fresh in-memory database for every test."""
    database = mongomock.MongoClient()["hobby_helper_test"]
    ensure_indexes(database)
    set_database(database)
    yield database
    set_database(None)
