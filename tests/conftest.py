"""Shared fixtures: entry factories and an in-memory stand-in for a Mongo collection."""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.db import mood_store
from app.models.mood import MoodEntry
from app.routers.auth_dependency import get_current_user_id

USER_ID = "user-1"


def ts(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> int:
    """Epoch millis for a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, minute, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture()
def make_entry():
    def _make(mood, when, emotions=None, context_tags=None, energy=None):
        if isinstance(when, datetime):
            when = int(when.timestamp() * 1000)
        return MoodEntry(
            timestamp=when,
            mood=mood,
            emotions=emotions or [],
            context_tags=context_tags or [],
            energy=energy,
        )

    return _make


class FakeCursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def sort(self, key, direction=1):
        self._docs.sort(key=lambda d: d.get(key, 0), reverse=direction == -1)
        return self

    def __iter__(self):
        return iter(self._docs)


class FakeCollection:
    def __init__(self):
        self.docs = []

    @staticmethod
    def _matches(doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    def find(self, query=None):
        return FakeCursor(d for d in self.docs if self._matches(d, query or {}))

    def find_one(self, query):
        return next((d for d in self.docs if self._matches(d, query)), None)

    def insert_one(self, doc):
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc.get("_id"))

    def update_one(self, query, update, upsert=False):
        if self.find_one(query) is not None or not upsert:
            return SimpleNamespace(upserted_id=None)
        doc = {**query, **update.get("$setOnInsert", {})}
        self.docs.append(doc)
        return SimpleNamespace(upserted_id=doc.get("_id"))

    def delete_one(self, query):
        for i, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture()
def collection(monkeypatch):
    fake = FakeCollection()
    monkeypatch.setattr(mood_store, "get_mood_collection", lambda: fake)
    return fake


@pytest.fixture()
def client(collection):
    from app.main import app

    app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()
