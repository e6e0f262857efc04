"""
Read/write access to stored mood entries.

This is the boundary where stored documents become `MoodEntry` objects.
Documents that do not validate (no timestamp, mood or energy outside 0-10)
are skipped and logged, so the analytics services only ever see
well-formed entries.
"""

import logging
from typing import List, Optional

from bson import ObjectId
from pydantic import ValidationError

from app.db.database import get_mood_collection
from app.models.mood import MoodEntry

logger = logging.getLogger(__name__)


def _to_entry(doc: dict) -> Optional[MoodEntry]:
    try:
        return MoodEntry.model_validate(doc)
    except ValidationError as e:
        logger.warning("Skipping malformed mood entry %s: %s", doc.get("_id"), e.errors())
        return None


def get_all_entries(user_id: str) -> List[MoodEntry]:
    collection = get_mood_collection()
    cursor = collection.find({"user_id": user_id}).sort("timestamp", 1)

    entries = []
    for doc in cursor:
        entry = _to_entry(doc)
        if entry is not None:
            entries.append(entry)
    return entries


def find_entry(user_id: str, entry_id: ObjectId) -> Optional[MoodEntry]:
    doc = get_mood_collection().find_one({"_id": entry_id, "user_id": user_id})
    if doc is None:
        return None
    return _to_entry(doc)


def insert_entry(user_id: str, entry: MoodEntry) -> MoodEntry:
    doc = entry.model_dump(by_alias=True)
    doc["_id"] = entry.id
    doc["user_id"] = user_id
    get_mood_collection().insert_one(doc)
    logger.info("Stored mood entry %s for user %s", entry.id, user_id)
    return entry


def delete_entry(user_id: str, entry_id: ObjectId) -> bool:
    result = get_mood_collection().delete_one({"_id": entry_id, "user_id": user_id})
    return result.deleted_count > 0
