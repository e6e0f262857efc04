import logging
import time
from typing import List

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, status

from app.db import mood_store
from app.models.mood import MoodEntry, NewMoodRequest
from app.routers.auth_dependency import get_current_user_id

logger = logging.getLogger(__name__)

ID_INVALID_MESSAGE = "Invalid entry id"
NOT_FOUND_MESSAGE = "Mood entry not found"

router = APIRouter(
    prefix="/moods",
    tags=["Moods"],
    dependencies=[Depends(get_current_user_id)]
)


def _parse_id(entry_id: str) -> ObjectId:
    if not ObjectId.is_valid(entry_id):
        raise HTTPException(status_code=400, detail=ID_INVALID_MESSAGE)
    return ObjectId(entry_id)


@router.post("", response_model=MoodEntry, status_code=status.HTTP_201_CREATED)
async def create_entry(
    request: NewMoodRequest,
    user_id: str = Depends(get_current_user_id)
):
    entry = MoodEntry(
        timestamp=request.timestamp if request.timestamp is not None else int(time.time() * 1000),
        mood=request.mood,
        note=request.note,
        emotions=request.emotions,
        context_tags=request.context_tags,
        energy=request.energy,
    )
    return mood_store.insert_entry(user_id, entry)


@router.get("", response_model=List[MoodEntry])
async def list_entries(user_id: str = Depends(get_current_user_id)):
    entries = mood_store.get_all_entries(user_id)
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)


@router.get("/{entry_id}", response_model=MoodEntry)
async def get_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id)
):
    entry = mood_store.find_entry(user_id, _parse_id(entry_id))
    if entry:
        return entry
    raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id)
):
    if not mood_store.delete_entry(user_id, _parse_id(entry_id)):
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    logger.info("Deleted mood entry %s for user %s", entry_id, user_id)
    return None
