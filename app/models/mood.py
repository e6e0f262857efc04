from typing import Any, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

MOOD_MIN = 0
MOOD_MAX = 10
NEUTRAL_MOOD = 5

# 0 is the best mood, 10 the worst
MOOD_SCALE = {
    0: "Motivated to live",
    1: "Happy to be alive",
    2: "Calm and content",
    3: "Neutral (neither good nor bad)",
    4: "Mildly anxious or down",
    5: "Moderate distress",
    6: "Frequent negative thoughts",
    7: "Severe distress, hard to communicate",
    8: "Overwhelmed, unable to function",
    9: "Experiencing suicidal thoughts",
    10: "Feeling intent to act on suicidal thoughts",
}


def get_mood_label(value: float) -> str:
    return MOOD_SCALE.get(int(round(value)), "Unknown")


class PyObjectId(ObjectId):

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:

        def validate_object_id(v: Any) -> ObjectId:
            if isinstance(v, ObjectId):
                return v
            if not ObjectId.is_valid(v):
                raise ValueError("Invalid objectid")
            return ObjectId(v)

        from_input_schema = core_schema.no_info_plain_validator_function(validate_object_id)

        return core_schema.json_or_python_schema(
            json_schema=from_input_schema,
            python_schema=from_input_schema,
            serialization=core_schema.to_string_ser_schema()
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {'type': 'string'}


class MoodEntry(BaseModel):
    """A single logged mood, as stored and as consumed by the analytics engine."""

    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    timestamp: int = Field(..., description="Epoch milliseconds")
    mood: int = Field(..., ge=MOOD_MIN, le=MOOD_MAX)
    note: Optional[str] = None
    emotions: List[str] = []
    context_tags: List[str] = []
    energy: Optional[int] = Field(None, ge=MOOD_MIN, le=MOOD_MAX)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


# Request body for creating an entry
class NewMoodRequest(BaseModel):
    mood: int = Field(..., ge=MOOD_MIN, le=MOOD_MAX)
    timestamp: Optional[int] = Field(None, description="Epoch milliseconds, defaults to now")
    note: Optional[str] = None
    emotions: List[str] = []
    context_tags: List[str] = []
    energy: Optional[int] = Field(None, ge=MOOD_MIN, le=MOOD_MAX)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "mood": 3,
                "timestamp": 1772442000000,
                "note": "Long walk after work",
                "emotions": ["Calm", "Tired"],
                "context_tags": ["Exercise"],
                "energy": 6,
            }
        }
    )
