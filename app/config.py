"""
Application configuration.

Values come from environment variables (a local .env file is honoured
through python-dotenv) with defaults suitable for local development.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    """Runtime settings for the mood insights service."""

    mongo_uri: str = Field(default="mongodb://localhost:27017", description="MongoDB connection string")
    db_name: str = Field(default="mood_insights", description="Database name")
    log_level: str = Field(default="INFO", description="Root logging level")
    daily_window_days: int = Field(default=90, ge=1, description="Default day window for daily trends")
    weekly_window_weeks: int = Field(default=52, ge=1, description="Default week window for weekly trends")
    max_patterns: int = Field(default=3, ge=1, description="Default number of patterns returned")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
            db_name=os.getenv("DB_NAME", "mood_insights"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            daily_window_days=int(os.getenv("DAILY_WINDOW_DAYS", "90")),
            weekly_window_weeks=int(os.getenv("WEEKLY_WINDOW_WEEKS", "52")),
            max_patterns=int(os.getenv("MAX_PATTERNS", "3")),
        )


settings = Settings.from_env()
