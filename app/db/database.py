import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure

from app.config import settings

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        client = MongoClient(settings.mongo_uri)
        try:
            client.admin.command("ping")
        except ConnectionFailure as e:
            logger.error("Could not connect to MongoDB at %s: %s", settings.mongo_uri, e)
            client.close()
            raise
        logger.info("Connected to MongoDB, database %r", settings.db_name)
        _client = client
    return _client


def get_database() -> Database:
    return get_client()[settings.db_name]


def get_mood_collection():
    return get_database()["mood_entries"]


def get_user_collection():
    return get_database()["users"]
