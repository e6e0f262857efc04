import logging
from typing import Annotated, Optional

from fastapi import Header, HTTPException, status

from app.db.database import get_user_collection

logger = logging.getLogger(__name__)


def get_current_user_id(x_user_id: Annotated[Optional[str], Header()] = None) -> str:

    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-ID header"
        )

    user_collection = get_user_collection()

    result = user_collection.update_one(
        {"_id": x_user_id},
        {"$setOnInsert": {"_id": x_user_id}},
        upsert=True,
    )
    if result.upserted_id is not None:
        logger.info("Registered new user %s", x_user_id)

    return x_user_id
