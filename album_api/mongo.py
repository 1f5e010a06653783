"""
Credential store connection (MongoDB user documents).

One ``AsyncMongoClient`` per process; the users collection is handed to
request handlers through the ``get_users_collection`` dependency.
"""
import logging
from typing import Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from album_api.config import get_settings

_logger = logging.getLogger("app.mongo")

settings = get_settings()

_client: Optional[AsyncMongoClient] = None


def get_mongo_client() -> AsyncMongoClient:
    """Return the process-wide client, creating it lazily (no I/O until first use)."""
    global _client
    if _client is None:
        _client = AsyncMongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        )
    return _client


def get_users_collection() -> AsyncCollection:
    """
    Dependency that provides the users collection.

    Usage:
        @router.get("/users/{user_id}")
        async def get_user(users = Depends(get_users_collection)):
            ...
    """
    client = get_mongo_client()
    return client[settings.mongo_db_name][settings.mongo_users_collection]


async def init_mongo(users: AsyncCollection = None) -> None:
    """Create the unique ``userID`` index."""
    users = users if users is not None else get_users_collection()
    await users.create_index([("userID", ASCENDING)], unique=True)
    _logger.info("Users collection index ensured", extra={"event": "lifecycle"})


async def ping_mongo() -> None:
    await get_mongo_client().admin.command("ping")


async def close_mongo() -> None:
    """Close the client if one was created."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
