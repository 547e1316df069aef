"""Minimal MongoDB helpers shared across domain repositories.

Example usage in a domain repository:

    from db_core import get_db

    async def newest_ideas():
        cursor = get_db()["ideas"].find({}).sort("created_at", -1)
        return await cursor.to_list(length=None)
"""

from .settings import MongoSettings, settings
from .mongo import close_mongo_client, get_mongo_client, get_db, ping
from .typing import MongoDocument

__all__ = [
    "MongoSettings",
    "settings",
    "get_mongo_client",
    "get_db",
    "ping",
    "close_mongo_client",
    "MongoDocument",
]
