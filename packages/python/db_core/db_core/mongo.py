"""Async MongoDB helpers built on top of Motor.

Only generic utilities live here; the ideas repository builds its store and
ownership checks on top of these helpers."""

from functools import lru_cache
from typing import Any

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .settings import settings


@lru_cache
def get_mongo_client() -> AsyncIOMotorClient:
    """Return a cached Motor client configured via ``db_core.settings``."""

    return AsyncIOMotorClient(settings.uri)


def get_db() -> AsyncIOMotorDatabase:
    """Return the application database named by ``settings.db_name``."""

    client = get_mongo_client()
    return client[settings.db_name]


async def ping() -> dict[str, Any]:
    """Run a ``ping`` command against the configured MongoDB server."""

    db = get_db()
    await db.command("ping")
    return {"ok": True}


def close_mongo_client() -> None:
    """Close the cached client, if one was created, and forget it."""

    if get_mongo_client.cache_info().currsize:
        get_mongo_client().close()
        logger.debug("Mongo client closed")
    get_mongo_client.cache_clear()
