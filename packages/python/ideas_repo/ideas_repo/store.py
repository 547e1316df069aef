"""Persistence boundary for ideas.

``IdeaStore`` is the narrow interface the operation handler depends on;
``MongoIdeaStore`` implements it with Motor. Writes that mutate or remove an
existing idea are conditional on its owner so a concurrent ownership change
can never be overwritten.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Protocol

from bson import ObjectId
from db_core import MongoDocument, get_db
from loguru import logger
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from .models import Idea, IdeaFields

COLLECTION_NAME = "ideas"


class IdeaStore(Protocol):
    """Async persistence operations required by ``IdeaService``."""

    def is_valid_id(self, idea_id: str) -> bool: ...

    async def insert(self, fields: IdeaFields, owner: str) -> Idea: ...

    async def find_by_id(self, idea_id: str) -> Optional[Idea]: ...

    async def find_many(self, limit: Optional[int] = None) -> List[Idea]: ...

    async def save(self, idea_id: str, owner: str, fields: IdeaFields) -> Optional[Idea]: ...

    async def delete(self, idea_id: str, owner: str) -> bool: ...


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _doc_to_model(doc: MongoDocument) -> Idea:
    return Idea(
        id=str(doc["_id"]),
        title=doc["title"],
        summary=doc["summary"],
        description=doc["description"],
        tags=list(doc.get("tags") or []),
        owner=str(doc["owner"]),
        created_at=doc["created_at"],
        updated_at=doc.get("updated_at") or doc["created_at"],
    )


class MongoIdeaStore:
    """``IdeaStore`` backed by the ``ideas`` collection."""

    def __init__(self, collection_name: str = COLLECTION_NAME):
        self.collection_name = collection_name

    def _collection(self):
        return get_db()[self.collection_name]

    def is_valid_id(self, idea_id: str) -> bool:
        return ObjectId.is_valid(idea_id)

    async def ensure_indexes(self) -> None:
        collection = self._collection()
        await collection.create_index([("created_at", DESCENDING), ("_id", DESCENDING)])
        await collection.create_index([("owner", ASCENDING)])
        logger.debug("Indexes ensured on {collection}", collection=self.collection_name)

    async def insert(self, fields: IdeaFields, owner: str) -> Idea:
        now = _now()
        doc = {
            **fields.model_dump(),
            "owner": owner,
            "created_at": now,
            "updated_at": now,
        }
        result = await self._collection().insert_one(doc)
        doc["_id"] = result.inserted_id
        return _doc_to_model(doc)

    async def find_by_id(self, idea_id: str) -> Optional[Idea]:
        doc = await self._collection().find_one({"_id": ObjectId(idea_id)})
        if not doc:
            return None
        return _doc_to_model(doc)

    async def find_many(self, limit: Optional[int] = None) -> List[Idea]:
        cursor = self._collection().find({}).sort(
            [("created_at", DESCENDING), ("_id", DESCENDING)]
        )
        if limit:
            cursor = cursor.limit(limit)
        return [_doc_to_model(doc) async for doc in cursor]

    async def save(self, idea_id: str, owner: str, fields: IdeaFields) -> Optional[Idea]:
        doc = await self._collection().find_one_and_update(
            {"_id": ObjectId(idea_id), "owner": owner},
            {"$set": {**fields.model_dump(), "updated_at": _now()}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return _doc_to_model(doc)

    async def delete(self, idea_id: str, owner: str) -> bool:
        result = await self._collection().delete_one({"_id": ObjectId(idea_id), "owner": owner})
        return result.deleted_count == 1
