"""Shared pytest fixtures: an in-memory idea store and sample callers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from bson import ObjectId

from ideas_repo import CallerIdentity, Idea, IdeaFields, IdeaService

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class InMemoryIdeaStore:
    """IdeaStore double; every insert is one second newer than the last."""

    def __init__(self):
        self.docs: Dict[str, Idea] = {}
        self.writes = 0
        self._ticks = 0

    def _tick(self) -> datetime:
        self._ticks += 1
        return _EPOCH + timedelta(seconds=self._ticks)

    def is_valid_id(self, idea_id: str) -> bool:
        return ObjectId.is_valid(idea_id)

    async def insert(self, fields: IdeaFields, owner: str) -> Idea:
        now = self._tick()
        idea = Idea(
            id=str(ObjectId()),
            owner=owner,
            created_at=now,
            updated_at=now,
            **fields.model_dump(),
        )
        self.docs[idea.id] = idea
        self.writes += 1
        return idea

    async def find_by_id(self, idea_id: str) -> Optional[Idea]:
        return self.docs.get(idea_id)

    async def find_many(self, limit: Optional[int] = None) -> List[Idea]:
        ideas = sorted(self.docs.values(), key=lambda idea: (idea.created_at, idea.id), reverse=True)
        return ideas[:limit] if limit else ideas

    async def save(self, idea_id: str, owner: str, fields: IdeaFields) -> Optional[Idea]:
        current = self.docs.get(idea_id)
        if current is None or current.owner != owner:
            return None
        updated = current.model_copy(update={**fields.model_dump(), "updated_at": self._tick()})
        self.docs[idea_id] = updated
        self.writes += 1
        return updated

    async def delete(self, idea_id: str, owner: str) -> bool:
        current = self.docs.get(idea_id)
        if current is None or current.owner != owner:
            return False
        del self.docs[idea_id]
        self.writes += 1
        return True


@pytest.fixture()
def store() -> InMemoryIdeaStore:
    return InMemoryIdeaStore()


@pytest.fixture()
def service(store) -> IdeaService:
    return IdeaService(store)


@pytest.fixture()
def alice() -> CallerIdentity:
    return CallerIdentity(id="user-alice")


@pytest.fixture()
def bob() -> CallerIdentity:
    return CallerIdentity(id="user-bob")
