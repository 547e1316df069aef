"""Idea operations: validation, ownership checks and error classification."""

from __future__ import annotations

import re
from typing import Any, List, Optional, Union

from loguru import logger

from .errors import IdeaNotFoundError, InvalidIdeaError, PermissionDeniedError
from .models import CallerIdentity, DeleteConfirmation, Idea, IdeaFields, trimmed_or_none
from .store import IdeaStore
from .tags import RawTagsInput, normalize_tags

REQUIRED_FIELDS_MESSAGE = "Title, summary and description are required"
NOT_FOUND_MESSAGE = "Idea not found"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
# Caps above this are treated as unbounded.
MAX_LIMIT = 2**31 - 1


def parse_limit(raw: Union[int, str, None]) -> Optional[int]:
    """
    Interpret the optional listing cap.

    Text is read up to its first non-digit (``"2abc"`` -> 2). A cap that is
    missing, non-numeric, not positive or above ``MAX_LIMIT`` means
    "no limit" and yields ``None``.
    """

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(str(raw))
        if not match:
            return None
        value = int(match.group(1))
    return value if 0 < value <= MAX_LIMIT else None


def build_fields(
    title: Any,
    summary: Any,
    description: Any,
    tags: RawTagsInput = None,
) -> IdeaFields:
    """Validate the required text fields and normalize tags.

    Raises:
        InvalidIdeaError: if title, summary or description is missing or blank.
    """

    values = [trimmed_or_none(value) for value in (title, summary, description)]
    if not all(values):
        raise InvalidIdeaError(REQUIRED_FIELDS_MESSAGE)
    clean_title, clean_summary, clean_description = values
    return IdeaFields(
        title=clean_title,
        summary=clean_summary,
        description=clean_description,
        tags=normalize_tags(tags),
    )


class IdeaService:
    """The five idea operations, bound to a store."""

    def __init__(self, store: IdeaStore):
        self.store = store

    async def list_ideas(self, limit: Union[int, str, None] = None) -> List[Idea]:
        """Return ideas newest first, truncated to ``limit`` when it parses."""

        return await self.store.find_many(limit=parse_limit(limit))

    async def get_idea(self, idea_id: str) -> Idea:
        # Malformed ids are reported exactly like missing ones.
        if not self.store.is_valid_id(idea_id):
            raise IdeaNotFoundError(NOT_FOUND_MESSAGE)
        idea = await self.store.find_by_id(idea_id)
        if idea is None:
            raise IdeaNotFoundError(NOT_FOUND_MESSAGE)
        return idea

    async def _get_owned_idea(self, idea_id: str, caller: CallerIdentity, action: str) -> Idea:
        idea = await self.get_idea(idea_id)
        if idea.owner != caller.id:
            logger.warning(
                "User {user_id} denied {action} on idea {idea_id} owned by {owner}",
                user_id=caller.id,
                action=action,
                idea_id=idea_id,
                owner=idea.owner,
            )
            raise PermissionDeniedError(f"Not authorized to {action} this idea")
        return idea

    async def _raise_for_missed_write(self, idea_id: str, caller: CallerIdentity, action: str) -> None:
        """A conditional write matched nothing: the idea vanished or changed hands."""

        await self._get_owned_idea(idea_id, caller, action)
        raise PermissionDeniedError(f"Not authorized to {action} this idea")

    async def create_idea(
        self,
        *,
        title: Any,
        summary: Any,
        description: Any,
        tags: RawTagsInput = None,
        caller: CallerIdentity,
    ) -> Idea:
        """Persist a new idea owned by ``caller``."""

        fields = build_fields(title, summary, description, tags)
        idea = await self.store.insert(fields, owner=caller.id)
        logger.info("User {user_id} created idea {idea_id}", user_id=caller.id, idea_id=idea.id)
        return idea

    async def update_idea(
        self,
        idea_id: str,
        *,
        title: Any,
        summary: Any,
        description: Any,
        tags: RawTagsInput = None,
        caller: CallerIdentity,
    ) -> Idea:
        """
        Replace the mutable fields of an idea owned by ``caller``.

        Failures are checked in order: NotFound, then Forbidden, then
        InvalidInput. Nothing is written unless all three pass.
        """

        await self._get_owned_idea(idea_id, caller, "update")
        fields = build_fields(title, summary, description, tags)
        updated = await self.store.save(idea_id, caller.id, fields)
        if updated is None:
            await self._raise_for_missed_write(idea_id, caller, "update")
        logger.info("User {user_id} updated idea {idea_id}", user_id=caller.id, idea_id=idea_id)
        return updated

    async def delete_idea(self, idea_id: str, *, caller: CallerIdentity) -> DeleteConfirmation:
        """Remove an idea owned by ``caller``."""

        await self._get_owned_idea(idea_id, caller, "delete")
        if not await self.store.delete(idea_id, caller.id):
            await self._raise_for_missed_write(idea_id, caller, "delete")
        logger.info("User {user_id} deleted idea {idea_id}", user_id=caller.id, idea_id=idea_id)
        return DeleteConfirmation()
