"""FastAPI router exposing Idea operations."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from ideas_repo import CallerIdentity, DeleteConfirmation, Idea, IdeaService

from .dependencies import get_idea_service
from .kratos_client import get_identity

router = APIRouter(prefix="/ideas", tags=["ideas"])


def _body_fields(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        payload = {}
    return {
        "title": payload.get("title"),
        "summary": payload.get("summary"),
        "description": payload.get("description"),
        "tags": payload.get("tags"),
    }


@router.get("", response_model=list[Idea])
async def list_ideas(
    limit: str | None = Query(default=None, alias="_limit"),
    service: IdeaService = Depends(get_idea_service),
):
    """Return all ideas, newest first, optionally capped by ``_limit``."""

    return await service.list_ideas(limit=limit)


@router.get("/{idea_id}", response_model=Idea)
async def get_idea(
    idea_id: str,
    service: IdeaService = Depends(get_idea_service),
):
    """Return a single idea."""

    return await service.get_idea(idea_id)


@router.post("", response_model=Idea, status_code=201)
async def create_idea(
    payload: Any = Body(default=None),
    identity: CallerIdentity = Depends(get_identity),
    service: IdeaService = Depends(get_idea_service),
):
    """Create an idea owned by the requesting identity."""

    return await service.create_idea(**_body_fields(payload), caller=identity)


@router.put("/{idea_id}", response_model=Idea)
async def update_idea(
    idea_id: str,
    payload: Any = Body(default=None),
    identity: CallerIdentity = Depends(get_identity),
    service: IdeaService = Depends(get_idea_service),
):
    """Replace title, summary, description and tags of an owned idea."""

    return await service.update_idea(idea_id, **_body_fields(payload), caller=identity)


@router.delete("/{idea_id}", response_model=DeleteConfirmation)
async def delete_idea(
    idea_id: str,
    identity: CallerIdentity = Depends(get_identity),
    service: IdeaService = Depends(get_idea_service),
):
    """Delete an owned idea."""

    return await service.delete_idea(idea_id, caller=identity)
