"""Pydantic models describing ideas and the callers that own them."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Idea(BaseModel):
    """Representation of an idea entry stored in MongoDB."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    summary: str
    description: str
    tags: List[str] = Field(default_factory=list)
    owner: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class IdeaFields(BaseModel):
    """Validated, trimmed values for the four mutable fields of an idea."""

    title: str
    summary: str
    description: str
    tags: List[str] = Field(default_factory=list)


class CallerIdentity(BaseModel):
    """The authenticated caller, as resolved by the identity provider."""

    id: str = Field(min_length=1)
    traits: Dict[str, Any] = Field(default_factory=dict)


class DeleteConfirmation(BaseModel):
    message: str = "Idea Deleted"


def trimmed_or_none(value: Any) -> Optional[str]:
    """Return ``value`` stripped of whitespace, or ``None`` when blank or not text."""

    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None
