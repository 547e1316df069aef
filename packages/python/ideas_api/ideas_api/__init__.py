"""Expose the Ideas FastAPI router and its integration helpers."""

from .dependencies import get_idea_service, get_idea_store
from .errors import register_exception_handlers
from .kratos_client import get_identity
from .router import router

__all__ = [
    "router",
    "register_exception_handlers",
    "get_identity",
    "get_idea_service",
    "get_idea_store",
]
