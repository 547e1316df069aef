"""Ideas repository: models, persistence and owner-checked operations."""

from .errors import IdeaError, IdeaNotFoundError, InvalidIdeaError, PermissionDeniedError
from .models import CallerIdentity, DeleteConfirmation, Idea, IdeaFields
from .service import IdeaService, build_fields, parse_limit
from .store import IdeaStore, MongoIdeaStore
from .tags import RawTagsInput, normalize_tags

__all__ = [
    "Idea",
    "IdeaFields",
    "CallerIdentity",
    "DeleteConfirmation",
    "IdeaError",
    "IdeaNotFoundError",
    "InvalidIdeaError",
    "PermissionDeniedError",
    "IdeaService",
    "IdeaStore",
    "MongoIdeaStore",
    "RawTagsInput",
    "build_fields",
    "normalize_tags",
    "parse_limit",
]
