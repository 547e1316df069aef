"""FastAPI dependencies wiring the idea service to its store."""

from functools import lru_cache

from ideas_repo import IdeaService, MongoIdeaStore


@lru_cache
def get_idea_store() -> MongoIdeaStore:
    return MongoIdeaStore()


def get_idea_service() -> IdeaService:
    """Return an ``IdeaService`` bound to the Mongo store; override in tests."""

    return IdeaService(get_idea_store())
