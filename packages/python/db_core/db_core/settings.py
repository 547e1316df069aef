"""Configuration helpers for the MongoDB connection backing the ideas store.

Applications can create a new ``MongoSettings`` instance at startup and assign
it to ``db_core.settings`` before the first call to ``get_db`` to override the
defaults. If not overridden, values are read from the environment.
"""
from loguru import logger
import os

from pydantic import BaseModel, Field


class MongoSettings(BaseModel):
    """MongoDB connection settings shared by every repository."""

    uri: str = Field(
        default_factory=lambda: os.getenv("MONGO_URI", "mongodb://mongo_default:27017")
    )
    db_name: str = Field(default_factory=lambda: os.getenv("MONGO_DB_NAME", "ideas"))


settings: MongoSettings = MongoSettings()
logger.info("MongoSettings initialized with db_name={db_name}", db_name=settings.db_name)
