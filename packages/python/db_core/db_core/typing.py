"""Typing helpers shared by Mongo-backed repositories."""

from typing import Any, Mapping

MongoDocument = Mapping[str, Any]
