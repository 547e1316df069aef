"""Configuration for the ideas API package."""

import os

from pydantic import BaseModel, Field


class IdeasApiSettings(BaseModel):
    """Settings for interacting with the identity provider."""

    kratos_public_url: str = Field(
        default_factory=lambda: os.getenv("KRATOS_PUBLIC_URL", "http://kratos:4433")
    )
    timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("KRATOS_TIMEOUT_SECONDS", "5.0"))
    )


settings = IdeasApiSettings()
