"""FastAPI application composing the ideas API router."""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from db_core import close_mongo_client, ping
from ideas_api import get_idea_store, register_exception_handlers, router as ideas_router
from ideas_api.kratos_client import close_client as close_kratos_client

from .config import settings


def _configure_logging() -> None:
    level = settings.log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.info("Logger configured at {level} level", level=level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await get_idea_store().ensure_indexes()
    logger.info("{title} started", title=settings.api_title)
    yield
    await close_kratos_client()
    close_mongo_client()
    logger.info("{title} stopped", title=settings.api_title)


_configure_logging()

app = FastAPI(title=settings.api_title, version=settings.api_version, lifespan=lifespan)

# Allow the front-end origins (with credentials) to talk to this API.
if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS middleware added {origins}", origins=settings.cors_allow_origins)

register_exception_handlers(app)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Simple liveness endpoint for load balancers and probes."""

    return {"status": "ok"}


@app.get("/health/db", tags=["health"])
async def health_db() -> dict[str, bool]:
    """Readiness endpoint: succeeds only when MongoDB answers a ping."""

    try:
        return await ping()
    except Exception as exc:
        logger.warning("Mongo ping failed: {error}", error=exc)
        raise HTTPException(status_code=503, detail="Database unavailable") from exc


app.include_router(ideas_router, prefix=settings.api_prefix)

"""Run with:

    uvicorn core_server.main:app --host 0.0.0.0 --port 8000 --reload
"""
