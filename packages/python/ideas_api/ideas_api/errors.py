"""Map idea domain errors onto HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ideas_repo import IdeaError


async def idea_error_handler(request: Request, exc: IdeaError) -> JSONResponse:
    logger.debug(
        "{method} {path} -> {status}: {message}",
        method=request.method,
        path=request.url.path,
        status=exc.status_code,
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the idea error handler on ``app``."""

    app.add_exception_handler(IdeaError, idea_error_handler)
