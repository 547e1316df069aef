"""Kratos integration helpers for FastAPI dependencies."""

from __future__ import annotations

import time
from typing import Optional

from fastapi import HTTPException, Request
import httpx
from loguru import logger

from ideas_repo import CallerIdentity

from .config import settings

# ---------------------------------------------------------------------------
# Shared HTTP client
# ---------------------------------------------------------------------------

_client: httpx.AsyncClient | None = None


def _timeout_value(timeout: Optional[float]) -> float:
    return timeout if timeout is not None else settings.timeout_seconds


def _get_client() -> httpx.AsyncClient:
    global _client
    if _client is None:
        _client = httpx.AsyncClient()
    return _client


async def close_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


def _credential_headers(request: Request) -> dict[str, str]:
    """Pick the credentials Kratos understands out of the inbound request."""

    session_token = request.headers.get("x-session-token")
    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if not session_token and scheme.lower() == "bearer" and token.strip():
        session_token = token.strip()
    if session_token:
        return {"X-Session-Token": session_token}

    cookies = request.headers.get("cookie")
    if cookies:
        return {"Cookie": cookies}
    return {}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def get_current_identity(request: Request, *, timeout: Optional[float] = None) -> CallerIdentity:
    """Retrieve the current identity via Kratos sessions API."""

    headers = _credential_headers(request)
    if not headers:
        raise HTTPException(status_code=401, detail="Not authenticated")

    url = f"{settings.kratos_public_url.rstrip('/')}/sessions/whoami"

    client = _get_client()
    start = time.perf_counter()
    try:
        resp = await client.get(
            url,
            headers=headers,
            timeout=_timeout_value(timeout),
        )
    except httpx.RequestError as exc:
        duration = (time.perf_counter() - start) * 1000
        logger.warning(
            "Kratos whoami request failed after {duration:.2f} ms: {error}",
            duration=duration,
            error=exc,
        )
        raise HTTPException(status_code=502, detail="Identity service unavailable") from exc

    duration = (time.perf_counter() - start) * 1000
    logger.debug(
        "Kratos whoami responded with {status} in {duration:.2f} ms",
        status=resp.status_code,
        duration=duration,
    )

    if resp.status_code == 200:
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        identity = payload.get("identity") if isinstance(payload, dict) else None
        if isinstance(identity, dict) and identity.get("id"):
            return CallerIdentity(
                id=str(identity["id"]),
                traits=identity.get("traits") or {},
            )
        raise HTTPException(status_code=502, detail="Identity response missing identity")

    if resp.status_code in (401, 403):
        raise HTTPException(status_code=401, detail="Not authenticated")

    raise HTTPException(status_code=502, detail="Identity service error")


async def get_identity(request: Request) -> CallerIdentity:
    """
    Dependency wrapper that caches the identity on the request state so
    subsequent dependencies can reuse it.
    """

    cached = getattr(request.state, "identity", None)
    if cached is not None:
        return cached

    identity = await get_current_identity(request)
    request.state.identity = identity
    return identity
