"""Shared HTTP plumbing for the generation API clients."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp


class GenerationError(Exception):
    """Raised when a generation API returns an unusable response."""


class HTTPClient:
    """Base for API clients that either own per-call sessions or reuse one.

    A session passed to the constructor is reused and never closed by the
    client; otherwise every call opens and closes its own session.
    """

    def __init__(self, timeout: float, session: aiohttp.ClientSession | None = None):
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session

    @asynccontextmanager
    async def _open_session(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return

        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            yield session
