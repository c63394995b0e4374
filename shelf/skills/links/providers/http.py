"""Shared HTTP client handling for provider integrations."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

DEFAULT_TIMEOUT_SECONDS = 10.0


@asynccontextmanager
async def http_client(
    client: httpx.AsyncClient | None = None, timeout: float = DEFAULT_TIMEOUT_SECONDS
) -> AsyncIterator[httpx.AsyncClient]:
    """
    Yield an AsyncClient for one provider call

    An injected client is used as-is and left open for its owner to close;
    otherwise a new client is created and closed on exit.
    """
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned
