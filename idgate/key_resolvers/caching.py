"""Caching key resolver.

Wraps another KeyResolver with:
- A per-kid TTL cache of resolved keys
- At most one in-flight fetch per kid across concurrent callers
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, Dict, Tuple

import structlog

from idgate.core.key_resolver import KeyResolver

log = structlog.get_logger()


class CachingKeyResolver(KeyResolver):
    """TTL cache in front of another key resolver.

    Concurrent ``resolve`` calls for the same kid share a single call to the
    wrapped resolver. Failures are not cached: the next caller retries.

    Args:
        inner: The resolver that actually fetches keys
        ttl_seconds: How long to keep resolved keys. Defaults to 6 hours.
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        inner: KeyResolver,
        ttl_seconds: float = 21600,  # 6 hours
        clock: Callable[[], float] = time.monotonic,
    ):
        self.inner = inner
        self.ttl_seconds = ttl_seconds
        self._clock = clock

        # {kid: (key, expires_at)}
        self._cache: Dict[str, Tuple[Any, float]] = {}
        self._inflight: Dict[str, asyncio.Future] = {}

    async def resolve(self, kid: str) -> Any:
        # No await between the lookups and the insert below, so this section
        # is atomic with respect to other coroutines on the loop.
        cached = self._cache.get(kid)
        if cached is not None and cached[1] > self._clock():
            return cached[0]

        fetch = self._inflight.get(kid)
        if fetch is None:
            fetch = asyncio.ensure_future(self._fetch(kid))
            self._inflight[kid] = fetch
        else:
            log.debug("key_fetch_joined", kid=kid)

        # A cancelled caller must not cancel the fetch other callers wait on
        return await asyncio.shield(fetch)

    async def _fetch(self, kid: str) -> Any:
        try:
            key = await self.inner.resolve(kid)
        finally:
            self._inflight.pop(kid, None)

        self._cache[kid] = (key, self._clock() + self.ttl_seconds)
        log.debug("signing_key_cached", kid=kid, ttl_seconds=self.ttl_seconds)
        return key

    def clear(self) -> None:
        """Drop every cached key."""
        self._cache.clear()
