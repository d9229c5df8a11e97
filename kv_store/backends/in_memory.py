"""In-memory backend implementation."""

from __future__ import annotations

import asyncio
import logging
import math
import time
from typing import TYPE_CHECKING, override

from kv_store.glob import glob_match

from .protocol import TTL_MISSING, TTL_PERSISTENT, Backend


if TYPE_CHECKING:
    from collections.abc import Callable


logger = logging.getLogger(__name__)


class InMemoryAsyncBackend(Backend):
    """Simple in-memory backend for local development and tests.

    Expiry is enforced lazily on access against ``clock``. Pattern scans walk
    every key and filter client-side, so ``scan`` costs O(total keys).
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__()
        self._store: dict[str, str] = {}
        self._deadlines: dict[str, float] = {}
        self._clock = clock
        self._lock = asyncio.Lock()

    def _purge_if_expired(self, key: str) -> None:
        deadline = self._deadlines.get(key)
        if deadline is not None and deadline <= self._clock():
            _ = self._store.pop(key, None)
            del self._deadlines[key]

    def _live_keys(self) -> list[str]:
        for key in list(self._deadlines):
            self._purge_if_expired(key)
        return list(self._store)

    @override
    async def get(self, key: str) -> str | None:
        """Return raw value for key, or None when key does not exist."""
        async with self._lock:
            self._purge_if_expired(key)
            return self._store.get(key)

    @override
    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store raw value for key."""
        async with self._lock:
            self._store[key] = value
            if ttl_seconds is not None:
                self._deadlines[key] = self._clock() + ttl_seconds
            else:
                _ = self._deadlines.pop(key, None)

    @override
    async def delete(self, *keys: str) -> int:
        """Delete keys if present."""
        removed = 0
        async with self._lock:
            for key in keys:
                self._purge_if_expired(key)
                if self._store.pop(key, None) is not None:
                    removed += 1
                _ = self._deadlines.pop(key, None)
        return removed

    @override
    async def expire(self, key: str, ttl_seconds: int) -> bool:
        """Reset the countdown of an existing key."""
        async with self._lock:
            self._purge_if_expired(key)
            if key not in self._store:
                return False
            if ttl_seconds <= 0:
                del self._store[key]
                _ = self._deadlines.pop(key, None)
            else:
                self._deadlines[key] = self._clock() + ttl_seconds
            return True

    @override
    async def ttl(self, key: str) -> int:
        """Return remaining whole seconds, rounded like Redis ``TTL``."""
        async with self._lock:
            self._purge_if_expired(key)
            if key not in self._store:
                return TTL_MISSING
            deadline = self._deadlines.get(key)
            if deadline is None:
                return TTL_PERSISTENT
            return math.floor(deadline - self._clock() + 0.5)

    @override
    async def scan(self, pattern: str) -> list[str]:
        """List live keys matching the glob pattern."""
        async with self._lock:
            matching = [key for key in self._live_keys() if glob_match(pattern, key)]
        logger.debug("in-memory scan %r matched %d keys", pattern, len(matching))
        return matching

    @override
    async def close(self) -> None:
        """Release backend resources."""
        return
