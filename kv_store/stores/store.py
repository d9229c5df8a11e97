"""Async store facade with null-safe get/set/delete/expire/ttl/keys operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final, Self

from kv_store.backends.protocol import TTL_MISSING, TTL_PERSISTENT
from kv_store.key_mapping import KeyMapper


if TYPE_CHECKING:
    from types import TracebackType

    from kv_store.backends import Backend


logger = logging.getLogger(__name__)

NO_EXPIRY: Final = TTL_PERSISTENT
"""``ttl_in_seconds`` result for a key that exists and never expires."""

DELETE_BATCH_SIZE: Final = 500


class KVStore:
    """Named key-value store over an async backend.

    A miss is reported as ``None`` and never raised. Backend failures surface
    as ``BackendError`` from every coroutine. The store owns its backend and
    releases it on ``close()`` or when leaving ``async with``.
    """

    def __init__(self, name: str, backend: Backend, *, namespace: str | None = None, sep: str = ":") -> None:
        """Create a store.

        Parameters
        ----------
        name
            Human-readable label returned by ``get_name``.
        backend
            Backend executing the primitive commands.
        namespace
            Optional prefix isolating this store's keys inside a shared backend.
        sep
            Separator between namespace and key.
        """
        super().__init__()
        self._name = name
        self._backend = backend
        self._mapper = KeyMapper(namespace=namespace, sep=sep)

    def get_name(self) -> str:
        """Return the configured store name."""
        return self._name

    async def get(self, key: str) -> str | None:
        """Return the value for key, or None when absent or expired."""
        return await self._backend.get(self._mapper.full_key(key))

    async def set(self, key: str, value: str, ttl_in_seconds: int | None = None) -> bool:
        """Write value under key.

        A positive ``ttl_in_seconds`` expires the entry that many seconds from
        now; otherwise the entry persists and any previous expiry is cleared.
        """
        ttl = ttl_in_seconds if ttl_in_seconds is not None and ttl_in_seconds > 0 else None
        await self._backend.set(self._mapper.full_key(key), value, ttl)
        logger.debug("store %s set %r (ttl=%s)", self._name, key, ttl)
        return True

    async def delete(self, key: str) -> bool | None:
        """Delete key. Return True when it existed and None when it did not."""
        removed = await self._backend.delete(self._mapper.full_key(key))
        return True if removed else None

    async def expire(self, key: str, ttl_in_seconds: int) -> bool | None:
        """Reset the TTL of an existing key. Return None when the key is absent."""
        applied = await self._backend.expire(self._mapper.full_key(key), ttl_in_seconds)
        return True if applied else None

    async def ttl_in_seconds(self, key: str) -> int | None:
        """Return remaining whole seconds for key.

        Returns None when the key is absent and ``NO_EXPIRY`` when it exists
        without an expiry.
        """
        remaining = await self._backend.ttl(self._mapper.full_key(key))
        if remaining == TTL_MISSING:
            return None
        if remaining < 0:
            return NO_EXPIRY
        return remaining

    async def keys(self, pattern: str | None = None) -> list[str]:
        """Return a snapshot of live keys, optionally filtered by a glob pattern."""
        backend_keys = await self._backend.scan(self._mapper.pattern(pattern))
        return [self._mapper.relative_key(key) for key in backend_keys if self._mapper.matches(key)]

    async def delete_all(self, pattern: str | None = None) -> bool:
        """Delete every key matching pattern, or all keys of the store.

        Returns True even when nothing matched.
        """
        backend_keys = await self._backend.scan(self._mapper.pattern(pattern))
        removed = 0
        for start in range(0, len(backend_keys), DELETE_BATCH_SIZE):
            removed += await self._backend.delete(*backend_keys[start : start + DELETE_BATCH_SIZE])
        logger.debug("store %s delete_all %r removed %d keys", self._name, pattern, removed)
        return True

    async def close(self) -> None:
        """Release the backend."""
        await self._backend.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        namespace = self._mapper.namespace
        return f"{type(self).__name__}(name={self._name!r}, namespace={namespace!r})"
