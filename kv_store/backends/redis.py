"""Redis-compatible backend implementation."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from inspect import isawaitable
from typing import TYPE_CHECKING, Any, override


try:
    import redis.asyncio as redis_async
    from redis.exceptions import RedisError
except ImportError:  # pragma: no cover - exercised when dependency is absent
    redis_async = None
    RedisError = None

from kv_store.errors import BackendError

from .protocol import Backend


if TYPE_CHECKING:
    from collections.abc import Iterator


logger = logging.getLogger(__name__)

SCAN_COUNT = 500


def _normalize_string(value: str | bytes | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode()
    return value


def _wrapped_errors() -> tuple[type[BaseException], ...]:
    if RedisError is None:
        return (OSError,)
    return (RedisError, OSError)


@contextmanager
def _backend_errors(command: str) -> Iterator[None]:
    try:
        yield
    except _wrapped_errors() as error:
        logger.warning("redis %s failed: %s", command, error)
        msg = f"redis {command} failed: {error}"
        raise BackendError(msg) from error


class RedisBackend(Backend):
    """Redis-compatible async backend using ``redis.asyncio`` client APIs.

    Expiry and pattern matching are delegated to the server (``EX``,
    ``EXPIRE``, ``TTL`` and ``SCAN MATCH``).
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        client: Any | None = None,
        socket_timeout: float | None = None,
    ) -> None:
        """Create a backend from URL or an injected async client.

        Parameters
        ----------
        url
            Redis connection URL used when ``client`` is not provided.
        client
            Optional injected client with
            ``get/set/delete/expire/ttl/scan_iter/aclose`` API.
        socket_timeout
            Seconds before a command round-trip fails with ``BackendError``.
        """
        super().__init__()
        self._url = url
        if client is not None:
            self._client = client
            return

        if redis_async is None:
            msg = "redis dependency is required for RedisBackend; install with `uv add redis`"
            raise BackendError(msg)

        self._client = redis_async.from_url(url, decode_responses=True, socket_timeout=socket_timeout)

    @override
    async def get(self, key: str) -> str | None:
        """Return raw value for key, or None when key does not exist."""
        with _backend_errors("GET"):
            return _normalize_string(await self._client.get(key))

    @override
    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store raw value for key, with ``EX`` when a TTL is given."""
        with _backend_errors("SET"):
            if ttl_seconds is not None:
                await self._client.set(key, value, ex=ttl_seconds)
            else:
                await self._client.set(key, value)

    @override
    async def delete(self, *keys: str) -> int:
        """Delete keys if present."""
        if not keys:
            return 0
        with _backend_errors("DEL"):
            return int(await self._client.delete(*keys))

    @override
    async def expire(self, key: str, ttl_seconds: int) -> bool:
        """Set the TTL of an existing key."""
        with _backend_errors("EXPIRE"):
            return bool(await self._client.expire(key, ttl_seconds))

    @override
    async def ttl(self, key: str) -> int:
        """Return the server's ``TTL`` reply."""
        with _backend_errors("TTL"):
            return int(await self._client.ttl(key))

    @override
    async def scan(self, pattern: str) -> list[str]:
        """List keys matching pattern with incremental ``SCAN``."""
        keys: list[str] = []
        with _backend_errors("SCAN"):
            async for key in self._client.scan_iter(match=pattern, count=SCAN_COUNT):
                normalized = _normalize_string(key)
                if normalized is not None:
                    keys.append(normalized)
        # SCAN may return a key more than once while the keyspace is rehashed
        return list(dict.fromkeys(keys))

    @override
    async def close(self) -> None:
        """Release backend resources."""
        close_method = getattr(self._client, "aclose", None)
        if close_method is None:
            close_method = getattr(self._client, "close", None)
        if close_method is None:
            return

        with _backend_errors("close"):
            maybe_awaitable = close_method()
            if isawaitable(maybe_awaitable):
                await maybe_awaitable
