"""Backend contracts and implementations."""

from .in_memory import InMemoryAsyncBackend
from .postgres import PostgresBackend
from .protocol import TTL_MISSING, TTL_PERSISTENT, Backend
from .redis import RedisBackend


__all__ = ["TTL_MISSING", "TTL_PERSISTENT", "Backend", "InMemoryAsyncBackend", "PostgresBackend", "RedisBackend"]
