"""kv-store - named async key-value store facade with per-key TTL"""

from ._version import version as __version__
from .backends import Backend, InMemoryAsyncBackend, PostgresBackend, RedisBackend
from .config import StoreSettings, create_store
from .errors import BackendError, ConfigurationError, KVStoreError
from .key_mapping import KeyMapper
from .stores import NO_EXPIRY, KVStore


__all__ = [
    "NO_EXPIRY",
    "Backend",
    "BackendError",
    "ConfigurationError",
    "InMemoryAsyncBackend",
    "KVStore",
    "KVStoreError",
    "KeyMapper",
    "PostgresBackend",
    "RedisBackend",
    "StoreSettings",
    "__version__",
    "create_store",
]
