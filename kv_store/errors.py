"""Exception hierarchy for store operations."""

from __future__ import annotations


class KVStoreError(Exception):
    """Base exception for all kv-store failures."""


class BackendError(KVStoreError):
    """The backend is unreachable, timed out or answered with a protocol error."""


class ConfigurationError(KVStoreError, ValueError):
    """Invalid store, namespace or backend settings."""
