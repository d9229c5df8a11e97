"""Key mapping utilities for namespace-prefixed KV keys."""

from __future__ import annotations

from kv_store.errors import ConfigurationError
from kv_store.glob import escape_glob


class KeyMapper:
    """Map between backend KV keys and logical keys of one namespace.

    Without a namespace keys and patterns pass through unchanged and the
    store addresses the whole backend database.
    """

    def __init__(self, namespace: str | None = None, sep: str = ":") -> None:
        super().__init__()
        if namespace is not None:
            if not namespace:
                msg = "namespace must not be empty"
                raise ConfigurationError(msg)
            if not sep:
                msg = "sep must not be empty"
                raise ConfigurationError(msg)
            if sep in namespace:
                msg = "namespace must not contain separator"
                raise ConfigurationError(msg)

        self.namespace = namespace
        self.sep = sep
        self.prefix = f"{namespace}{sep}" if namespace is not None else ""

    def full_key(self, key: str) -> str:
        """Build the backend key for a logical key."""
        return self.prefix + key

    def pattern(self, pattern: str | None = None) -> str:
        """Build a backend glob that only selects keys inside the namespace."""
        return escape_glob(self.prefix) + ("*" if pattern is None else pattern)

    def matches(self, kv_key: str) -> bool:
        """Return True when a backend key belongs to this namespace."""
        return kv_key.startswith(self.prefix)

    def relative_key(self, kv_key: str) -> str:
        """Convert a backend key into its logical key."""
        if not self.matches(kv_key):
            msg = f"key does not match namespace prefix: {kv_key}"
            raise ValueError(msg)
        return kv_key.removeprefix(self.prefix)
