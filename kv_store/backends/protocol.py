"""Backend command interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Final


TTL_MISSING: Final = -2
"""``ttl`` reply for a key that does not exist."""

TTL_PERSISTENT: Final = -1
"""``ttl`` reply for a key that exists without an expiry."""


class Backend(ABC):
    """Async key-value backend executing primitive store commands.

    Replies follow Redis conventions so that every implementation can be
    swapped behind the same facade.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return raw value for key, or None when key does not exist or expired."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store raw value for key, expiring after ``ttl_seconds`` when given.

        Writing without a TTL clears any expiry the key had.
        """

    @abstractmethod
    async def delete(self, *keys: str) -> int:
        """Delete keys if present and return how many were removed."""

    @abstractmethod
    async def expire(self, key: str, ttl_seconds: int) -> bool:
        """Set the TTL of an existing key. Return False when the key is absent."""

    @abstractmethod
    async def ttl(self, key: str) -> int:
        """Return remaining seconds, ``TTL_PERSISTENT`` or ``TTL_MISSING``."""

    @abstractmethod
    async def scan(self, pattern: str) -> list[str]:
        """List all live keys matching a glob pattern."""

    @abstractmethod
    async def close(self) -> None:
        """Close any backend resources."""
