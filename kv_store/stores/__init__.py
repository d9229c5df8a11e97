"""Store facade."""

from .store import DELETE_BATCH_SIZE, NO_EXPIRY, KVStore


__all__ = ["DELETE_BATCH_SIZE", "NO_EXPIRY", "KVStore"]
