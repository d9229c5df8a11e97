"""Minimal example for KVStore using a Redis-compatible backend."""

import asyncio

from kv_store.backends.redis import RedisBackend
from kv_store.stores import NO_EXPIRY, KVStore


async def main() -> None:
    """Run a namespaced flow against Redis/Dragonfly."""
    backend = RedisBackend(url="redis://redis:6379/0", socket_timeout=5)
    async with KVStore("sessions", backend, namespace="sessions") as store:
        await store.set("user:alice", "token-a", ttl_in_seconds=60)
        await store.set("user:bob", "token-b")
        print("alice ttl:", await store.ttl_in_seconds("user:alice"))
        assert await store.ttl_in_seconds("user:bob") == NO_EXPIRY  # noqa: S101
        print("users:", await store.keys("user:*"))
        await store.delete_all()


if __name__ == "__main__":
    asyncio.run(main())
