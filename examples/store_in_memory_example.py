"""Minimal example for KVStore using the in-memory backend."""

import asyncio

from kv_store.backends.in_memory import InMemoryAsyncBackend
from kv_store.stores import KVStore


async def main() -> None:
    """Run a set/get/expire/delete flow without any server."""
    async with KVStore("example", InMemoryAsyncBackend()) as store:
        await store.set("key1", "value1")
        await store.set("key2", "value2", ttl_in_seconds=1)
        print("key2:", await store.get("key2"))
        print("ttl key2:", await store.ttl_in_seconds("key2"))

        await asyncio.sleep(1.1)
        print("key2 after expiry:", await store.get("key2"))
        print("delete missing:", await store.delete("missing"))

        await store.set("key2", "value2")
        await store.delete_all("key[2]")
        print("keys:", await store.keys())


if __name__ == "__main__":
    asyncio.run(main())
