"""Interface for ``python -m kv_store``."""

from __future__ import annotations

import asyncio
import logging
import sys
from argparse import ArgumentParser, Namespace
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ._version import version
from .config import StoreSettings, create_store
from .errors import KVStoreError
from .stores import KVStore


if TYPE_CHECKING:
    from collections.abc import Sequence

    from .backends import Backend


__all__ = ["main"]

logger = logging.getLogger(__name__)


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="kv_store", description="Run a single command against a key-value store.")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument("--name", help="store name (KV_STORE_NAME)")
    _ = parser.add_argument("--backend", choices=["redis", "postgres", "memory"], help="backend type (KV_STORE_BACKEND)")
    _ = parser.add_argument("--url", help="redis connection URL (KV_STORE_REDIS_URL)")
    _ = parser.add_argument("--namespace", help="key namespace (KV_STORE_NAMESPACE)")
    _ = parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging level, default WARNING",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    _ = commands.add_parser("get").add_argument("key")

    set_parser = commands.add_parser("set")
    _ = set_parser.add_argument("key")
    _ = set_parser.add_argument("value")
    _ = set_parser.add_argument("--ttl", type=int, default=None, help="expire after this many seconds")

    _ = commands.add_parser("del").add_argument("key")

    expire_parser = commands.add_parser("expire")
    _ = expire_parser.add_argument("key")
    _ = expire_parser.add_argument("seconds", type=int)

    _ = commands.add_parser("ttl").add_argument("key")
    _ = commands.add_parser("keys").add_argument("pattern", nargs="?")
    _ = commands.add_parser("delete-all").add_argument("pattern", nargs="?")
    return parser


def _settings_from(options: Namespace) -> StoreSettings:
    overrides: dict[str, Any] = {}
    if options.name is not None:
        overrides["name"] = options.name
    if options.backend is not None:
        overrides["backend"] = options.backend
    if options.url is not None:
        overrides["redis_url"] = options.url
    if options.namespace is not None:
        overrides["namespace"] = options.namespace
    return StoreSettings(**overrides)


async def _execute(store: KVStore, options: Namespace) -> Any:
    async with store:
        match options.command:
            case "get":
                return await store.get(options.key)
            case "set":
                return await store.set(options.key, options.value, options.ttl)
            case "del":
                return await store.delete(options.key)
            case "expire":
                return await store.expire(options.key, options.seconds)
            case "ttl":
                return await store.ttl_in_seconds(options.key)
            case "keys":
                return sorted(await store.keys(options.pattern))
            case "delete-all":
                return await store.delete_all(options.pattern)
    msg = f"unknown command: {options.command}"
    raise ValueError(msg)


def _render(result: Any) -> str:
    if result is None:
        return "(nil)"
    if result is True:
        return "OK"
    if isinstance(result, list):
        return "\n".join(result)
    return str(result)


def main(args: Sequence[str] | None = None, *, backend: Backend | None = None) -> int:
    """Parse arguments, run one store command and print its result.

    ``backend`` replaces the configured backend, mainly for tests.
    """
    parser = _build_parser()
    options = parser.parse_args(args)
    logging.basicConfig(level=options.log_level)

    try:
        settings = _settings_from(options)
        if backend is not None:
            store = KVStore(settings.name, backend, namespace=settings.namespace)
        else:
            store = create_store(settings)
        result = asyncio.run(_execute(store, options))
    except (KVStoreError, ValidationError) as error:
        logger.debug("command %s failed", options.command, exc_info=True)
        print(f"error: {error}", file=sys.stderr)
        return 1

    output = _render(result)
    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
