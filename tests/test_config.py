import pytest
from pydantic import ValidationError

from kv_store.backends import InMemoryAsyncBackend, PostgresBackend, RedisBackend
from kv_store.config import StoreSettings, create_backend, create_store


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("NAME", "BACKEND", "NAMESPACE", "REDIS_URL", "HOST", "PORT", "DB", "PASSWORD"):
        monkeypatch.delenv(f"KV_STORE_{name}", raising=False)


def test_defaults_build_local_redis_url() -> None:
    settings = StoreSettings()

    assert settings.name == "default"
    assert settings.backend == "redis"
    assert settings.resolved_redis_url() == "redis://127.0.0.1:6379/0"


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KV_STORE_NAME", "testStore")
    monkeypatch.setenv("KV_STORE_HOST", "redis")
    monkeypatch.setenv("KV_STORE_PORT", "6380")
    monkeypatch.setenv("KV_STORE_DB", "3")
    monkeypatch.setenv("KV_STORE_PASSWORD", "p@ss")
    monkeypatch.setenv("KV_STORE_NAMESPACE", "cache")

    settings = StoreSettings()

    assert settings.name == "testStore"
    assert settings.namespace == "cache"
    assert settings.resolved_redis_url() == "redis://:p%40ss@redis:6380/3"


def test_explicit_redis_url_wins() -> None:
    settings = StoreSettings(redis_url="redis://cache:6379/1", host="ignored")

    assert settings.resolved_redis_url() == "redis://cache:6379/1"


def test_port_is_validated() -> None:
    with pytest.raises(ValidationError, match="port out of range"):
        _ = StoreSettings(port=70000)


@pytest.mark.parametrize(
    ("backend", "expected_type"),
    [("redis", RedisBackend), ("postgres", PostgresBackend), ("memory", InMemoryAsyncBackend)],
)
def test_create_backend_selects_implementation(backend: str, expected_type: type) -> None:
    assert isinstance(create_backend(StoreSettings(backend=backend)), expected_type)


@pytest.mark.asyncio
async def test_create_store_uses_name_and_namespace() -> None:
    store = create_store(StoreSettings(name="sessions", backend="memory", namespace="sessions"))

    assert store.get_name() == "sessions"
    assert await store.set("token", "abc") is True
    assert await store.keys() == ["token"]
    assert repr(store) == "KVStore(name='sessions', namespace='sessions')"
