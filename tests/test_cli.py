import pytest

from kv_store import __main__ as cli
from kv_store.backends.in_memory import InMemoryAsyncBackend
from kv_store.errors import BackendError


class _UnreachableBackend(InMemoryAsyncBackend):
    async def get(self, key: str) -> str | None:
        msg = "redis GET failed: Connection refused"
        raise BackendError(msg)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KV_STORE_NAMESPACE", raising=False)


def test_cli_set_get_and_miss(capsys: pytest.CaptureFixture[str]) -> None:
    backend = InMemoryAsyncBackend()

    assert cli.main(["set", "greeting", "hello", "--ttl", "10"], backend=backend) == 0
    assert cli.main(["get", "greeting"], backend=backend) == 0
    assert cli.main(["ttl", "greeting"], backend=backend) == 0
    assert cli.main(["get", "missing"], backend=backend) == 0

    assert capsys.readouterr().out.splitlines() == ["OK", "hello", "10", "(nil)"]


def test_cli_keys_and_delete_all(capsys: pytest.CaptureFixture[str]) -> None:
    backend = InMemoryAsyncBackend()
    for key in ("key2", "key1"):
        assert cli.main(["set", key, "value"], backend=backend) == 0
    _ = capsys.readouterr()

    assert cli.main(["keys"], backend=backend) == 0
    assert cli.main(["delete-all", "key[2]"], backend=backend) == 0
    assert cli.main(["keys", "key*"], backend=backend) == 0

    assert capsys.readouterr().out.splitlines() == ["key1", "key2", "OK", "key1"]


def test_cli_del_and_expire_report_misses(capsys: pytest.CaptureFixture[str]) -> None:
    backend = InMemoryAsyncBackend()
    assert cli.main(["set", "key", "value"], backend=backend) == 0
    _ = capsys.readouterr()

    assert cli.main(["expire", "key", "30"], backend=backend) == 0
    assert cli.main(["del", "key"], backend=backend) == 0
    assert cli.main(["del", "key"], backend=backend) == 0
    assert cli.main(["expire", "key", "30"], backend=backend) == 0

    assert capsys.readouterr().out.splitlines() == ["OK", "OK", "(nil)", "(nil)"]


def test_cli_namespace_option(capsys: pytest.CaptureFixture[str]) -> None:
    backend = InMemoryAsyncBackend()

    assert cli.main(["--namespace", "ns", "set", "key", "value"], backend=backend) == 0
    _ = capsys.readouterr()
    assert cli.main(["keys"], backend=backend) == 0

    assert capsys.readouterr().out.splitlines() == ["ns:key"]


def test_cli_backend_error_exits_with_one(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["get", "key"], backend=_UnreachableBackend()) == 1
    assert "Connection refused" in capsys.readouterr().err


def test_cli_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = cli.main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == cli.version


def test_cli_rejects_unknown_log_level(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = cli.main(["--log-level", "loud", "get", "key"], backend=InMemoryAsyncBackend())

    assert excinfo.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_cli_accepts_lowercase_log_level(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--log-level", "debug", "get", "key"], backend=InMemoryAsyncBackend()) == 0
    assert capsys.readouterr().out.splitlines() == ["(nil)"]
