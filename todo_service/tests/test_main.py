import pytest

from todo_api import __main__ as entry

ENV_VARS = [
    "PERSISTENCE_BACKEND",
    "SQLITE_DB_PATH",
    "HOST",
    "PORT",
    "LOG_FILE",
    "LOG_LEVEL",
    "SEED_ON_EMPTY",
    "SEED_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))


@pytest.fixture
def no_server(monkeypatch):
    calls = []
    monkeypatch.setattr(entry.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    return calls


def test_unusable_database_exits_with_status_1(monkeypatch, tmp_path, no_server):
    monkeypatch.setenv("SQLITE_DB_PATH", str(tmp_path))
    with pytest.raises(SystemExit) as exc_info:
        entry.main()
    assert exc_info.value.code == 1
    assert no_server == []
    log = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert "Database initialization failed" in log


def test_invalid_seed_file_exits_with_status_1(monkeypatch, tmp_path, no_server):
    seed_path = tmp_path / "seed.json"
    seed_path.write_text('[{"id": "one", "task": "Bad id"}]', encoding="utf-8")
    monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
    monkeypatch.setenv("SEED_FILE", str(seed_path))
    with pytest.raises(SystemExit) as exc_info:
        entry.main()
    assert exc_info.value.code == 1
    assert no_server == []


def test_serves_on_configured_address(monkeypatch, no_server):
    monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9090")
    entry.main()
    assert no_server == [{"host": "127.0.0.1", "port": 9090}]
