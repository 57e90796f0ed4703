import pytest

from todo_api.settings import Settings, get_settings

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
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    assert get_settings() == Settings()
    s = get_settings()
    assert s.persistence_backend == "sqlite"
    assert s.host == "0.0.0.0"
    assert s.port == 8080
    assert s.log_file == "app.log"
    assert s.seed_on_empty is True
    assert s.seed_file is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PERSISTENCE_BACKEND", "Memory")
    monkeypatch.setenv("SQLITE_DB_PATH", "/tmp/x.db")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("LOG_FILE", "logs/service.log")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SEED_ON_EMPTY", "off")
    monkeypatch.setenv("SEED_FILE", "seed.json")

    s = get_settings()
    assert s.persistence_backend == "memory"
    assert s.sqlite_db_path == "/tmp/x.db"
    assert s.host == "127.0.0.1"
    assert s.port == 9000
    assert s.log_file == "logs/service.log"
    assert s.log_level == "DEBUG"
    assert s.seed_on_empty is False
    assert s.seed_file == "seed.json"


def test_unknown_backend_falls_back_to_sqlite(monkeypatch):
    monkeypatch.setenv("PERSISTENCE_BACKEND", "postgres")
    assert get_settings().persistence_backend == "sqlite"


def test_empty_values_use_defaults(monkeypatch):
    monkeypatch.setenv("PORT", "")
    monkeypatch.setenv("LOG_FILE", "")
    s = get_settings()
    assert s.port == 8080
    assert s.log_file == "app.log"


@pytest.mark.parametrize("port", ["http", "0", "70000"])
def test_invalid_port(monkeypatch, port):
    monkeypatch.setenv("PORT", port)
    with pytest.raises(ValueError):
        get_settings()
