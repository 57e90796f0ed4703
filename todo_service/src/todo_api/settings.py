from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'sqlite' (default) or 'memory'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/todos.db'
    - HOST / PORT: address the server listens on. Default 0.0.0.0:8080
    - LOG_FILE: append-only log file. Default 'app.log'
    - LOG_LEVEL: level name for the service logger. Default 'INFO'
    - SEED_ON_EMPTY: 'false' to skip seeding an empty table (default: true)
    - SEED_FILE: optional JSON file with an array of todos to seed instead of the defaults
    """

    persistence_backend: str = "sqlite"
    sqlite_db_path: str = "./data/todos.db"
    host: str = "0.0.0.0"
    port: int = 8080
    log_file: str = "app.log"
    log_level: str = "INFO"
    seed_on_empty: bool = True
    seed_file: Optional[str] = None


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_port(value: str) -> int:
    try:
        port = int(value.strip())
    except ValueError as e:
        raise ValueError(f"PORT must be an integer, got {value!r}") from e
    if not (0 < port < 65536):
        raise ValueError(f"PORT out of range: {port}")
    return port


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "sqlite").strip().lower()
    if backend not in {"memory", "sqlite"}:
        backend = "sqlite"

    seed_file = os.getenv("SEED_FILE") or None

    return Settings(
        persistence_backend=backend,
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/todos.db").strip(),
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_port(_get_env("PORT", "8080")),
        log_file=_get_env("LOG_FILE", "app.log").strip(),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        seed_on_empty=_parse_bool(_get_env("SEED_ON_EMPTY", "true"), True),
        seed_file=seed_file.strip() if seed_file else None,
    )
