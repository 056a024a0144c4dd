"""Runtime configuration read from the environment.

A ``.env`` file in the working directory is loaded first; real environment
variables take precedence over it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/shopcore.db"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    environment: str
    log_level: str
    sql_echo: bool


def _default_log_level(environment: str) -> str:
    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }
    return level_map.get(environment, "INFO")


def load_settings() -> Settings:
    load_dotenv()
    environment = os.getenv("SHOPCORE_ENV", "development").strip().lower()
    return Settings(
        database_url=os.getenv("SHOPCORE_DATABASE_URL", DEFAULT_DATABASE_URL),
        environment=environment,
        log_level=os.getenv("LOG_LEVEL", _default_log_level(environment)).upper(),
        sql_echo=os.getenv("SHOPCORE_SQL_ECHO", "false").strip().lower() in _TRUTHY,
    )


def ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    if not database_url.startswith("sqlite:///") or ":memory:" in database_url:
        return
    db_path = database_url.split("sqlite:///", 1)[-1]
    Path(db_path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)
