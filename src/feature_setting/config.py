"""Configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration read from FEATURE_SETTING_* environment variables."""

    ENV_PREFIX = "FEATURE_SETTING_"
    DB_FILENAME = "feature_setting.db"

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool(self._env_name("DEV_MODE"), default=True)
        self.SQL_ECHO = _env_bool(self._env_name("SQL_ECHO"), default=False)
        self.LOG_LEVEL = os.getenv(self._env_name("LOG_LEVEL"), "INFO").upper()
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv(self._env_name("DATABASE_URL"), self._build_sqlite_url())

    def _env_name(self, suffix: str) -> str:
        return f"{self.ENV_PREFIX}{suffix}"

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv(self._env_name("DATA_DIR"), "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside DATA_DIR."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {"echo": self.SQL_ECHO}
        if self.is_sqlite():
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class TestConfig(BaseConfig):
    """In-memory SQLite shared across sessions; only logs go to DATA_DIR."""

    __test__ = False

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self._data_dir = Path(data_dir) if data_dir is not None else None
        super().__init__()
        self.DATABASE_URL = "sqlite://"

    def _resolve_data_dir(self) -> Path:
        if self._data_dir is None:
            return super()._resolve_data_dir()
        self._data_dir.mkdir(parents=True, exist_ok=True)
        return self._data_dir.resolve()

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        engine_options = super().sqlalchemy_engine_options()
        engine_options["poolclass"] = StaticPool
        return engine_options
