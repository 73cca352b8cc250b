"""Where the asset roster database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "assetroster"
DEFAULT_DB_FILENAME: Final[str] = "assetroster.db"
DATA_DIR_ENV_VAR: Final[str] = "ASSETROSTER_DATA_DIR"
DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Directory holding the roster database file."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @property
    def database_file(self) -> Path:
        return self.data_dir.expanduser().resolve() / self.database_filename

    def database_uri(self) -> str:
        """Return the SQLite URI of the database file, creating its directory."""

        database_file = self.database_file
        database_file.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{database_file}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        local_app_data = os.getenv("LOCALAPPDATA")
        return Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    return Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    """Use ``ASSETROSTER_DATA_DIR`` when set, else the per-user data directory."""

    override = os.getenv(DATA_DIR_ENV_VAR)
    data_dir = Path(override) if override else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir.expanduser().resolve())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Use ``DATABASE_URI`` verbatim when set, else a SQLite file under ``storage``."""

    override = os.getenv(DATABASE_URI_ENV_VAR)
    if override:
        return DatabaseConfig(uri=override)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
