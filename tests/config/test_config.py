from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from assetroster.config import (
    ConfigurationError,
    StorageConfig,
    get_database_config,
    get_log_level,
    get_storage_config,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_storage_config_prefers_env_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("ASSETROSTER_DATA_DIR", str(custom))

    config = get_storage_config()

    assert config.data_dir == custom.resolve()
    assert config.database_file == custom.resolve() / "assetroster.db"


def test_database_config_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config().uri == "sqlite:///override.db"


def test_database_config_creates_data_dir(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("ASSETROSTER_DATA_DIR", str(tmp_path / "data-dir"))

    uri = get_database_config().uri

    expected_path = (tmp_path / "data-dir" / "assetroster.db").resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_explicit_storage_config_is_used(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    storage = StorageConfig(data_dir=tmp_path, database_filename="other.db")

    uri = get_database_config(storage=storage).uri

    assert uri.endswith("other.db")


@pytest.mark.parametrize(
    ("value", "expected"),
    [("debug", logging.DEBUG), (" WARNING ", logging.WARNING), ("", logging.INFO)],
)
def test_log_level_from_env(
    monkeypatch: pytest.MonkeyPatch,
    value: str,
    expected: int,
) -> None:
    monkeypatch.setenv("ASSETROSTER_LOG_LEVEL", value)

    assert get_log_level() == expected


def test_log_level_defaults_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ASSETROSTER_LOG_LEVEL", raising=False)

    assert get_log_level(default=logging.ERROR) == logging.ERROR


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASSETROSTER_LOG_LEVEL", "chatty")

    with pytest.raises(ConfigurationError):
        get_log_level()
