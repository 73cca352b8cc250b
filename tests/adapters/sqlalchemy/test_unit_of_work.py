from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from assetroster.adapters.sqlalchemy import SqlAlchemyAssetUnitOfWork, startup
from assetroster.adapters.sqlalchemy.unit_of_work import StartupError, shutdown
from tests.helpers.assets import make_draft

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session, sessionmaker


def test_commit_persists_changes(session_factory: sessionmaker[Session]) -> None:
    with SqlAlchemyAssetUnitOfWork(session_factory) as uow:
        uow.repositories.assets.replace_many([make_draft("E1").stamped(1)])
        uow.commit()

    with SqlAlchemyAssetUnitOfWork(session_factory) as uow:
        assert uow.repositories.assets.get("E1") is not None


def test_uncommitted_changes_are_discarded(session_factory: sessionmaker[Session]) -> None:
    with SqlAlchemyAssetUnitOfWork(session_factory) as uow:
        uow.repositories.assets.replace_many([make_draft("E1").stamped(1)])

    with SqlAlchemyAssetUnitOfWork(session_factory) as uow:
        assert uow.repositories.assets.list_all() == []


def test_exception_rolls_back_and_propagates(session_factory: sessionmaker[Session]) -> None:
    with (
        pytest.raises(RuntimeError, match="boom"),
        SqlAlchemyAssetUnitOfWork(session_factory) as uow,
    ):
        uow.repositories.assets.replace_many([make_draft("E1").stamped(1)])
        raise RuntimeError("boom")

    with SqlAlchemyAssetUnitOfWork(session_factory) as uow:
        assert uow.repositories.assets.list_all() == []


def test_session_is_unavailable_outside_the_block(
    session_factory: sessionmaker[Session],
) -> None:
    uow = SqlAlchemyAssetUnitOfWork(session_factory)
    with pytest.raises(StartupError):
        _ = uow.session

    with uow:
        assert uow.session is not None

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_startup_from_database_uri(tmp_path: Path) -> None:
    database = tmp_path / "roster.db"
    session_factory = startup(database_uri=f"sqlite+pysqlite:///{database}")
    try:
        with SqlAlchemyAssetUnitOfWork(session_factory) as uow:
            uow.repositories.assets.replace_many([make_draft("E1").stamped(1)])
            uow.commit()
    finally:
        shutdown(session_factory)

    reopened = startup(database_uri=f"sqlite+pysqlite:///{database}")
    try:
        with SqlAlchemyAssetUnitOfWork(reopened) as uow:
            assert [record.staff_id for record in uow.repositories.assets.list_all()] == ["E1"]
    finally:
        shutdown(reopened)


def test_startup_without_migrations_creates_tables(sqlite_engine: Engine) -> None:
    session_factory = startup(engine=sqlite_engine, migrate=False)

    with SqlAlchemyAssetUnitOfWork(session_factory) as uow:
        assert uow.repositories.assets.latest_modified_at() is None
