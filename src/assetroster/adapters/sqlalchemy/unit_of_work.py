"""SQLAlchemy-backed units of work for the asset store."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from assetroster.adapters.sqlalchemy.mappings import create_all_tables
from assetroster.adapters.sqlalchemy.migrations import upgrade_head
from assetroster.adapters.sqlalchemy.repositories import SqlAlchemyAssetRepository
from assetroster.config import get_database_config
from assetroster.domain.errors import StoreWriteError
from assetroster.domain.ports.unit_of_work import AssetRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used outside its session scope."""


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    migrate: bool = True,
) -> sessionmaker[Session]:
    """Prepare the database schema and return a session factory bound to it.

    The caller owns the returned factory (and its engine) for the lifetime of the
    application session; nothing is kept in module state.
    """

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri,
        future=True,
    )
    log.info("Preparing asset database at %s", resolved_engine.url.render_as_string())
    if migrate:
        upgrade_head(engine=resolved_engine)
    else:
        create_all_tables(resolved_engine)
    return sessionmaker(bind=resolved_engine, expire_on_commit=False)


def shutdown(session_factory: sessionmaker[Session]) -> None:
    """Dispose the engine behind ``session_factory``."""

    bind = session_factory.kw.get("bind")
    if bind is not None:
        bind.dispose()


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections.

    The session opens on ``__enter__`` and is always closed on ``__exit__``;
    uncommitted work is rolled back when the block raises.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            self.session.close()
            self.session = None
        return False

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            raise StoreWriteError(f"Failed to commit asset changes: {exc}") from exc

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyAssetUnitOfWork(BaseSqlAlchemyUnitOfWork[AssetRepositories]):
    """Unit of work managing SQLAlchemy sessions for asset records."""

    def _build_repositories(self, session: Session) -> AssetRepositories:
        return AssetRepositories(assets=SqlAlchemyAssetRepository(session))


if TYPE_CHECKING:
    from assetroster.domain.ports.unit_of_work import AssetUnitOfWork

    _uow_check: AssetUnitOfWork = SqlAlchemyAssetUnitOfWork(sessionmaker())
