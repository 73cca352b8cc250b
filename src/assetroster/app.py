"""Application orchestration entry points."""

from __future__ import annotations

from functools import partial
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from assetroster.adapters.files import detect_format, read_rows
from assetroster.adapters.sqlalchemy import SqlAlchemyAssetUnitOfWork, startup
from assetroster.domain.data_integration import ImportRosterResult, import_rows
from assetroster.domain.store import AssetStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

    from assetroster.domain.ingest import HeaderResolver

log = getLogger(__name__)


def open_asset_store(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    clock: Callable[[], int] | None = None,
) -> AssetStore:
    """Migrate the configured database and return a store bound to it."""

    session_factory = startup(engine=engine, database_uri=database_uri)
    unit_of_work_factory = partial(SqlAlchemyAssetUnitOfWork, session_factory)
    if clock is None:
        return AssetStore(unit_of_work_factory)
    return AssetStore(unit_of_work_factory, clock=clock)


def import_roster_bytes(
    filename: str,
    payload: bytes,
    *,
    store: AssetStore,
    media_type: str | None = None,
    resolver: HeaderResolver | None = None,
) -> ImportRosterResult:
    """Parse an uploaded roster and reconcile it into ``store``."""

    rows = read_rows(filename, payload, media_type=media_type)
    return import_rows(rows, store=store, resolver=resolver)


def import_roster_file(
    path: str | Path,
    *,
    store: AssetStore,
    media_type: str | None = None,
    resolver: HeaderResolver | None = None,
) -> ImportRosterResult:
    """Read a roster file from disk and reconcile it into ``store``."""

    file_path = Path(path)
    detect_format(file_path.name, media_type)
    log.info("Importing roster from %s", file_path)
    return import_roster_bytes(
        file_path.name,
        file_path.read_bytes(),
        store=store,
        media_type=media_type,
        resolver=resolver,
    )
