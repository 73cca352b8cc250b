"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from itertools import batched
from typing import TYPE_CHECKING, Final

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import SQLAlchemyError

from assetroster.adapters.sqlalchemy.mappings import asset_table, record_to_row, row_to_record
from assetroster.domain.errors import StoreReadError, StoreWriteError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import Executable
    from sqlalchemy.engine import Result
    from sqlalchemy.orm import Session

    from assetroster.domain.model import AssetRecord

# keeps IN (...) lists under SQLite's bound-parameter limit
KEY_BATCH_SIZE: Final[int] = 500


class SqlAlchemyAssetRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, staff_id: str) -> AssetRecord | None:
        stmt = select(asset_table).where(asset_table.c.staff_id == staff_id)
        row = self._read(stmt).mappings().one_or_none()
        return None if row is None else row_to_record(row)

    def list_all(self) -> list[AssetRecord]:
        stmt = select(asset_table)
        return [row_to_record(row) for row in self._read(stmt).mappings()]

    def most_recent(self, limit: int) -> list[AssetRecord]:
        stmt = (
            select(asset_table)
            .order_by(asset_table.c.modified_at.desc(), asset_table.c.staff_id)
            .limit(limit)
        )
        return [row_to_record(row) for row in self._read(stmt).mappings()]

    def latest_modified_at(self) -> int | None:
        stmt = select(func.max(asset_table.c.modified_at))
        return self._read(stmt).scalar_one_or_none()

    def replace_many(self, records: Sequence[AssetRecord]) -> None:
        """Fully replace the rows for every record's key."""

        if not records:
            return
        self.remove_many(record.staff_id for record in records)
        self._write(insert(asset_table), [record_to_row(record) for record in records])

    def remove_many(self, staff_ids: Iterable[str]) -> int:
        removed = 0
        for chunk in batched(staff_ids, KEY_BATCH_SIZE):
            stmt = delete(asset_table).where(asset_table.c.staff_id.in_(chunk))
            removed += self._write(stmt).rowcount  # pyright: ignore[reportAttributeAccessIssue]
        return removed

    def remove_all(self) -> int:
        result = self._write(delete(asset_table))
        return result.rowcount  # pyright: ignore[reportAttributeAccessIssue]

    def _read(self, stmt: Executable) -> Result[object]:
        try:
            return self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreReadError(f"Failed to read assets: {exc}") from exc

    def _write(
        self,
        stmt: Executable,
        params: list[dict[str, object]] | None = None,
    ) -> Result[object]:
        try:
            return self.session.execute(stmt, params)
        except SQLAlchemyError as exc:
            raise StoreWriteError(f"Failed to write assets: {exc}") from exc


if TYPE_CHECKING:
    from typing import cast

    from assetroster.domain.ports.persistence import AssetRepository

    _session_stub = cast("Session", object())
    _repo_check: AssetRepository = SqlAlchemyAssetRepository(_session_stub)
