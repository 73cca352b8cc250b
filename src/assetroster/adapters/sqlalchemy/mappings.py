"""SQLAlchemy table metadata for the asset roster."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Column,
    Dialect,
    Float,
    Index,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

from assetroster.domain.model import AssetRecord

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import Engine

    from assetroster.domain.model import Ordinal

log = logging.getLogger(__name__)


class OrdinalType(TypeDecorator[float]):
    """Display ordinal stored as a float; integral values load back as ``int``."""

    impl = Float
    cache_ok = True

    def process_bind_param(self, value: Ordinal | None, dialect: Dialect) -> float | None:
        _ = dialect
        if value is None:
            return None
        return float(value)

    def process_result_value(self, value: float | None, dialect: Dialect) -> Ordinal | None:
        _ = dialect
        if value is None:
            return None
        return int(value) if float(value).is_integer() else float(value)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

asset_table = Table(
    "asset",
    metadata,
    Column("staff_id", String, primary_key=True),
    Column("full_name", String, nullable=False),
    Column("organization_name", String, nullable=False, default=""),
    Column("no", OrdinalType, nullable=True),
    Column("modified_at", BigInteger, nullable=False),
    Index("ix_asset_modified_at", "modified_at"),
)


def record_to_row(record: AssetRecord) -> dict[str, object]:
    return {
        "staff_id": record.staff_id,
        "full_name": record.full_name,
        "organization_name": record.organization_name,
        "no": record.no,
        "modified_at": record.modified_at,
    }


def row_to_record(row: Mapping[str, object]) -> AssetRecord:
    return AssetRecord(
        staff_id=str(row["staff_id"]),
        full_name=str(row["full_name"]),
        organization_name=str(row["organization_name"] or ""),
        no=row["no"],  # pyright: ignore[reportArgumentType]
        modified_at=int(row["modified_at"]),  # pyright: ignore[reportArgumentType]
    )


def create_all_tables(engine: Engine) -> None:
    """Create tables directly from metadata, bypassing migrations."""

    log.info("Creating asset tables without migrations")
    metadata.create_all(engine)
