"""SQLAlchemy adapter package for assetroster."""

from __future__ import annotations

from .mappings import asset_table, create_all_tables, metadata
from .repositories import SqlAlchemyAssetRepository
from .unit_of_work import (
    SqlAlchemyAssetUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAssetRepository",
    "SqlAlchemyAssetUnitOfWork",
    "StartupError",
    "asset_table",
    "create_all_tables",
    "metadata",
    "shutdown",
    "startup",
]
