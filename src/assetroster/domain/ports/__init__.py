"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import AssetRepository
from .row_sources import RawRow, RowSource
from .unit_of_work import (
    AssetRepositories,
    AssetUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AssetRepositories",
    "AssetRepository",
    "AssetUnitOfWork",
    "RawRow",
    "RepositoryCollection",
    "RowSource",
    "UnitOfWork",
]
