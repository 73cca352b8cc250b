"""Ports for persisting asset records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from assetroster.domain.model import AssetRecord


@runtime_checkable
class AssetRepository(Protocol):
    """Keyed persistence contract: one row per ``staff_id``."""

    def get(self, staff_id: str) -> AssetRecord | None: ...

    def list_all(self) -> list[AssetRecord]: ...

    def most_recent(self, limit: int) -> list[AssetRecord]: ...

    def latest_modified_at(self) -> int | None: ...

    def replace_many(self, records: Sequence[AssetRecord]) -> None: ...

    def remove_many(self, staff_ids: Iterable[str]) -> int: ...

    def remove_all(self) -> int: ...
