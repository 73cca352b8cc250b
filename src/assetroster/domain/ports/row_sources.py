"""Ports for turning uploaded files into loosely typed rows."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

type RawRow = Mapping[str, object]


@runtime_checkable
class RowSource(Protocol):
    """Callable port producing raw rows, keyed by header text, from file bytes."""

    def __call__(self, payload: bytes) -> list[RawRow]: ...


__all__ = ["RawRow", "RowSource"]
