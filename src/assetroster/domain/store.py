"""Authoritative asset record set with change notification.

``AssetStore`` is the only component that writes asset records. Every mutation
runs in its own unit of work; once it commits, each subscribed observer receives
the full current record set and should replace its view with it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import TYPE_CHECKING, Final

from assetroster.domain.errors import (
    AssetNotFoundError,
    RecordValidationError,
    StoreError,
    StoreReadError,
    StoreWriteError,
)
from assetroster.domain.model import AssetRecord, CanonicalField, validate_admission

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from assetroster.domain.model import AssetDraft
    from assetroster.domain.ports import AssetRepository, AssetUnitOfWork

type Snapshot = tuple[AssetRecord, ...]
type SnapshotObserver = Callable[[Snapshot], None]
type Unsubscribe = Callable[[], None]

log = logging.getLogger(__name__)

EDITABLE_FIELDS: Final[frozenset[str]] = frozenset(
    {CanonicalField.FULL_NAME, CanonicalField.ORGANIZATION_NAME, CanonicalField.NO}
)


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class AssetStore:
    """Keyed store of ``AssetRecord`` objects, one per ``staff_id``."""

    def __init__(
        self,
        unit_of_work_factory: Callable[[], AssetUnitOfWork],
        *,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self._clock = clock
        self._observers: list[SnapshotObserver] = []

    # Reads ---------------------------------------------------------------------

    def scan(self) -> Snapshot:
        """Return every stored record; order carries no meaning."""

        with self._unit_of_work_factory() as uow:
            return tuple(uow.repositories.assets.list_all())

    def get(self, staff_id: str) -> AssetRecord | None:
        with self._unit_of_work_factory() as uow:
            return uow.repositories.assets.get(staff_id.strip())

    def recent(self, limit: int) -> list[AssetRecord]:
        """Return up to ``limit`` records, most recently modified first."""

        if limit <= 0:
            return []
        with self._unit_of_work_factory() as uow:
            return uow.repositories.assets.most_recent(limit)

    # Writes --------------------------------------------------------------------

    def upsert(self, draft: AssetDraft) -> AssetRecord:
        """Insert or fully replace the record stored under ``draft.staff_id``."""

        return self.bulk_upsert([draft])[0]

    def bulk_upsert(self, drafts: Iterable[AssetDraft]) -> list[AssetRecord]:
        """Upsert every draft in one transaction.

        Staff IDs are trimmed before keying, and when several drafts share a
        ``staff_id`` the last one wins. If any draft fails admission nothing is
        written.
        """

        latest: dict[str, AssetDraft] = {}
        for draft in drafts:
            validate_admission(draft)
            key = draft.staff_id.strip()
            latest[key] = replace(draft, staff_id=key) if key != draft.staff_id else draft
        if not latest:
            return []

        with self._unit_of_work_factory() as uow:
            repository = uow.repositories.assets
            modified_at = self._next_stamp(repository)
            records = [draft.stamped(modified_at) for draft in latest.values()]
            repository.replace_many(records)
            uow.commit()

        log.debug("Upserted %s asset record(s) at %s", len(records), modified_at)
        self._publish()
        return records

    def edit(self, staff_id: str, **changes: object) -> AssetRecord:
        """Change fields of an existing record; the staff ID cannot change."""

        if CanonicalField.STAFF_ID in changes:
            raise RecordValidationError(
                "Staff ID is the record key and cannot be edited",
                staff_id=staff_id,
                field=CanonicalField.STAFF_ID,
            )
        for name in changes:
            if name not in EDITABLE_FIELDS:
                raise RecordValidationError(
                    f"{name!r} is not an editable asset field",
                    staff_id=staff_id,
                    field=name,
                )
        current = self.get(staff_id)
        if current is None:
            raise AssetNotFoundError(staff_id)
        return self.upsert(replace(current.to_draft(), **changes))

    def delete(self, staff_id: str) -> None:
        """Remove the record for ``staff_id``; unknown keys are ignored."""

        self.bulk_delete([staff_id])

    def bulk_delete(self, staff_ids: Iterable[str]) -> int:
        """Remove every listed key that exists and return how many were removed."""

        keys = list(dict.fromkeys(staff_id.strip() for staff_id in staff_ids))
        if not keys:
            return 0
        with self._unit_of_work_factory() as uow:
            removed = uow.repositories.assets.remove_many(keys)
            uow.commit()

        log.debug("Deleted %s of %s requested asset record(s)", removed, len(keys))
        if removed:
            self._publish()
        return removed

    def clear(self) -> int:
        """Remove every record and return how many were removed."""

        with self._unit_of_work_factory() as uow:
            removed = uow.repositories.assets.remove_all()
            uow.commit()

        log.info("Cleared %s asset record(s)", removed)
        if removed:
            self._publish()
        return removed

    # Subscriptions -------------------------------------------------------------

    def subscribe(self, observer: SnapshotObserver, *, replay: bool = True) -> Unsubscribe:
        """Register ``observer`` for snapshots after every committed change.

        With ``replay`` the observer first receives the current snapshot. The
        returned callable removes the registration.
        """

        current = self.scan() if replay else None
        self._observers.append(observer)
        if current is not None:
            self._deliver(observer, current)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def _publish(self) -> None:
        if not self._observers:
            return
        try:
            snapshot = self.scan()
        except StoreError:
            log.exception("Change committed but the snapshot for observers could not be read")
            return
        for observer in list(self._observers):
            self._deliver(observer, snapshot)

    @staticmethod
    def _deliver(observer: SnapshotObserver, snapshot: Snapshot) -> None:
        try:
            observer(snapshot)
        except Exception:
            log.exception("Snapshot observer %r failed", observer)

    def _next_stamp(self, repository: AssetRepository) -> int:
        now = self._clock()
        try:
            latest = repository.latest_modified_at()
        except StoreReadError as exc:
            raise StoreWriteError(f"Failed to prepare asset write: {exc}") from exc
        if latest is not None and latest >= now:
            return latest + 1
        return now
