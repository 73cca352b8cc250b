from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from assetroster.adapters.sqlalchemy.mappings import asset_table
from assetroster.adapters.sqlalchemy.repositories import SqlAlchemyAssetRepository
from tests.helpers.assets import make_draft

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_replace_many_inserts_and_replaces(sqlite_session: Session) -> None:
    repository = SqlAlchemyAssetRepository(sqlite_session)
    repository.replace_many([make_draft("E1", "Jane Doe", no=1).stamped(10)])
    sqlite_session.commit()

    repository.replace_many(
        [
            make_draft("E1", "Jane D.", organization_name="HQ").stamped(20),
            make_draft("E2", "Sam Lee", no=2.5).stamped(20),
        ]
    )
    sqlite_session.commit()

    stored = {record.staff_id: record for record in repository.list_all()}
    assert stored["E1"].full_name == "Jane D."
    assert stored["E1"].organization_name == "HQ"
    assert stored["E1"].no is None
    assert stored["E1"].modified_at == 20
    assert stored["E2"].no == 2.5


def test_get_and_latest_modified_at(sqlite_session: Session) -> None:
    repository = SqlAlchemyAssetRepository(sqlite_session)
    assert repository.latest_modified_at() is None

    record = make_draft("E1").stamped(42)
    repository.replace_many([record, make_draft("E0").stamped(7)])

    assert repository.get("E1") == record
    assert repository.get("missing") is None
    assert repository.latest_modified_at() == 42


def test_most_recent_breaks_ties_by_staff_id(sqlite_session: Session) -> None:
    repository = SqlAlchemyAssetRepository(sqlite_session)
    repository.replace_many(
        [
            make_draft("B").stamped(5),
            make_draft("A").stamped(5),
            make_draft("C").stamped(9),
        ]
    )

    assert [record.staff_id for record in repository.most_recent(3)] == ["C", "A", "B"]
    assert len(repository.most_recent(1)) == 1


def test_remove_many_counts_only_existing_rows(sqlite_session: Session) -> None:
    repository = SqlAlchemyAssetRepository(sqlite_session)
    repository.replace_many([make_draft("A").stamped(1), make_draft("B").stamped(1)])

    assert repository.remove_many(["A", "missing"]) == 1
    assert repository.remove_many([]) == 0
    assert [record.staff_id for record in repository.list_all()] == ["B"]


def test_remove_all_empties_the_table(sqlite_session: Session) -> None:
    repository = SqlAlchemyAssetRepository(sqlite_session)
    repository.replace_many([make_draft(f"E{index}").stamped(1) for index in range(3)])

    assert repository.remove_all() == 3
    assert sqlite_session.execute(select(asset_table)).all() == []
