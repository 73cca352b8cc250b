from __future__ import annotations

import dataclasses

import pytest

from assetroster.domain.errors import RecordValidationError
from assetroster.domain.model import AssetDraft, CanonicalField, validate_admission
from tests.helpers.assets import make_draft


def test_stamped_draft_keeps_fields_and_adds_timestamp() -> None:
    draft = make_draft("E1", "Jane Doe", organization_name="HQ", no=2)

    record = draft.stamped(1234)

    assert record.staff_id == "E1"
    assert record.full_name == "Jane Doe"
    assert record.organization_name == "HQ"
    assert record.no == 2
    assert record.modified_at == 1234
    assert record.to_draft() == draft


def test_records_are_immutable() -> None:
    record = make_draft().stamped(1)

    with pytest.raises(dataclasses.FrozenInstanceError):
        record.full_name = "Changed"  # type: ignore[misc]


def test_admission_accepts_complete_drafts() -> None:
    validate_admission(make_draft("E1", "Jane Doe"))


def test_admission_rejects_missing_full_name() -> None:
    with pytest.raises(RecordValidationError) as exc:
        validate_admission(AssetDraft(staff_id="E1", full_name="  "))

    assert exc.value.field == CanonicalField.FULL_NAME
    assert exc.value.staff_id == "E1"


def test_admission_rejects_missing_staff_id() -> None:
    with pytest.raises(RecordValidationError) as exc:
        validate_admission(AssetDraft(staff_id="", full_name="Jane Doe"))

    assert exc.value.field == CanonicalField.STAFF_ID
