"""
Tests for mapping backend roster records onto canonical shifts,
and for the shift type configuration they rely on.
"""

import datetime
import json
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from dutyroster.core.models import ShiftKind, ShiftStatus
from dutyroster.core.normalize import NormalizationError, normalize_shift, normalize_shifts
from dutyroster.core.storage import StorageError, load_shift_types


def _record(**overrides) -> dict:
    record = {
        "id": 7,
        "user_id": 3,
        "shift_start_time": "22:00:00",
        "shift_end_time": "06:00:00",
        "shift_type": "Night",
        "ward_id": 1,
        "department_id": 12,
        "date": "2025-11-10",
        "status": "Confirmed",
        "notes": "Covering ICU",
        "specialization": "General Surgery",
    }
    record.update(overrides)
    return record


class TestNormalizeShift:
    """Backend field names and fallbacks."""

    def test_resolves_references(self, doctors, wards, departments, shift_types):
        shift = normalize_shift(_record(), doctors, wards, departments, shift_types)

        assert shift.id == "7"
        assert shift.doctor_id == "3"
        assert shift.doctor_name == "Dr. Vikram Singh"
        assert shift.specialty == "Surgeon"
        assert shift.ward == "ICU"
        assert shift.department == "Surgery"
        assert shift.date == datetime.date(2025, 11, 10)
        assert shift.start_time == "22:00"
        assert shift.end_time == "06:00"
        assert shift.shift_type is ShiftKind.NIGHT
        assert shift.status is ShiftStatus.CONFIRMED
        assert shift.color == "#F2994A"
        assert shift.notes == "Covering ICU"

    def test_unknown_references_fall_back(self, shift_types):
        shift = normalize_shift(_record(), shift_types=shift_types)

        assert shift.doctor_name == "Unknown Doctor"
        assert shift.specialty == "General Surgery"
        assert shift.ward == "Unknown Ward"
        assert shift.department == "General Surgery"
        assert shift.contact_number is None

    def test_missing_times_and_status_use_defaults(self, doctors, wards, departments):
        record = _record(shift_start_time=None, shift_end_time="", status=None, notes="")
        shift = normalize_shift(record, doctors, wards, departments)

        assert shift.start_time == "08:00"
        assert shift.end_time == "16:00"
        assert shift.status is ShiftStatus.SCHEDULED
        assert shift.notes is None
        assert shift.color == "#27AE60"

    def test_contact_number_from_doctor(self, doctors, wards, departments):
        shift = normalize_shift(_record(user_id=1), doctors, wards, departments)
        assert shift.contact_number == "+91-9876543210"

    def test_malformed_time_passes_through(self, doctors, wards, departments):
        """Bad times are not fixed here; the layout engine reports them."""
        shift = normalize_shift(_record(shift_start_time="7pm"), doctors, wards, departments)
        assert shift.start_time == "7pm"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"shift_type": "Brunch"},
            {"date": "not-a-date"},
            {"date": None},
            {"status": "Postponed"},
        ],
    )
    def test_invalid_records_raise(self, overrides):
        with pytest.raises(NormalizationError) as exc_info:
            normalize_shift(_record(**overrides))
        assert exc_info.value.record_id == 7


class TestNormalizeShifts:
    def test_skips_bad_records_and_keeps_order(self, doctors, wards, departments, caplog):
        records = [_record(id=1), _record(id=2, shift_type="Brunch"), _record(id=3, user_id=2)]

        with caplog.at_level("WARNING"):
            shifts, errors = normalize_shifts(records, doctors, wards, departments)

        assert [s.id for s in shifts] == ["1", "3"]
        assert [e.record_id for e in errors] == [2]
        assert "Skipping roster record" in caplog.text

    def test_empty_input(self):
        assert normalize_shifts([]) == ([], [])


class TestShiftTypeStorage:
    """shift_types.json loading."""

    def test_packaged_definitions(self):
        shift_types = {st.code: st for st in load_shift_types()}

        assert set(shift_types) == set(ShiftKind)
        assert shift_types[ShiftKind.MORNING].start_time == "06:00"
        assert shift_types[ShiftKind.NIGHT].end_time == "06:00"
        assert shift_types[ShiftKind.FULL_DAY].start_time == "09:00"
        assert shift_types[ShiftKind.ON_CALL].end_time == "23:59"
        assert shift_types[ShiftKind.EVENING].color == "#2F80ED"

    def test_invalid_json_raises_storage_error(self, tmp_path: Path):
        (tmp_path / "shift_types.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            load_shift_types(tmp_path)

    def test_missing_file_raises_storage_error(self, tmp_path: Path):
        with pytest.raises(StorageError):
            load_shift_types(tmp_path)

    def test_missing_type_raises_storage_error(self, tmp_path: Path):
        data = [{"code": "Morning", "start_time": "06:00", "end_time": "14:00", "color": "#27AE60"}]
        (tmp_path / "shift_types.json").write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(StorageError, match="missing"):
            load_shift_types(tmp_path)
