"""Mapping of backend duty-roster records onto the canonical Shift shape.

The backend joins users, wards and departments by id and names its columns
after the database (user_id, shift_start_time, ...). Everything downstream of
this module only ever sees `Shift`.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from dutyroster.core.constants import (
    DEFAULT_END_TIME,
    DEFAULT_SHIFT_COLOR,
    DEFAULT_START_TIME,
    UNKNOWN_DOCTOR_NAME,
    UNKNOWN_WARD_NAME,
)
from dutyroster.core.models import Department, Doctor, Shift, ShiftKind, ShiftStatus, ShiftType, Ward
from dutyroster.core.time_utils import truncate_backend_time

logger = logging.getLogger(__name__)


class NormalizationError(ValueError):
    """A backend record that cannot be turned into a Shift."""

    def __init__(self, record_id: Any, message: str):
        super().__init__(message)
        self.record_id = record_id


def _by_id(items: Sequence[Any]) -> dict[str, Any]:
    return {str(item.id): item for item in items}


def _color_for(shift_type: Any, shift_types: Mapping[ShiftKind, ShiftType] | None) -> str:
    if shift_types:
        for kind, definition in shift_types.items():
            if kind.value == shift_type:
                return definition.color
    return DEFAULT_SHIFT_COLOR


def normalize_shift(
    record: Mapping[str, Any],
    doctors: Sequence[Doctor] = (),
    wards: Sequence[Ward] = (),
    departments: Sequence[Department] = (),
    shift_types: Mapping[ShiftKind, ShiftType] | None = None,
) -> Shift:
    """
    Converts one backend roster record to a Shift.

    Fallbacks for missing references:
    - unknown user_id: doctor name "Unknown Doctor", specialty from
      `specialization`
    - unknown ward_id: "Unknown Ward"
    - unknown department_id: `specialization`, else ""
    - missing times: 08:00 / 16:00; "HH:MM:SS" is cut to "HH:MM"
    - missing status: Scheduled

    Raises:
        NormalizationError: If the record fails validation (bad date,
            unknown shift type, ...)
    """
    return _normalize(record, _by_id(doctors), _by_id(wards), _by_id(departments), shift_types)


def _normalize(
    record: Mapping[str, Any],
    doctors: dict[str, Doctor],
    wards: dict[str, Ward],
    departments: dict[str, Department],
    shift_types: Mapping[ShiftKind, ShiftType] | None,
) -> Shift:
    record_id = record.get("id")
    doctor = doctors.get(str(record.get("user_id")))
    ward = wards.get(str(record.get("ward_id")))
    department = departments.get(str(record.get("department_id")))
    specialization = record.get("specialization") or ""

    try:
        return Shift(
            id=str(record_id),
            doctor_id=str(record.get("user_id")),
            doctor_name=doctor.name if doctor else UNKNOWN_DOCTOR_NAME,
            specialty=(doctor.specialty if doctor else "") or specialization,
            ward=ward.name if ward else UNKNOWN_WARD_NAME,
            department=department.department_name if department else specialization,
            date=record.get("date"),
            start_time=truncate_backend_time(record.get("shift_start_time")) or DEFAULT_START_TIME,
            end_time=truncate_backend_time(record.get("shift_end_time")) or DEFAULT_END_TIME,
            shift_type=record.get("shift_type"),
            status=record.get("status") or ShiftStatus.SCHEDULED,
            color=_color_for(record.get("shift_type"), shift_types),
            notes=record.get("notes") or None,
            contact_number=(doctor.phone if doctor else "") or None,
        )
    except ValidationError as e:
        raise NormalizationError(record_id, f"Invalid roster record {record_id!r}: {e}") from e


def normalize_shifts(
    records: Sequence[Mapping[str, Any]],
    doctors: Sequence[Doctor] = (),
    wards: Sequence[Ward] = (),
    departments: Sequence[Department] = (),
    shift_types: Mapping[ShiftKind, ShiftType] | None = None,
) -> tuple[list[Shift], list[NormalizationError]]:
    """
    Normalizes a batch of records.

    Records that cannot be converted are logged and returned in the error
    list; the remaining shifts keep their original order.
    """
    doctor_map, ward_map, department_map = _by_id(doctors), _by_id(wards), _by_id(departments)
    shifts: list[Shift] = []
    errors: list[NormalizationError] = []

    for record in records:
        try:
            shifts.append(_normalize(record, doctor_map, ward_map, department_map, shift_types))
        except NormalizationError as e:
            logger.warning("Skipping roster record %r: %s", e.record_id, e)
            errors.append(e)

    if errors:
        logger.warning(
            "Normalized %d of %d roster records",
            len(shifts),
            len(records),
            extra={"extra_fields": {"skipped_ids": [str(e.record_id) for e in errors]}},
        )

    return shifts, errors
