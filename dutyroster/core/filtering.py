"""Roster filtering, summary aggregates and hour-cell occupancy."""

import datetime
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from dutyroster.core.constants import FILTER_ALL
from dutyroster.core.models import Department, RosterFilter, Shift, ShiftStatus, Ward
from dutyroster.core.time_utils import parse_hhmm
from dutyroster.core.types import FilterDiagnostics, RosterSummary

logger = logging.getLogger(__name__)


@dataclass
class FilterResult:
    """Filtered shifts plus what was excluded and why."""

    shifts: list[Shift]
    excluded_count: int = 0
    unresolved: dict[str, str] = field(default_factory=dict)

    def diagnostics(self) -> FilterDiagnostics:
        return {"excluded_count": self.excluded_count, "unresolved": dict(self.unresolved)}


def _resolve_ward_name(ward_id: str, wards: Iterable[Ward]) -> str | None:
    return next((w.name for w in wards if str(w.id) == ward_id), None)


def _resolve_department_name(department_id: str, departments: Iterable[Department]) -> str | None:
    return next((d.department_name for d in departments if str(d.id) == department_id), None)


def filter_shifts(
    shifts: Sequence[Shift],
    roster_filter: RosterFilter,
    wards: Sequence[Ward] = (),
    departments: Sequence[Department] = (),
) -> FilterResult:
    """
    Applies the ward, department and doctor-name filters.

    Rules (all must pass):
    - ward: "all", or the shift's ward equals the name of the selected ward id
    - department: "all", or the shift's department equals the selected
      department's name
    - search: case-insensitive substring of doctor_name; empty matches all

    A ward/department id missing from the reference list matches no shift.
    That exclusion is reported in `unresolved` and logged, not hidden.
    """
    unresolved: dict[str, str] = {}

    ward_name = None
    if roster_filter.ward_id != FILTER_ALL:
        ward_name = _resolve_ward_name(roster_filter.ward_id, wards)
        if ward_name is None:
            unresolved["ward_id"] = roster_filter.ward_id

    department_name = None
    if roster_filter.department_id != FILTER_ALL:
        department_name = _resolve_department_name(roster_filter.department_id, departments)
        if department_name is None:
            unresolved["department_id"] = roster_filter.department_id

    search = roster_filter.search.lower()

    def _matches(shift: Shift) -> bool:
        if roster_filter.ward_id != FILTER_ALL and (ward_name is None or shift.ward != ward_name):
            return False
        if roster_filter.department_id != FILTER_ALL and (
            department_name is None or shift.department != department_name
        ):
            return False
        if search and search not in shift.doctor_name.lower():
            return False
        return True

    kept = [s for s in shifts if _matches(s)]
    excluded = len(shifts) - len(kept)

    if unresolved:
        logger.warning(
            "Roster filter references unknown ids; %d shifts hidden",
            excluded,
            extra={"extra_fields": {"unresolved": unresolved, "excluded_count": excluded}},
        )

    return FilterResult(shifts=kept, excluded_count=excluded, unresolved=unresolved)


def summarize(shifts: Sequence[Shift]) -> RosterSummary:
    """Total, per-status counts and number of distinct doctors."""
    by_status = {status.value: 0 for status in ShiftStatus}
    for shift in shifts:
        by_status[shift.status.value] += 1

    return {
        "total": len(shifts),
        "confirmed": by_status[ShiftStatus.CONFIRMED.value],
        "scheduled": by_status[ShiftStatus.SCHEDULED.value],
        "active_doctors": len({s.doctor_id for s in shifts}),
        "by_status": by_status,
    }


def shifts_on(shifts: Iterable[Shift], date: datetime.date) -> list[Shift]:
    """Shifts dated on `date`, in their original order."""
    return [s for s in shifts if s.date == date]


def count_by_date(shifts: Iterable[Shift], dates: Iterable[datetime.date]) -> dict[datetime.date, int]:
    """Shift count per date for the day badges. Dates without shifts map to 0."""
    counts = {d: 0 for d in dates}
    for shift in shifts:
        if shift.date in counts:
            counts[shift.date] += 1
    return counts


def hour_cell_occupied(shift: Shift, column_date: datetime.date, hour: int) -> bool:
    """
    Whether `shift` covers hour row `hour` of the column for `column_date`.

    Only whole hours count: a regular shift covers [start_hour, end_hour);
    an overnight one (end_hour < start_hour) covers hour >= start_hour or
    hour < end_hour of its own date's column.

    Raises:
        ShiftTimeError: If the shift's times are malformed
    """
    if shift.date != column_date:
        return False

    start_hour, _ = parse_hhmm(shift.start_time, "start_time")
    end_hour, _ = parse_hhmm(shift.end_time, "end_time")

    if start_hour <= hour < end_hour:
        return True
    return end_hour < start_hour and (hour >= start_hour or hour < end_hour)


def cell_has_shift(shifts: Iterable[Shift], column_date: datetime.date, hour: int) -> bool:
    """True when any shift covers the cell, which hides the "add shift" button."""
    return any(hour_cell_occupied(s, column_date, hour) for s in shifts)
