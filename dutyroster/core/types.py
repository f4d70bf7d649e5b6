# dutyroster/core/types.py

"""
Type definitions for the structures the layout engine hands to a renderer.

Inputs are pydantic models (see models.py); everything computed from them is
a plain TypedDict so it serializes straight to JSON.
"""

from datetime import date
from typing import NewType, TypedDict

ShiftId = NewType("ShiftId", str)

# Type aliases for common structures
Hours = float
Pixels = float


class SlotGeometry(TypedDict):
    """Vertical placement of a shift block inside a day column."""

    top: Pixels
    height: Pixels
    background_color: str
    opacity: float


class PlacedShift(TypedDict):
    """A shift together with its geometry in one day column."""

    id: ShiftId
    doctor_name: str
    specialty: str
    start_time: str
    end_time: str
    shift_type: str
    status: str
    geometry: SlotGeometry


class HourCell(TypedDict):
    """One hour row of a day column."""

    hour: int
    label: str
    occupied: bool


class DayColumn(TypedDict):
    """A day column of the week (or day) view."""

    date: date
    weekday_name: str
    is_today: bool
    shift_count: int
    shifts: list[PlacedShift]
    hours: list[HourCell]


class ShiftPreview(TypedDict):
    """Compact shift entry shown inside a month cell."""

    id: ShiftId
    label: str
    start_time: str
    color: str
    background: str


class MonthCell(TypedDict):
    """One day box of the 42-cell month grid."""

    date: date
    in_current_month: bool
    is_today: bool
    shift_count: int
    previews: list[ShiftPreview]
    more: int


class RosterSummary(TypedDict):
    """Aggregates shown in the summary badges above the roster."""

    total: int
    confirmed: int
    scheduled: int
    active_doctors: int
    by_status: dict[str, int]


class LayoutError(TypedDict):
    """A shift left out of the layout because of bad upstream data."""

    shift_id: ShiftId
    field: str
    value: str | None
    message: str


class FilterDiagnostics(TypedDict):
    """Makes filter exclusions visible instead of silently dropping shifts."""

    excluded_count: int
    unresolved: dict[str, str]


class NavigationDates(TypedDict):
    """Reference dates for the prev/next buttons."""

    prev_date: date
    next_date: date


class RosterLayout(TypedDict, total=False):
    """Everything a renderer needs for one view window."""

    mode: str
    title: str
    dates: list[date]
    navigation: NavigationDates
    time_slots: list[str]
    summary: RosterSummary
    filter: FilterDiagnostics
    errors: list[LayoutError]
    columns: list[DayColumn]
    cards: list[dict]
    cells: list[MonthCell]
