"""Assembly of complete day, week and month layouts for a renderer.

Pure functions: every call recomputes from the given snapshot and keeps no
state between calls.
"""

import datetime
import logging
from collections.abc import Mapping, Sequence

from dutyroster.core.calendar_grid import get_navigation_dates, time_slots, window_dates, window_title
from dutyroster.core.config import HOUR_HEIGHT_PX
from dutyroster.core.constants import (
    HOURS_PER_DAY,
    MONTH_CELL_BACKGROUND_ALPHA,
    MONTH_CELL_PREVIEW_LIMIT,
    WEEKDAY_SHORT_NAMES,
)
from dutyroster.core.filtering import cell_has_shift, filter_shifts, shifts_on, summarize
from dutyroster.core.geometry import resolve_color, shift_geometry, shift_span_hours
from dutyroster.core.models import Department, RosterFilter, Shift, ShiftKind, ShiftType, ViewWindow, Ward
from dutyroster.core.time_utils import ShiftTimeError
from dutyroster.core.types import DayColumn, LayoutError, MonthCell, PlacedShift, RosterLayout, ShiftPreview

logger = logging.getLogger(__name__)


def split_renderable(shifts: Sequence[Shift]) -> tuple[list[Shift], list[LayoutError]]:
    """
    Separates shifts with usable times from those with malformed ones.

    Bad shifts are left out of rendering and reported, never raised.
    """
    renderable: list[Shift] = []
    errors: list[LayoutError] = []

    for shift in shifts:
        try:
            shift_span_hours(shift)
        except ShiftTimeError as e:
            logger.warning(
                "Shift %s excluded from layout: %s",
                shift.id,
                e,
                extra={"extra_fields": {"shift_id": shift.id, "field": e.field_name}},
            )
            errors.append(
                {
                    "shift_id": shift.id,
                    "field": e.field_name,
                    "value": None if e.value is None else str(e.value),
                    "message": str(e),
                }
            )
            continue
        renderable.append(shift)

    return renderable, errors


def _place(
    shift: Shift,
    column_date: datetime.date,
    hour_height: int,
    shift_types: Mapping[ShiftKind, ShiftType] | None,
) -> PlacedShift | None:
    geometry = shift_geometry(shift, column_date, hour_height, shift_types)
    if geometry is None:
        return None
    return {
        "id": shift.id,
        "doctor_name": shift.doctor_name,
        "specialty": shift.specialty,
        "start_time": shift.start_time,
        "end_time": shift.end_time,
        "shift_type": shift.shift_type.value,
        "status": shift.status.value,
        "geometry": geometry,
    }


def build_day_column(
    shifts: Sequence[Shift],
    column_date: datetime.date,
    today: datetime.date | None = None,
    hour_height: int = HOUR_HEIGHT_PX,
    shift_types: Mapping[ShiftKind, ShiftType] | None = None,
) -> DayColumn:
    """
    One day column: placed shift blocks plus the 24 hour cells.

    `shifts` must already be filtered and contain only valid times.
    """
    placed = []
    for shift in shifts:
        block = _place(shift, column_date, hour_height, shift_types)
        if block is not None:
            placed.append(block)

    labels = time_slots()
    hours = [
        {"hour": hour, "label": labels[hour], "occupied": cell_has_shift(shifts, column_date, hour)}
        for hour in range(HOURS_PER_DAY)
    ]

    return {
        "date": column_date,
        "weekday_name": WEEKDAY_SHORT_NAMES[column_date.weekday()],
        "is_today": column_date == today,
        "shift_count": len(placed),
        "shifts": placed,
        "hours": hours,
    }


def _surname(doctor_name: str) -> str:
    parts = doctor_name.split()
    return parts[-1] if parts else ""


def build_month_cell(
    shifts: Sequence[Shift],
    cell_date: datetime.date,
    month: int,
    today: datetime.date | None = None,
    shift_types: Mapping[ShiftKind, ShiftType] | None = None,
) -> MonthCell:
    """A month grid day box: count badge, first previews and the "+N more" rest."""
    day_shifts = shifts_on(shifts, cell_date)

    previews: list[ShiftPreview] = []
    for shift in day_shifts[:MONTH_CELL_PREVIEW_LIMIT]:
        color = resolve_color(shift, shift_types)
        previews.append(
            {
                "id": shift.id,
                "label": _surname(shift.doctor_name),
                "start_time": shift.start_time,
                "color": color,
                "background": f"{color}{MONTH_CELL_BACKGROUND_ALPHA}",
            }
        )

    return {
        "date": cell_date,
        "in_current_month": cell_date.month == month,
        "is_today": cell_date == today,
        "shift_count": len(day_shifts),
        "previews": previews,
        "more": max(len(day_shifts) - MONTH_CELL_PREVIEW_LIMIT, 0),
    }


def build_layout(
    shifts: Sequence[Shift],
    window: ViewWindow,
    roster_filter: RosterFilter | None = None,
    wards: Sequence[Ward] = (),
    departments: Sequence[Department] = (),
    shift_types: Mapping[ShiftKind, ShiftType] | None = None,
    today: datetime.date | None = None,
    hour_height: int = HOUR_HEIGHT_PX,
) -> RosterLayout:
    """
    Builds the full layout of a view window from a roster snapshot.

    Args:
        shifts: Canonical shifts, typically covering at least the window
        window: Selected view mode and reference date
        roster_filter: Ward/department/search filter; None means no filter
        wards: Reference list for resolving the ward filter id
        departments: Reference list for resolving the department filter id
        shift_types: Shift type definitions for fallback colors
        today: Date highlighted as today; None highlights nothing
        hour_height: Pixel height of one hour row

    Returns:
        Dict with dates, title, navigation, summary, filter diagnostics,
        layout errors and, depending on mode, `columns` (day, week),
        `cards` (day) or `cells` (month)
    """
    result = filter_shifts(shifts, roster_filter or RosterFilter(), wards, departments)
    renderable, errors = split_renderable(result.shifts)
    dates = window_dates(window)

    layout: RosterLayout = {
        "mode": window.mode,
        "title": window_title(window),
        "dates": dates,
        "navigation": get_navigation_dates(window.mode, window.date),
        "time_slots": time_slots(),
        "summary": summarize(result.shifts),
        "filter": result.diagnostics(),
        "errors": errors,
    }

    if window.mode in ("day", "week"):
        layout["columns"] = [build_day_column(renderable, d, today, hour_height, shift_types) for d in dates]

    if window.mode == "day":
        layout["cards"] = [s.model_dump(mode="json") for s in shifts_on(result.shifts, window.date)]

    if window.mode == "month":
        layout["cells"] = [
            build_month_cell(renderable, d, window.date.month, today, shift_types) for d in dates
        ]

    logger.debug(
        "Built %s layout for %s: %d shifts, %d errors",
        window.mode,
        window.date,
        len(renderable),
        len(errors),
    )

    return layout
