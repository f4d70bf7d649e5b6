"""Placement of shift blocks inside a 24-row day column."""

import datetime
from collections.abc import Mapping

from dutyroster.core.config import HOUR_HEIGHT_PX, SHIFT_BLOCK_OPACITY
from dutyroster.core.constants import DEFAULT_SHIFT_COLOR, HOURS_PER_DAY
from dutyroster.core.models import Shift, ShiftKind, ShiftType
from dutyroster.core.time_utils import parse_hhmm, to_fractional_hours
from dutyroster.core.types import Hours, SlotGeometry


def resolve_color(shift: Shift, shift_types: Mapping[ShiftKind, ShiftType] | None = None) -> str:
    """Instance color first, then the shift type color, then the default green."""
    if shift.color:
        return shift.color
    if shift_types and shift.shift_type in shift_types:
        return shift_types[shift.shift_type].color
    return DEFAULT_SHIFT_COLOR


def shift_span_hours(shift: Shift) -> tuple[Hours, Hours]:
    """
    Returns (start_position, duration) in fractional hours.

    start_position counts from midnight of the shift's date. When the end
    lies before the start the shift wraps past midnight and the duration is
    the time left until midnight plus the time elapsed after it, so the whole
    shift is drawn in its start day's column.

    Raises:
        ShiftTimeError: If start_time or end_time is not "HH:MM"
    """
    start_position = to_fractional_hours(*parse_hhmm(shift.start_time, "start_time"))
    end_position = to_fractional_hours(*parse_hhmm(shift.end_time, "end_time"))

    duration = end_position - start_position
    if duration < 0:
        duration = HOURS_PER_DAY - start_position + end_position

    return start_position, duration


def shift_duration_hours(shift: Shift) -> Hours:
    """Length of a shift in hours, overnight wrap included."""
    return shift_span_hours(shift)[1]


def shift_geometry(
    shift: Shift,
    column_date: datetime.date,
    hour_height: int = HOUR_HEIGHT_PX,
    shift_types: Mapping[ShiftKind, ShiftType] | None = None,
) -> SlotGeometry | None:
    """
    Computes the pixel block of a shift in the column for `column_date`.

    Args:
        shift: Shift to place
        column_date: Date of the day column being rendered
        hour_height: Pixel height of one hour row
        shift_types: Shift type definitions used for the fallback color

    Returns:
        top/height in pixels plus color and opacity, or None when the shift
        is dated on another day and does not render in this column

    Raises:
        ShiftTimeError: If the shift's times are malformed
    """
    if shift.date != column_date:
        return None

    start_position, duration = shift_span_hours(shift)

    return {
        "top": start_position * hour_height,
        "height": duration * hour_height,
        "background_color": resolve_color(shift, shift_types),
        "opacity": SHIFT_BLOCK_OPACITY,
    }
