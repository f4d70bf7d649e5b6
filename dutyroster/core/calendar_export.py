"""iCal export of the duty roster."""

import datetime
import logging
from collections.abc import Sequence

from icalendar import Calendar, Event

from dutyroster.core.models import Shift, ShiftStatus
from dutyroster.core.time_utils import ShiftTimeError, parse_hhmm, shift_datetimes

logger = logging.getLogger(__name__)

# Roster status -> VEVENT STATUS
ICAL_STATUS: dict[ShiftStatus, str] = {
    ShiftStatus.SCHEDULED: "TENTATIVE",
    ShiftStatus.CONFIRMED: "CONFIRMED",
    ShiftStatus.COMPLETED: "CONFIRMED",
    ShiftStatus.CANCELLED: "CANCELLED",
}


def generate_ical(shifts: Sequence[Shift], calendar_name: str = "Duty Roster") -> str:
    """
    Generates an iCal feed with one event per shift.

    Shifts with malformed times are skipped and logged.

    Args:
        shifts: Shifts to export, usually the filtered roster
        calendar_name: Value of X-WR-CALNAME

    Returns:
        iCal formatted string
    """
    cal = Calendar()
    cal.add("prodid", "-//Duty Roster//dutyroster//")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", calendar_name)

    skipped = 0
    for shift in shifts:
        try:
            event = _create_shift_event(shift)
        except ShiftTimeError as e:
            logger.warning("Shift %s not exported: %s", shift.id, e)
            skipped += 1
            continue
        cal.add_component(event)

    if skipped:
        logger.warning(f"iCal export skipped {skipped} of {len(shifts)} shifts")

    return cal.to_ical().decode("utf-8")


def _create_shift_event(shift: Shift) -> Event:
    """
    Creates a VEVENT for a shift.

    Raises:
        ShiftTimeError: If the shift's times are malformed
    """
    start = parse_hhmm(shift.start_time, "start_time")
    end = parse_hhmm(shift.end_time, "end_time")
    start_dt, end_dt = shift_datetimes(shift.date, start, end)

    event = Event()
    event.add("summary", f"{shift.shift_type.value}: {shift.doctor_name}")
    event.add("uid", f"{shift.date.isoformat()}_{shift.id}@dutyroster")
    event.add("dtstart", start_dt)
    event.add("dtend", end_dt)
    event.add("location", shift.ward)

    description_parts = [f"Status: {shift.status.value}"]
    if shift.department:
        description_parts.append(f"Department: {shift.department}")
    if shift.specialty:
        description_parts.append(f"Specialty: {shift.specialty}")
    description_parts.append(f"Time: {shift.start_time} - {shift.end_time}")
    if shift.notes:
        description_parts.append(shift.notes)
    event.add("description", "\n".join(description_parts))

    event.add("status", ICAL_STATUS[shift.status])

    event.add("dtstamp", datetime.datetime.now(datetime.timezone.utc))

    return event
