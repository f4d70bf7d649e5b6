import datetime
import re
from typing import Any

from dutyroster.core.config import TIME_FORMAT_HM, TIME_HM_LENGTH

_HHMM_PATTERN = re.compile(r"^([0-9]{2}):([0-9]{2})$")


class ShiftTimeError(ValueError):
    """A shift start/end time that is not a valid "HH:MM" string."""

    def __init__(self, field_name: str, value: Any, message: str):
        super().__init__(message)
        self.field_name = field_name
        self.value = value


def parse_hhmm(value: Any, field_name: str = "time") -> tuple[int, int]:
    """Parse a shift time into (hour, minute).

    Accepts:
    1) str times: "HH:MM" with hour 00-23 and minute 00-59
    2) datetime.time objects

    Anything else raises ShiftTimeError (a ValueError). Logging of bad data is
    left to the caller, which knows which shift it came from.
    """
    if isinstance(value, datetime.time):
        return value.hour, value.minute

    if not isinstance(value, str):
        raise ShiftTimeError(
            field_name,
            value,
            f"Unsupported {field_name} type: {type(value).__name__}",
        )

    if not value:
        raise ShiftTimeError(field_name, value, f"{field_name} is empty")

    match = _HHMM_PATTERN.match(value)
    if match is None:
        raise ShiftTimeError(field_name, value, f"Invalid {field_name} format: {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ShiftTimeError(field_name, value, f"{field_name} out of range: {value!r}")

    return hour, minute


def to_fractional_hours(hour: int, minute: int) -> float:
    """Hours since midnight, e.g. (22, 30) -> 22.5."""
    return hour + minute / 60


def truncate_backend_time(value: Any) -> str | None:
    """Cut a backend time ("22:00:00") down to "HH:MM". Empty values give None."""
    if value is None:
        return None
    if isinstance(value, datetime.time):
        return value.strftime(TIME_FORMAT_HM)
    s = str(value).strip()
    if not s:
        return None
    return s[:TIME_HM_LENGTH]


def shift_datetimes(
    date: datetime.date, start: tuple[int, int], end: tuple[int, int]
) -> tuple[datetime.datetime, datetime.datetime]:
    """Return (start_datetime, end_datetime) for a shift on `date`.

    An end before the start runs into the next day. Equal start and end stay a
    zero-length interval.
    """
    start_dt = datetime.datetime.combine(date, datetime.time(*start))
    end_dt = datetime.datetime.combine(date, datetime.time(*end))

    # Past midnight
    if end_dt < start_dt:
        end_dt += datetime.timedelta(days=1)

    return start_dt, end_dt
