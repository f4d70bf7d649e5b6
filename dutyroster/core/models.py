import datetime
import enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from dutyroster.core.constants import (
    FILTER_ALL,
    SHIFT_TYPE_EVENING,
    SHIFT_TYPE_FULL_DAY,
    SHIFT_TYPE_MORNING,
    SHIFT_TYPE_NIGHT,
    SHIFT_TYPE_ON_CALL,
)

ViewMode = Literal["day", "week", "month"]


class RosterModel(BaseModel):
    """Base for roster payloads. Backend ids arrive as ints and are kept as str."""

    model_config = ConfigDict(coerce_numbers_to_str=True)


class ShiftKind(str, enum.Enum):
    """Duty shift categories. Values are the labels the roster backend stores."""

    MORNING = SHIFT_TYPE_MORNING
    EVENING = SHIFT_TYPE_EVENING
    NIGHT = SHIFT_TYPE_NIGHT
    FULL_DAY = SHIFT_TYPE_FULL_DAY
    ON_CALL = SHIFT_TYPE_ON_CALL


class ShiftStatus(str, enum.Enum):
    """Shift status. Transitions are driven by the backend and only displayed here."""

    SCHEDULED = "Scheduled"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class ShiftType(BaseModel):
    """Shift type definition with default timing and display color."""
    code: ShiftKind
    label: str | None = None
    start_time: str
    end_time: str
    color: str


class Shift(RosterModel):
    """A scheduled duty assignment for one doctor on one calendar date.

    start_time/end_time are "HH:MM" strings kept unparsed; an end before the
    start means the shift runs past midnight but still belongs to `date`.
    """
    id: str
    doctor_id: str
    doctor_name: str
    specialty: str = ""
    ward: str
    department: str = ""
    date: datetime.date
    start_time: str
    end_time: str
    shift_type: ShiftKind
    status: ShiftStatus = ShiftStatus.SCHEDULED
    color: str | None = None
    notes: str | None = None
    contact_number: str | None = None


class Doctor(RosterModel):
    """Practitioner reference as listed by the backend."""
    id: str
    name: str
    specialty: str = ""
    department: str = ""
    phone: str = ""


class Ward(RosterModel):
    id: str
    name: str


class Department(RosterModel):
    id: str
    department_name: str


class RosterFilter(RosterModel):
    """Active roster filters. Ward and department hold ids, or "all"."""
    ward_id: str = FILTER_ALL
    department_id: str = FILTER_ALL
    search: str = ""


class ViewWindow(BaseModel):
    """Display window selected by the user: a mode and a reference date."""
    mode: ViewMode = "week"
    date: datetime.date
