# dutyroster/core/constants.py
from typing import Final

# ==========================
# Calendar grid
# ==========================

#: Number of days per week. Used in loops instead of a bare "7".
DAYS_PER_WEEK: Final[int] = 7

#: Number of hour rows in a day column.
HOURS_PER_DAY: Final[int] = 24

#: Rows in the month view. Every month is drawn as 6 full weeks.
MONTH_GRID_ROWS: Final[int] = 6

#: Cells in the month view (6 rows x 7 days), independent of month length.
MONTH_GRID_CELLS: Final[int] = MONTH_GRID_ROWS * DAYS_PER_WEEK

#: Python weekday() index for Monday. The week view always starts here.
MONDAY: Final[int] = 0

#: Python weekday() index for Sunday. The month view header runs Sun..Sat.
SUNDAY: Final[int] = 6


# ==========================
# Shift types and statuses
# ==========================

#: Shift type labels as stored by the roster backend.
SHIFT_TYPE_MORNING: Final[str] = "Morning"
SHIFT_TYPE_EVENING: Final[str] = "Evening"
SHIFT_TYPE_NIGHT: Final[str] = "Night"
SHIFT_TYPE_FULL_DAY: Final[str] = "Full Day"
SHIFT_TYPE_ON_CALL: Final[str] = "On-Call"

#: Color used when neither the shift nor its type carries one.
DEFAULT_SHIFT_COLOR: Final[str] = "#27AE60"

#: Fallback times for backend records that arrive without start/end.
DEFAULT_START_TIME: Final[str] = "08:00"
DEFAULT_END_TIME: Final[str] = "16:00"

#: Display names for references that could not be resolved by id.
UNKNOWN_DOCTOR_NAME: Final[str] = "Unknown Doctor"
UNKNOWN_WARD_NAME: Final[str] = "Unknown Ward"

#: Filter value meaning "do not filter on this dimension".
FILTER_ALL: Final[str] = "all"


# ==========================
# Month view cells
# ==========================

#: Number of shift previews shown inside a month cell before "+N more".
MONTH_CELL_PREVIEW_LIMIT: Final[int] = 3

#: Hex alpha suffix for the faint preview background in month cells.
MONTH_CELL_BACKGROUND_ALPHA: Final[str] = "15"


# ==========================
# Weekday names (presentation)
# ==========================

#: Short English weekday names indexed by datetime.weekday() (0=Monday).
WEEKDAY_SHORT_NAMES: Final[tuple[str, ...]] = (
    "MON",
    "TUE",
    "WED",
    "THU",
    "FRI",
    "SAT",
    "SUN",
)

#: Short month names for range titles, indexed by month - 1.
MONTH_SHORT_NAMES: Final[tuple[str, ...]] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

#: Full month names for month view titles, indexed by month - 1.
MONTH_NAMES: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

#: Full English weekday names indexed by datetime.weekday() (0=Monday).
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
