"""Date sequences for the day, week and month views of the roster."""

import calendar
import datetime
from typing import Literal

from dutyroster.core.constants import (
    DAYS_PER_WEEK,
    HOURS_PER_DAY,
    MONTH_GRID_CELLS,
    MONTH_NAMES,
    MONTH_SHORT_NAMES,
    SUNDAY,
    WEEKDAY_NAMES,
)
from dutyroster.core.models import ViewMode, ViewWindow
from dutyroster.core.types import NavigationDates

Direction = Literal["prev", "next"]


def week_dates(date: datetime.date) -> list[datetime.date]:
    """
    Returns the 7 dates Monday through Sunday of the week containing `date`.

    A Sunday belongs to the week that started six days earlier.
    """
    monday = date - datetime.timedelta(days=date.weekday())
    return [monday + datetime.timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def month_dates(date: datetime.date, first_weekday: int = SUNDAY) -> list[datetime.date]:
    """
    Returns the 42 dates of the month grid containing `date`.

    The grid starts with the trailing days of the previous month needed to
    reach `first_weekday` (Sunday by default, matching the Sun..Sat header),
    continues with every day of the month and is padded with days of the next
    month. The result always spans 6 complete weeks.

    Args:
        date: Any day in the month to show
        first_weekday: datetime.weekday() index of the grid's first column

    Returns:
        List of exactly 42 consecutive dates
    """
    first_of_month = date.replace(day=1)
    leading_days = (first_of_month.weekday() - first_weekday) % DAYS_PER_WEEK
    grid_start = first_of_month - datetime.timedelta(days=leading_days)
    return [grid_start + datetime.timedelta(days=offset) for offset in range(MONTH_GRID_CELLS)]


def window_dates(window: ViewWindow) -> list[datetime.date]:
    """Dates displayed by a view window: 1, 7 or 42 of them."""
    if window.mode == "day":
        return [window.date]
    if window.mode == "week":
        return week_dates(window.date)
    if window.mode == "month":
        return month_dates(window.date)

    raise ValueError(f"Unsupported view mode: {window.mode}")


def _shift_month(date: datetime.date, months: int) -> datetime.date:
    """Moves `date` by whole months, clamping the day to the target month's length."""
    month_index = date.year * 12 + (date.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return datetime.date(year, month, min(date.day, last_day))


def navigate(window: ViewWindow, direction: Direction) -> ViewWindow:
    """
    Returns the window one step back or forward.

    - day:   +/- 1 day
    - week:  +/- 7 days
    - month: +/- 1 month (Jan 31 -> Feb 28/29)
    """
    step = 1 if direction == "next" else -1

    if window.mode == "day":
        new_date = window.date + datetime.timedelta(days=step)
    elif window.mode == "week":
        new_date = window.date + datetime.timedelta(weeks=step)
    elif window.mode == "month":
        new_date = _shift_month(window.date, step)
    else:
        raise ValueError(f"Unsupported view mode: {window.mode}")

    return ViewWindow(mode=window.mode, date=new_date)


def get_navigation_dates(mode: ViewMode, current_date: datetime.date) -> NavigationDates:
    """Prev/next reference dates for the navigation buttons of a view."""
    window = ViewWindow(mode=mode, date=current_date)
    return {
        "prev_date": navigate(window, "prev").date,
        "next_date": navigate(window, "next").date,
    }


def time_slots() -> list[str]:
    """Labels for the 24 hour rows: "00:00" .. "23:00"."""
    return [f"{hour:02d}:00" for hour in range(HOURS_PER_DAY)]


def _short_date(date: datetime.date) -> str:
    return f"{MONTH_SHORT_NAMES[date.month - 1]} {date.day}"


def window_title(window: ViewWindow) -> str:
    """
    Header label for a view window.

    - day:   "Monday, November 10, 2025"
    - week:  "Nov 10 - Nov 16, 2025"
    - month: "November 2025"
    """
    if window.mode == "day":
        d = window.date
        return f"{WEEKDAY_NAMES[d.weekday()]}, {MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"

    if window.mode == "week":
        dates = week_dates(window.date)
        return f"{_short_date(dates[0])} - {_short_date(dates[-1])}, {window.date.year}"

    if window.mode == "month":
        return f"{MONTH_NAMES[window.date.month - 1]} {window.date.year}"

    raise ValueError(f"Unsupported view mode: {window.mode}")
