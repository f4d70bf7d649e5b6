# dutyroster/routes/calendar.py
"""
Calendar grid endpoints: window dates and navigation without any shifts.
"""

from fastapi import APIRouter

from dutyroster.core.calendar_grid import get_navigation_dates, time_slots, window_dates, window_title
from dutyroster.core.models import ViewWindow
from dutyroster.core.utils import get_today
from dutyroster.core.validators import validate_date_param, validate_view_mode

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("/{mode}")
async def get_calendar_window(mode: str, date: str | None = None):
    """Dates, title and prev/next targets for a day, week or month window."""
    view_mode = validate_view_mode(mode)
    reference = validate_date_param(date, default=get_today())
    window = ViewWindow(mode=view_mode, date=reference)

    return {
        "mode": view_mode,
        "date": reference,
        "title": window_title(window),
        "dates": window_dates(window),
        "navigation": get_navigation_dates(view_mode, reference),
        "time_slots": time_slots() if view_mode != "month" else [],
    }
