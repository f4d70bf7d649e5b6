import datetime
from typing import get_args

from fastapi import HTTPException, status

from dutyroster.core.config import DATE_FORMAT_ISO
from dutyroster.core.models import ViewMode

VIEW_MODES: tuple[str, ...] = get_args(ViewMode)


def validate_view_mode(mode: str) -> ViewMode:
    """
    Make sure mode is one of "day", "week", "month".

    Returns the mode if valid, otherwise raises 400.
    """
    if mode not in VIEW_MODES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported view mode: {mode}",
        )
    return mode  # type: ignore[return-value]


def validate_date_param(value: str | None, default: datetime.date) -> datetime.date:
    """
    Parse an ISO date query parameter.

    - None or empty: returns `default`
    - "YYYY-MM-DD": returns the date
    - anything else (including 2025-02-30): HTTP 400
    """
    if not value:
        return default

    try:
        return datetime.datetime.strptime(value, DATE_FORMAT_ISO).date()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date",
        )
