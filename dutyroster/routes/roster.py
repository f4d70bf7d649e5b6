# dutyroster/routes/roster.py
"""
Roster layout endpoints.

The host posts the snapshot it fetched from the roster backend; records are
normalized here, at the boundary, before the layout engine sees them.
"""

import datetime
from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from pydantic import BaseModel, Field

from dutyroster.core.calendar_export import generate_ical
from dutyroster.core.filtering import filter_shifts
from dutyroster.core.layout import build_layout
from dutyroster.core.logging_config import get_logger
from dutyroster.core.models import Department, Doctor, RosterFilter, Shift, ViewWindow, Ward
from dutyroster.core.normalize import NormalizationError, normalize_shifts
from dutyroster.core.sentry_config import capture_message
from dutyroster.core.storage import get_shift_types
from dutyroster.core.utils import get_today

logger = get_logger(__name__)

router = APIRouter(prefix="/api/roster", tags=["roster"])


class RosterSnapshot(BaseModel):
    """Roster data as loaded by the host, plus the user's current selections."""

    records: list[dict[str, Any]] = Field(default_factory=list)
    doctors: list[Doctor] = Field(default_factory=list)
    wards: list[Ward] = Field(default_factory=list)
    departments: list[Department] = Field(default_factory=list)
    filter: RosterFilter = Field(default_factory=RosterFilter)
    view: ViewWindow | None = None
    today: datetime.date | None = None


def _normalize(snapshot: RosterSnapshot) -> tuple[list[Shift], list[NormalizationError]]:
    return normalize_shifts(
        snapshot.records,
        snapshot.doctors,
        snapshot.wards,
        snapshot.departments,
        get_shift_types(),
    )


def _error_payload(errors: list[NormalizationError]) -> list[dict[str, str]]:
    return [{"record_id": str(e.record_id), "message": str(e)} for e in errors]


@router.post("/layout")
async def post_roster_layout(snapshot: RosterSnapshot):
    """Compute the day/week/month layout for a roster snapshot."""
    today = snapshot.today or get_today()
    window = snapshot.view or ViewWindow(mode="week", date=today)
    shifts, normalization_errors = _normalize(snapshot)

    layout = build_layout(
        shifts,
        window,
        snapshot.filter,
        snapshot.wards,
        snapshot.departments,
        get_shift_types(),
        today=today,
    )

    if layout["errors"] or normalization_errors:
        capture_message(
            "Roster snapshot contains unusable records",
            level="warning",
            context={
                "roster": {
                    "layout_errors": len(layout["errors"]),
                    "normalization_errors": len(normalization_errors),
                }
            },
        )

    return {**layout, "normalization_errors": _error_payload(normalization_errors)}


@router.post("/export.ics")
async def post_roster_export(snapshot: RosterSnapshot):
    """Export the filtered roster as an iCal feed."""
    shifts, _ = _normalize(snapshot)
    result = filter_shifts(shifts, snapshot.filter, snapshot.wards, snapshot.departments)

    logger.info(
        f"Exporting {len(result.shifts)} shifts to iCal",
        extra={"extra_fields": result.diagnostics()},
    )

    return Response(
        content=generate_ical(result.shifts),
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="duty_roster.ics"'},
    )


@router.get("/shift-types")
async def get_roster_shift_types():
    """Shift type definitions: label, default time range and color per type."""
    return [shift_type.model_dump(mode="json") for shift_type in get_shift_types().values()]
