"""
Integration tests for FastAPI endpoints.

Tests verify the calendar and roster endpoints end to end, including
boundary normalization of backend records.
"""

import datetime
import sys
from pathlib import Path
from unittest.mock import patch

from icalendar import Calendar

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402

MONDAY = datetime.date(2025, 11, 10)


def _snapshot(**overrides) -> dict:
    snapshot = {
        "records": [
            {
                "id": 1,
                "user_id": 1,
                "shift_start_time": "06:00:00",
                "shift_end_time": "14:00:00",
                "shift_type": "Morning",
                "ward_id": 1,
                "department_id": 10,
                "date": "2025-11-10",
                "status": "Confirmed",
            },
            {
                "id": 2,
                "user_id": 2,
                "shift_start_time": "22:00:00",
                "shift_end_time": "06:00:00",
                "shift_type": "Night",
                "ward_id": 2,
                "department_id": 11,
                "date": "2025-11-12",
                "status": "Scheduled",
            },
        ],
        "doctors": [
            {"id": 1, "name": "Dr. Rajesh Kumar", "specialty": "Cardiologist"},
            {"id": 2, "name": "Dr. Priya Sharma", "specialty": "Pediatrician"},
        ],
        "wards": [{"id": 1, "name": "ICU"}, {"id": 2, "name": "General Ward"}],
        "departments": [
            {"id": 10, "department_name": "Cardiology"},
            {"id": 11, "department_name": "Pediatrics"},
        ],
        "view": {"mode": "week", "date": "2025-11-12"},
    }
    snapshot.update(overrides)
    return snapshot


class TestHealth:
    def test_health_endpoint_returns_ok(self, test_client):
        """GET /health should return 200 OK for monitoring."""
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["shift_types"] == 5

    def test_request_id_header(self, test_client):
        response = test_client.get("/health")
        assert response.headers.get("X-Request-ID")


class TestCalendarEndpoint:
    """GET /api/calendar/{mode}"""

    def test_week_window(self, test_client):
        response = test_client.get("/api/calendar/week", params={"date": "2025-11-16"})

        assert response.status_code == 200
        data = response.json()
        assert data["dates"][0] == "2025-11-10"
        assert data["dates"][-1] == "2025-11-16"
        assert data["title"] == "Nov 10 - Nov 16, 2025"
        assert data["navigation"] == {"prev_date": "2025-11-09", "next_date": "2025-11-23"}
        assert len(data["time_slots"]) == 24

    def test_month_window(self, test_client):
        response = test_client.get("/api/calendar/month", params={"date": "2025-11-01"})

        data = response.json()
        assert len(data["dates"]) == 42
        assert data["dates"][0] == "2025-10-26"
        assert data["time_slots"] == []

    @patch("dutyroster.routes.calendar.get_today", return_value=MONDAY)
    def test_defaults_to_today(self, mock_today, test_client):
        response = test_client.get("/api/calendar/day")

        assert response.status_code == 200
        assert response.json()["dates"] == ["2025-11-10"]

    def test_invalid_mode_returns_400(self, test_client):
        response = test_client.get("/api/calendar/year")
        assert response.status_code == 400

    def test_invalid_date_returns_400(self, test_client):
        response = test_client.get("/api/calendar/week", params={"date": "2025-02-30"})
        assert response.status_code == 400


class TestRosterLayoutEndpoint:
    """POST /api/roster/layout"""

    def test_week_layout(self, test_client):
        response = test_client.post("/api/roster/layout", json=_snapshot())

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "week"
        assert data["summary"]["total"] == 2
        assert data["summary"]["active_doctors"] == 2

        monday, _, wednesday = data["columns"][:3]
        assert monday["shifts"][0]["doctor_name"] == "Dr. Rajesh Kumar"
        assert monday["shifts"][0]["geometry"]["top"] == 360
        assert monday["shifts"][0]["geometry"]["height"] == 480
        assert wednesday["shifts"][0]["geometry"]["top"] == 1320
        assert wednesday["shifts"][0]["geometry"]["height"] == 480
        assert wednesday["shifts"][0]["geometry"]["background_color"] == "#F2994A"
        assert data["normalization_errors"] == []
        assert data["errors"] == []

    def test_ward_filter(self, test_client):
        snapshot = _snapshot(filter={"ward_id": "2", "department_id": "all", "search": ""})
        data = test_client.post("/api/roster/layout", json=snapshot).json()

        assert data["summary"]["total"] == 1
        assert data["filter"] == {"excluded_count": 1, "unresolved": {}}

    def test_unknown_filter_id_is_reported(self, test_client):
        snapshot = _snapshot(filter={"ward_id": 404})
        data = test_client.post("/api/roster/layout", json=snapshot).json()

        assert data["summary"]["total"] == 0
        assert data["filter"]["unresolved"] == {"ward_id": "404"}

    def test_bad_records_are_reported_not_fatal(self, test_client):
        snapshot = _snapshot()
        snapshot["records"].append({"id": 3, "user_id": 1, "shift_type": "Brunch", "date": "2025-11-10"})
        snapshot["records"].append(
            {"id": 4, "user_id": 1, "shift_type": "Morning", "date": "2025-11-10", "shift_start_time": "6:00"}
        )

        with patch("dutyroster.routes.roster.capture_message") as mock_capture:
            response = test_client.post("/api/roster/layout", json=snapshot)

        assert response.status_code == 200
        data = response.json()
        assert [e["record_id"] for e in data["normalization_errors"]] == ["3"]
        assert [e["shift_id"] for e in data["errors"]] == ["4"]
        mock_capture.assert_called_once()

    @patch("dutyroster.routes.roster.get_today", return_value=MONDAY)
    def test_month_layout_defaults(self, mock_today, test_client):
        snapshot = _snapshot(view={"mode": "month", "date": "2025-11-10"})
        data = test_client.post("/api/roster/layout", json=snapshot).json()

        assert len(data["cells"]) == 42
        monday = next(c for c in data["cells"] if c["date"] == "2025-11-10")
        assert monday["is_today"] is True
        assert monday["shift_count"] == 1
        assert monday["previews"][0]["label"] == "Kumar"

    @patch("dutyroster.routes.roster.get_today", return_value=MONDAY)
    def test_view_defaults_to_current_week(self, mock_today, test_client):
        snapshot = _snapshot()
        del snapshot["view"]
        data = test_client.post("/api/roster/layout", json=snapshot).json()

        assert data["mode"] == "week"
        assert data["dates"][0] == "2025-11-10"

    @patch("dutyroster.routes.roster.get_today", return_value=MONDAY)
    def test_today_from_body_marks_column(self, mock_today, test_client):
        """A client-supplied today wins over the server clock."""
        snapshot = _snapshot(view={"mode": "week", "date": "2025-11-10"}, today="2025-11-12")
        data = test_client.post("/api/roster/layout", json=snapshot).json()

        flags = {column["date"]: column["is_today"] for column in data["columns"]}
        assert flags["2025-11-12"] is True
        assert sum(flags.values()) == 1
        mock_today.assert_not_called()

    def test_invalid_view_mode_is_rejected(self, test_client):
        snapshot = _snapshot(view={"mode": "year", "date": "2025-11-10"})
        response = test_client.post("/api/roster/layout", json=snapshot)

        assert response.status_code == 422


class TestRosterExportEndpoint:
    """POST /api/roster/export.ics"""

    def test_export_returns_calendar(self, test_client):
        response = test_client.post("/api/roster/export.ics", json=_snapshot())

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/calendar")
        cal = Calendar.from_ical(response.text)
        assert len(cal.walk("VEVENT")) == 2

    def test_export_respects_filter(self, test_client):
        snapshot = _snapshot(filter={"search": "priya"})
        response = test_client.post("/api/roster/export.ics", json=snapshot)

        cal = Calendar.from_ical(response.text)
        events = cal.walk("VEVENT")
        assert len(events) == 1
        assert str(events[0]["summary"]) == "Night: Dr. Priya Sharma"


class TestShiftTypesEndpoint:
    """GET /api/roster/shift-types"""

    def test_lists_default_time_ranges(self, test_client):
        response = test_client.get("/api/roster/shift-types")

        assert response.status_code == 200
        by_code = {item["code"]: item for item in response.json()}
        assert len(by_code) == 5
        assert by_code["Night"]["start_time"] == "22:00"
        assert by_code["Night"]["end_time"] == "06:00"
        assert by_code["Full Day"]["start_time"] == "09:00"
        assert by_code["Morning"]["color"].startswith("#")
