"""Unit tests for CSV report rendering."""

import csv
import io
from datetime import date, datetime, timezone
from types import SimpleNamespace

from captiveportal.domain.entities import SessionListing
from captiveportal.domain.services import (
    render_sessions_csv,
    render_users_csv,
    report_filename,
)
from captiveportal.domain.services.report_service import (
    SESSION_REPORT_COLUMNS,
    USER_REPORT_COLUMNS,
)


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_report_filename():
    assert report_filename("users", today=date(2024, 5, 1)) == "users_report_2024-05-01.csv"
    assert report_filename("sessions").startswith("sessions_report_")


def test_render_users_csv():
    user = SimpleNamespace(
        id="u-1",
        first_name="John",
        last_name="Doe",
        email="john@test.com",
        phone_number="08012345678",
        company=None,
        registration_date=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
        last_login=None,
        is_active=True,
    )

    rows = _rows(render_users_csv([user]))

    assert rows[0] == USER_REPORT_COLUMNS
    assert rows[1] == [
        "u-1",
        "John",
        "Doe",
        "john@test.com",
        "08012345678",
        "",
        "2024-05-01T09:30:00+00:00",
        "",
        "true",
    ]


def test_render_users_csv_quotes_commas():
    user = SimpleNamespace(
        id="u-2",
        first_name="Jane",
        last_name="Smith",
        email="jane@test.com",
        phone_number="09087654321",
        company="Globex, Inc.",
        registration_date=None,
        last_login=None,
        is_active=False,
    )

    text = render_users_csv([user])

    assert '"Globex, Inc."' in text
    assert _rows(text)[1][5] == "Globex, Inc."
    assert _rows(text)[1][8] == "false"


def test_render_sessions_csv():
    listing = SessionListing(
        id="s-1",
        user_email="john@test.com",
        first_name="John",
        last_name="Doe",
        company="Acme",
        ip_address="10.0.0.5",
        mac_address=None,
        gateway_session_id=None,
        session_start=datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc),
        session_end=None,
        bytes_in=1024,
        bytes_out=0,
    )

    rows = _rows(render_sessions_csv([listing]))

    assert rows[0] == SESSION_REPORT_COLUMNS
    assert rows[1] == [
        "s-1",
        "john@test.com",
        "John",
        "Doe",
        "Acme",
        "10.0.0.5",
        "",
        "2024-05-01T09:00:00+00:00",
        "",
        "1024",
        "0",
    ]


def test_render_empty_reports_have_header_only():
    assert _rows(render_users_csv([])) == [USER_REPORT_COLUMNS]
    assert _rows(render_sessions_csv([])) == [SESSION_REPORT_COLUMNS]
