"""CSV exports of users and sessions for the admin console."""

import csv
import io
from collections.abc import Iterable
from datetime import date, datetime

from captiveportal.domain.entities import SessionListing
from captiveportal.infrastructure.persistence.models import UserAccountModel

USER_REPORT_COLUMNS = [
    "ID",
    "First Name",
    "Last Name",
    "Email",
    "Phone Number",
    "Company",
    "Registration Date",
    "Last Login",
    "Active",
]

SESSION_REPORT_COLUMNS = [
    "Session ID",
    "User Email",
    "First Name",
    "Last Name",
    "Company",
    "IP Address",
    "MAC Address",
    "Session Start",
    "Session End",
    "Bytes In",
    "Bytes Out",
]


def report_filename(kind: str, today: date | None = None) -> str:
    """Build the download filename, e.g. ``users_report_2024-05-01.csv``."""
    today = today or date.today()
    return f"{kind}_report_{today.isoformat()}.csv"


def _format_datetime(value: datetime | None) -> str:
    return value.isoformat() if value is not None else ""


def _to_csv(header: list[str], rows: Iterable[list]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(header)
    writer.writerows(rows)
    return output.getvalue()


def render_users_csv(users: Iterable[UserAccountModel]) -> str:
    """Render users as CSV text with a header row."""
    return _to_csv(
        USER_REPORT_COLUMNS,
        (
            [
                user.id,
                user.first_name,
                user.last_name,
                user.email,
                user.phone_number,
                user.company or "",
                _format_datetime(user.registration_date),
                _format_datetime(user.last_login),
                "true" if user.is_active else "false",
            ]
            for user in users
        ),
    )


def render_sessions_csv(sessions: Iterable[SessionListing]) -> str:
    """Render joined session listings as CSV text with a header row."""
    return _to_csv(
        SESSION_REPORT_COLUMNS,
        (
            [
                listing.id,
                listing.user_email,
                listing.first_name,
                listing.last_name,
                listing.company or "",
                listing.ip_address or "",
                listing.mac_address or "",
                _format_datetime(listing.session_start),
                _format_datetime(listing.session_end),
                listing.bytes_in,
                listing.bytes_out,
            ]
            for listing in sessions
        ),
    )
