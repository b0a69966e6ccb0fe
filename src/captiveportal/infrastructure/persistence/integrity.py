"""Helpers for interpreting database integrity errors."""

from sqlalchemy.exc import IntegrityError


def violated_unique_column(error: IntegrityError, table: str, columns: list[str]) -> str | None:
    """Find which unique column an IntegrityError was raised for.

    SQLite reports ``UNIQUE constraint failed: <table>.<column>``; PostgreSQL
    reports the constraint name, which follows the ``uq_<table>_<column>``
    convention used by the models.

    Args:
        error: The IntegrityError raised on flush or commit.
        table: Table name the insert or update targeted.
        columns: Candidate unique columns, checked in order.

    Returns:
        The matching column name, or None if the error is not a known
        unique violation.
    """
    message = str(error.orig).lower()
    for column in columns:
        if f"{table}.{column}" in message or f"uq_{table}_{column}" in message:
            return column
    return None
