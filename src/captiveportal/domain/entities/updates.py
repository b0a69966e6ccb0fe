"""Typed partial updates accepted by the account services.

A field left as None is not changed. ``UserUpdate.company`` is the one
nullable column: it defaults to ``UNSET`` so that an explicit None clears it.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class UserUpdate:
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = UNSET
    is_active: bool | None = None

    def changes(self) -> dict:
        """Return only the fields that were set, including a cleared company."""
        changed = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is UNSET:
                continue
            if value is None and field.name != "company":
                continue
            changed[field.name] = value
        return changed


@dataclass
class AdminUpdate:
    email: str | None = None
    role: str | None = None
    is_active: bool | None = None

    def changes(self) -> dict:
        """Return only the fields that were set."""
        return {key: value for key, value in asdict(self).items() if value is not None}
