"""Human-readable rendering of created_at timestamps for API responses."""

from datetime import datetime
from typing import Any

MONTHS = (
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


def to_readable_datetime(value: datetime | str) -> str:
    """
    Render a timestamp as e.g. "August 2, 2025 at 8:59am".

    Accepts a datetime or an SQL timestamp string ("2025-08-02 15:08:01.472785").
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    hour = value.hour % 12 or 12
    am_pm = "am" if value.hour < 12 else "pm"
    return f"{MONTHS[value.month - 1]} {value.day}, {value.year} at {hour}:{value.minute:02d}{am_pm}"


def with_readable_created_at(row: dict[str, Any]) -> dict[str, Any]:
    """Copy of row with createdAt rendered readable; rows without createdAt are returned unchanged."""
    created_at = row.get("createdAt")
    if created_at is None:
        return row
    return {**row, "createdAt": to_readable_datetime(created_at)}
