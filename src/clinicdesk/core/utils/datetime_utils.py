"""
Date and time utility functions for ClinicDesk application.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


def parse_date(value: Union[str, date, datetime]) -> date:
    """Coerce an ISO ``YYYY-MM-DD`` string, date or datetime to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValueError("Invalid date format. Use YYYY-MM-DD")


def two_digit_year(now: Optional[datetime] = None) -> str:
    """Last two digits of the current (or given) year."""
    now = now or datetime.now()
    return f"{now.year % 100:02d}"


def epoch_millis(now: Optional[datetime] = None) -> int:
    """Milliseconds since the Unix epoch."""
    now = now or get_current_timestamp()
    return int(now.timestamp() * 1000)


def calculate_age(
    birthdate: Union[str, date, datetime, None], today: Optional[date] = None
) -> Optional[int]:
    """Calculate age in completed years from birthdate.

    Returns None when no birthdate is supplied.
    """
    if not birthdate:
        return None

    birthdate = parse_date(birthdate)
    today = today or date.today()
    age = today.year - birthdate.year

    # Adjust if birthday hasn't occurred this year
    if today.month < birthdate.month or (
        today.month == birthdate.month and today.day < birthdate.day
    ):
        age -= 1

    return age
