"""
Doctor ID value object.
Format: DOC-{YY}{LAST4_OF_REGISTRATION}-{INITIALS}
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ...core.utils.datetime_utils import two_digit_year

MIN_INITIALS = 2


@dataclass(frozen=True)
class DoctorId:
    """Immutable doctor identifier value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate doctor ID format."""
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("Doctor ID cannot be empty")

        if not re.match(r"^DOC-\d{2}.{1,4}-.{2,}$", self.value, re.DOTALL):
            raise ValueError("Doctor ID must follow format: DOC-YYREG4-INITIALS")

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DoctorId):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    @classmethod
    def generate(
        cls, name: str, registration_number: str, now: Optional[datetime] = None
    ) -> "DoctorId":
        """Generate a new doctor ID from name and registration number."""
        return cls(generate_doctor_id(name, registration_number, now))


def name_initials(name: str) -> str:
    """Uppercase first letter of each whitespace-separated word, padded to two."""
    initials = "".join(word[0] for word in name.split())
    return initials.upper().ljust(MIN_INITIALS, "X")


def generate_doctor_id(
    name: str, registration_number: str, now: Optional[datetime] = None
) -> str:
    """Build ``DOC-{YY}{last4 of registration}-{initials}``."""
    year = two_digit_year(now)
    reg4 = " ".join(registration_number.split())[-4:]
    return f"DOC-{year}{reg4}-{name_initials(name)}"
