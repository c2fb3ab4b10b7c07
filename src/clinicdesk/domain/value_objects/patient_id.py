"""
Patient ID value object for type-safe patient identification.
Format: {YY}-{LAST4_OF_CONTACT}-{FIRST4_OF_NAME}
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ...core.utils.datetime_utils import two_digit_year

NAME_SEGMENT_LENGTH = 4
PAD_CHAR = "X"


@dataclass(frozen=True)
class PatientId:
    """Immutable patient identifier value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate patient ID format."""
        if not isinstance(self.value, str):
            raise ValueError("Patient ID must be a string")

        if not self.value:
            raise ValueError("Patient ID cannot be empty")

        # Validate format: YY-NNNN-XXXX (name segment is whatever the name started with)
        pattern = r"^\d{2}-.{1,4}-.{4}$"
        if not re.match(pattern, self.value, re.DOTALL):
            raise ValueError("Patient ID must follow format: YY-LAST4-NAME4")

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __eq__(self, other: Any) -> bool:
        """Equality comparison."""
        if not isinstance(other, PatientId):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        """Hash for use in sets and dictionaries."""
        return hash(self.value)

    @classmethod
    def generate(
        cls, name: str, contact_number: str, now: Optional[datetime] = None
    ) -> "PatientId":
        """Generate a new patient ID from name and contact number."""
        return cls(generate_patient_id(name, contact_number, now))


def generate_patient_id(
    name: str, contact_number: str, now: Optional[datetime] = None
) -> str:
    """Build ``YY-last4-NAME4`` for a pre-validated name and contact number.

    The name segment is the first four characters uppercased and right-padded
    with 'X', so an empty name yields ``XXXX``. Runs of whitespace in the name
    count as a single space.
    """
    year = two_digit_year(now)
    last4 = contact_number[-4:]
    name = " ".join(name.split())
    # upper() can lengthen some characters, so cut again before padding
    first4 = name[:NAME_SEGMENT_LENGTH].upper()[:NAME_SEGMENT_LENGTH]
    first4 = first4.ljust(NAME_SEGMENT_LENGTH, PAD_CHAR)
    return f"{year}-{last4}-{first4}"
