"""
Bill number value object.
Format: BILL-{EPOCH_MILLIS}
"""

import re
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ...core.utils.datetime_utils import epoch_millis

_last_millis = 0
_lock = threading.Lock()


@dataclass(frozen=True)
class BillNumber:
    """Immutable bill number value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate bill number format."""
        if not isinstance(self.value, str) or not re.match(r"^BILL-\d+$", self.value):
            raise ValueError("Bill number must follow format: BILL-<epoch millis>")

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BillNumber):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    @classmethod
    def generate(cls, now: Optional[datetime] = None) -> "BillNumber":
        """Generate a new bill number."""
        return cls(generate_bill_number(now))


def generate_bill_number(now: Optional[datetime] = None) -> str:
    """``BILL-{epoch millis}``, strictly increasing within this process.

    Two calls landing in the same millisecond get consecutive values; the
    persistence layer's unique index on bill_number covers other processes.
    """
    global _last_millis
    millis = epoch_millis(now)
    with _lock:
        if millis <= _last_millis:
            millis = _last_millis + 1
        _last_millis = millis
    return f"BILL-{millis}"
