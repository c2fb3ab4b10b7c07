"""Doctor domain entity representing a consulting doctor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from ...core.utils.datetime_utils import get_current_timestamp
from ..value_objects.doctor_id import DoctorId
from ..value_objects.money import money_to_float, to_money


@dataclass
class Doctor:
    """Doctor domain entity.

    Note: validation of submitted form values happens before the entity is
    built; the only invariant kept here is a positive OPD fee.
    """

    doctor_id: DoctorId
    name: str
    contact_number: str
    registration_number: str
    opd_fees: Decimal
    created_at: datetime = field(default_factory=get_current_timestamp)
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.opd_fees = to_money(self.opd_fees)
        if self.opd_fees <= 0:
            raise ValueError("OPD fees must be greater than zero")

    def to_record(self) -> Dict[str, Any]:
        """Gateway record for the ``doctors`` table."""
        return {
            "doctor_id": self.doctor_id.value,
            "name": self.name,
            "contact_number": self.contact_number,
            "registration_number": self.registration_number,
            "opd_fees": money_to_float(self.opd_fees),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Doctor":
        return cls(
            doctor_id=DoctorId(record["doctor_id"]),
            name=record["name"],
            contact_number=record["contact_number"],
            registration_number=record["registration_number"],
            opd_fees=to_money(record["opd_fees"]),
            created_at=record.get("created_at") or get_current_timestamp(),
            id=record.get("id"),
        )
