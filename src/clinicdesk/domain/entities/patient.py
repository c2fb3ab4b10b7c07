"""Patient domain entity representing a patient in the clinic system."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional

from ...core.utils.datetime_utils import get_current_timestamp
from ..enums.clinic import Gender
from ..value_objects.patient_id import PatientId


@dataclass
class Patient:
    """Patient domain entity.

    Created once at registration; there is no edit or delete flow.
    """

    patient_id: PatientId
    name: str
    dob: date
    age: int
    gender: Gender
    contact_number: str
    address: str
    created_at: datetime = field(default_factory=get_current_timestamp)
    id: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        """Gateway record for the ``patients`` table."""
        return {
            "patient_id": self.patient_id.value,
            "name": self.name,
            "dob": self.dob.isoformat(),
            "age": self.age,
            "gender": self.gender.value,
            "contact_number": self.contact_number,
            "address": self.address,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Patient":
        dob = record.get("dob")
        return cls(
            patient_id=PatientId(record["patient_id"]),
            name=record["name"],
            dob=date.fromisoformat(dob) if isinstance(dob, str) else dob,
            age=int(record.get("age") or 0),
            gender=Gender(record["gender"]),
            contact_number=record["contact_number"],
            address=record.get("address", ""),
            created_at=record.get("created_at") or get_current_timestamp(),
            id=record.get("id"),
        )
