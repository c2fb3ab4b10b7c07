"""Prescription preview built from a patient and a doctor."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from .doctor import Doctor
from .patient import Patient


@dataclass
class Prescription:
    """Printable prescription header; not persisted."""

    patient: Patient
    doctor: Doctor
    issued_on: date
    valid_until: date
    diagnosis: Optional[str] = None
    medications: Optional[str] = None

    @classmethod
    def issue(
        cls,
        patient: Patient,
        doctor: Doctor,
        validity_days: int,
        issued_on: Optional[date] = None,
        diagnosis: Optional[str] = None,
        medications: Optional[str] = None,
    ) -> "Prescription":
        issued_on = issued_on or date.today()
        return cls(
            patient=patient,
            doctor=doctor,
            issued_on=issued_on,
            valid_until=issued_on + timedelta(days=validity_days),
            diagnosis=diagnosis or None,
            medications=medications or None,
        )
