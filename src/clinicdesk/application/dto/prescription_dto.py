"""Prescription DTOs."""

from dataclasses import dataclass
from typing import Optional

from ...domain.entities.prescription import Prescription


@dataclass
class GeneratePrescriptionRequest:
    """Request DTO for a prescription preview."""

    patient_id: str = ""
    doctor_id: str = ""
    diagnosis: Optional[str] = None
    medications: Optional[str] = None


@dataclass
class GeneratePrescriptionResponse:
    prescription: Prescription
    message: str
