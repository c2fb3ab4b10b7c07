"""
Prescription preview schemas.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from ...domain.entities.prescription import Prescription


class GeneratePrescriptionRequest(BaseModel):
    patient_id: str = Field("", description="Registered patient ID")
    doctor_id: str = Field("", description="Registered doctor ID")
    diagnosis: Optional[str] = Field(None, description="Free-text diagnosis")
    medications: Optional[str] = Field(None, description="Free-text medications")


class PrescriptionOut(BaseModel):
    patient_id: str
    patient_name: str
    age: int
    gender: str
    address: str
    mobile: str
    doctor_id: str
    doctor_name: str
    date: date
    valid_until: date
    diagnosis: Optional[str] = None
    medications: Optional[str] = None

    @classmethod
    def from_entity(cls, prescription: Prescription) -> "PrescriptionOut":
        patient, doctor = prescription.patient, prescription.doctor
        return cls(
            patient_id=patient.patient_id.value,
            patient_name=patient.name,
            age=patient.age,
            gender=patient.gender.value,
            address=patient.address,
            mobile=patient.contact_number,
            doctor_id=doctor.doctor_id.value,
            doctor_name=doctor.name,
            date=prescription.issued_on,
            valid_until=prescription.valid_until,
            diagnosis=prescription.diagnosis,
            medications=prescription.medications,
        )
