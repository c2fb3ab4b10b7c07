"""
Patient, doctor and service catalog schemas.

Request fields are deliberately loose (plain strings, optional); the use
cases apply the form rules so each form reports its own message.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field

from ...domain.entities.doctor import Doctor
from ...domain.entities.patient import Patient
from ...domain.entities.service import Service


class RegisterPatientRequest(BaseModel):
    name: str = Field("", description="Full name")
    dob: str = Field("", description="Date of birth (YYYY-MM-DD)")
    gender: str = Field("", description="Male, Female or Other")
    contact_number: str = Field("", description="10-digit contact number")
    address: str = Field("", description="Postal address")


class PatientOut(BaseModel):
    patient_id: str
    name: str
    dob: date
    age: int
    gender: str
    contact_number: str
    address: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, patient: Patient) -> "PatientOut":
        return cls(
            patient_id=patient.patient_id.value,
            name=patient.name,
            dob=patient.dob,
            age=patient.age,
            gender=patient.gender.value,
            contact_number=patient.contact_number,
            address=patient.address,
            created_at=patient.created_at,
        )


class RegisterDoctorRequest(BaseModel):
    name: str = Field("", description="Full name")
    contact_number: str = Field("", description="10-digit contact number")
    registration_number: str = Field("", description="Medical registration number")
    opd_fees: Optional[Union[str, float]] = Field(None, description="Outpatient consultation fee")


class DoctorOut(BaseModel):
    doctor_id: str
    name: str
    contact_number: str
    registration_number: str
    opd_fees: Decimal
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, doctor: Doctor) -> "DoctorOut":
        return cls(
            doctor_id=doctor.doctor_id.value,
            name=doctor.name,
            contact_number=doctor.contact_number,
            registration_number=doctor.registration_number,
            opd_fees=doctor.opd_fees,
            created_at=doctor.created_at,
        )


class AddServiceRequest(BaseModel):
    service_name: str = Field("", description="Service display name")
    service_type: str = Field("", description="Consultation, Imaging, Therapy or Lab Test")
    price: Optional[Union[str, float]] = Field(None, description="Catalog price")


class ServiceOut(BaseModel):
    id: str
    service_name: str
    service_type: str
    price: Decimal
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceOut":
        return cls(
            id=str(service.id),
            service_name=service.service_name,
            service_type=service.service_type.value,
            price=service.price,
            created_at=service.created_at,
        )
