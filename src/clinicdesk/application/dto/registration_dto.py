"""Registration and catalog DTOs.

Request fields carry raw form values; validation happens in the use cases.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ...domain.entities.doctor import Doctor
from ...domain.entities.patient import Patient
from ...domain.entities.service import Service


@dataclass
class RegisterPatientRequest:
    """Request DTO for patient registration."""

    name: str = ""
    dob: str = ""
    gender: str = ""
    contact_number: str = ""
    address: str = ""


@dataclass
class RegisterPatientResponse:
    """Response DTO for patient registration."""

    patient: Patient
    message: str


@dataclass
class RegisterDoctorRequest:
    """Request DTO for doctor registration."""

    name: str = ""
    contact_number: str = ""
    registration_number: str = ""
    opd_fees: Optional[Any] = None


@dataclass
class RegisterDoctorResponse:
    """Response DTO for doctor registration."""

    doctor: Doctor
    message: str


@dataclass
class AddServiceRequest:
    """Request DTO for adding a catalog service."""

    service_name: str = ""
    service_type: str = ""
    price: Optional[Any] = None


@dataclass
class AddServiceResponse:
    """Response DTO for adding a catalog service."""

    service: Service
    message: str
