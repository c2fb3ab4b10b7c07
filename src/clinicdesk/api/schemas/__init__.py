"""
API schemas package.
"""

# Common schemas
from .common import ApiResponse, ErrorResponse

# Registration and catalog schemas
from .registration import (
    AddServiceRequest,
    DoctorOut,
    PatientOut,
    RegisterDoctorRequest,
    RegisterPatientRequest,
    ServiceOut,
)

# Billing schemas
from .billing import BillDraftRequest, BillOut, BillPreviewOut, InvoiceOut

# User and session schemas
from .users import ChangePasswordRequest, CreateUserRequest, LoginRequest, SessionOut, UserOut

# Prescription schemas
from .prescription import GeneratePrescriptionRequest, PrescriptionOut

__all__ = [
    # Common
    "ApiResponse",
    "ErrorResponse",

    # Registration
    "RegisterPatientRequest",
    "PatientOut",
    "RegisterDoctorRequest",
    "DoctorOut",
    "AddServiceRequest",
    "ServiceOut",

    # Billing
    "BillDraftRequest",
    "BillPreviewOut",
    "BillOut",
    "InvoiceOut",

    # Users
    "CreateUserRequest",
    "ChangePasswordRequest",
    "UserOut",
    "LoginRequest",
    "SessionOut",

    # Prescriptions
    "GeneratePrescriptionRequest",
    "PrescriptionOut",
]
