"""
Domain entities package.
"""

from .bill import Bill, BillDraft, BillItem, BillLine
from .doctor import Doctor
from .patient import Patient
from .prescription import Prescription
from .service import Service
from .user import User

__all__ = [
    "Patient",
    "Doctor",
    "Service",
    "Bill",
    "BillItem",
    "BillLine",
    "BillDraft",
    "User",
    "Prescription",
]
