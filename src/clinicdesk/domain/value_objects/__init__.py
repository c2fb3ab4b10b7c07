"""
Value objects package for domain layer.
"""

from .bill_number import BillNumber, generate_bill_number
from .doctor_id import DoctorId, generate_doctor_id
from .patient_id import PatientId, generate_patient_id

__all__ = [
    "PatientId",
    "DoctorId",
    "BillNumber",
    "generate_patient_id",
    "generate_doctor_id",
    "generate_bill_number",
]
