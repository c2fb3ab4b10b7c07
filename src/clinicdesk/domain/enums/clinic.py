"""
Enumerations shared by clinic records and session roles.
"""

from enum import Enum


class Gender(str, Enum):
    """Patient gender options offered on the registration form."""
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ServiceType(str, Enum):
    """Service catalog categories."""
    CONSULTATION = "Consultation"
    IMAGING = "Imaging"
    THERAPY = "Therapy"
    LAB_TEST = "Lab Test"


class Role(str, Enum):
    """Roles a user account can hold."""
    ADMIN = "admin"
    RECEPTIONIST = "receptionist"
    DOCTOR = "doctor"


class BillStatus(str, Enum):
    """Payment status of a bill."""
    PENDING = "Pending"  # Initial state, nothing paid
    PARTIAL = "Partial"
    PAID = "Paid"


class Table(str, Enum):
    """Tables exposed by the data gateway."""
    PATIENTS = "patients"
    DOCTORS = "doctors"
    SERVICES = "services"
    BILLS = "bills"
    BILL_ITEMS = "bill_items"
    USERS = "users"
