"""
MongoDB Beanie models for the clinic collections.

Uniqueness rules live in the indexes declared here, so the database is the
final word on duplicates even when two requests race.
"""

from datetime import datetime
from typing import Dict, Type

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, DESCENDING, IndexModel

from clinicdesk.core.utils.datetime_utils import get_current_timestamp
from clinicdesk.domain.enums.clinic import Role, Table


class PatientMongo(Document):
    """MongoDB model for Patient entity."""

    patient_id: str = Field(..., description="Derived patient ID (YY-last4-NAME)")
    name: str = Field(..., description="Patient name")
    dob: str = Field(..., description="Date of birth (YYYY-MM-DD)")
    age: int = Field(..., description="Age in completed years at registration")
    gender: str = Field(..., description="Male, Female or Other")
    contact_number: str = Field(..., description="10-digit contact number")
    address: str = Field(..., description="Postal address")
    created_at: datetime = Field(default_factory=get_current_timestamp)

    class Settings:
        name = Table.PATIENTS.value
        indexes = [
            IndexModel([("patient_id", ASCENDING)], unique=True, name="uniq_patient_id"),
            IndexModel([("created_at", DESCENDING)]),
        ]


class DoctorMongo(Document):
    """MongoDB model for Doctor entity."""

    doctor_id: str = Field(..., description="Derived doctor ID (DOC-YYreg4-INITIALS)")
    name: str = Field(..., description="Doctor name")
    contact_number: str = Field(..., description="10-digit contact number")
    registration_number: str = Field(..., description="Medical registration number")
    opd_fees: float = Field(..., description="Outpatient consultation fee")
    created_at: datetime = Field(default_factory=get_current_timestamp)

    class Settings:
        name = Table.DOCTORS.value
        indexes = [
            IndexModel([("doctor_id", ASCENDING)], unique=True, name="uniq_doctor_id"),
            "name",
        ]


class ServiceMongo(Document):
    """MongoDB model for a catalog service."""

    service_name: str = Field(..., description="Service display name")
    service_type: str = Field(..., description="Consultation, Imaging, Therapy or Lab Test")
    price: float = Field(..., description="Current catalog price")
    created_at: datetime = Field(default_factory=get_current_timestamp)

    class Settings:
        name = Table.SERVICES.value
        indexes = ["service_name"]


class BillMongo(Document):
    """MongoDB model for a bill header."""

    bill_number: str = Field(..., description="BILL-<epoch millis>")
    patient_id: str = Field(..., description="Billed patient")
    total_amount: float = Field(...)
    paid_amount: float = Field(default=0.0)
    balance: float = Field(...)
    status: str = Field(default="Pending", description="Pending, Partial or Paid")
    created_at: datetime = Field(default_factory=get_current_timestamp)

    class Settings:
        name = Table.BILLS.value
        indexes = [
            IndexModel([("bill_number", ASCENDING)], unique=True, name="uniq_bill_number"),
            "patient_id",
            IndexModel([("created_at", DESCENDING)]),
        ]


class BillItemMongo(Document):
    """MongoDB model for one priced bill line (price snapshot)."""

    bill_id: str = Field(..., description="Owning bill id")
    service_id: str = Field(...)
    service_name: str = Field(...)
    unit_price: float = Field(...)
    quantity: int = Field(default=1, ge=1)
    amount: float = Field(...)
    discount: float = Field(default=0.0)
    final_amount: float = Field(...)
    created_at: datetime = Field(default_factory=get_current_timestamp)

    class Settings:
        name = Table.BILL_ITEMS.value
        indexes = ["bill_id"]


class UserMongo(Document):
    """MongoDB model for a login account."""

    user_id: str = Field(..., description="Login ID")
    password: str = Field(..., description="PBKDF2 password hash")
    role: str = Field(..., description="admin, receptionist or doctor")
    department: str = Field(default="")
    created_at: datetime = Field(default_factory=get_current_timestamp)

    class Settings:
        name = Table.USERS.value
        indexes = [
            IndexModel([("user_id", ASCENDING)], unique=True, name="uniq_user_id"),
            # at most one receptionist account
            IndexModel(
                [("role", ASCENDING)],
                unique=True,
                partialFilterExpression={"role": Role.RECEPTIONIST.value},
                name="uniq_receptionist",
            ),
        ]


TABLE_MODELS: Dict[Table, Type[Document]] = {
    Table.PATIENTS: PatientMongo,
    Table.DOCTORS: DoctorMongo,
    Table.SERVICES: ServiceMongo,
    Table.BILLS: BillMongo,
    Table.BILL_ITEMS: BillItemMongo,
    Table.USERS: UserMongo,
}
