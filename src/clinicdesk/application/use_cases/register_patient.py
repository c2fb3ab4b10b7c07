"""Register Patient use case.

Validates the registration form, derives age and patient ID, and stores the
patient record.
"""

import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import List, Optional

from ...core.exceptions import DatabaseError, UniqueConstraintError
from ...core.structured_logger import audit_logger
from ...core.utils.datetime_utils import calculate_age, parse_date
from ...domain.entities.patient import Patient
from ...domain.enums.clinic import Gender, Table
from ...domain.errors import DuplicatePatientError, OperationFailedError
from ...domain.value_objects.patient_id import PatientId
from ..dto.registration_dto import RegisterPatientRequest, RegisterPatientResponse
from ..ports.data_gateway import DataGateway
from ..utils.form_validation import FormValidator, enum_value, past_date, phone, required

logger = logging.getLogger(__name__)

PATIENT_FORM = FormValidator(
    required("name", "dob", "gender", "contact_number", "address"),
    phone("contact_number"),
    enum_value("gender", Gender, "Please select a valid gender."),
    past_date("dob"),
)


class RegisterPatientUseCase:
    """Use case for registering a new patient."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(
        self, request: RegisterPatientRequest, now: Optional[datetime] = None
    ) -> RegisterPatientResponse:
        """Execute the register patient use case."""
        PATIENT_FORM.validate(asdict(request))

        name = request.name.strip()
        dob = parse_date(request.dob)
        today = now.date() if now else date.today()
        patient = Patient(
            patient_id=PatientId.generate(name, request.contact_number, now),
            name=name,
            dob=dob,
            age=calculate_age(dob, today),
            gender=Gender(request.gender),
            contact_number=request.contact_number,
            address=request.address.strip(),
        )

        try:
            stored = await self._gateway.insert(Table.PATIENTS, patient.to_record())
        except UniqueConstraintError:
            raise DuplicatePatientError(patient.patient_id.value)
        except DatabaseError as e:
            logger.error(f"Patient insert failed: {e}")
            raise OperationFailedError("Failed to register patient.", "register_patient")

        saved = Patient.from_record(stored)
        audit_logger.info("patient_registered", patient_id=saved.patient_id.value)
        return RegisterPatientResponse(
            patient=saved,
            message=f"Patient registered successfully! ID: {saved.patient_id.value}",
        )


class ListPatientsUseCase:
    """Patients for selectors, newest first."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(self) -> List[Patient]:
        try:
            records = await self._gateway.select(
                Table.PATIENTS, order_by="created_at", descending=True
            )
        except DatabaseError as e:
            logger.error(f"Patient listing failed: {e}")
            raise OperationFailedError("Failed to load patients.", "list_patients")
        return [Patient.from_record(record) for record in records]
