"""Register Doctor use case."""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from ...core.exceptions import DatabaseError, UniqueConstraintError
from ...core.structured_logger import audit_logger
from ...domain.entities.doctor import Doctor
from ...domain.enums.clinic import Table
from ...domain.errors import DuplicateDoctorError, OperationFailedError
from ...domain.value_objects.doctor_id import DoctorId
from ...domain.value_objects.money import to_money
from ..dto.registration_dto import RegisterDoctorRequest, RegisterDoctorResponse
from ..ports.data_gateway import DataGateway
from ..utils.form_validation import FormValidator, phone, positive_money, required

logger = logging.getLogger(__name__)

DOCTOR_FORM = FormValidator(
    required("name", "contact_number", "registration_number", "opd_fees"),
    phone("contact_number"),
    positive_money("opd_fees", "Please enter a valid OPD fees amount."),
)


class RegisterDoctorUseCase:
    """Use case for registering a consulting doctor."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(
        self, request: RegisterDoctorRequest, now: Optional[datetime] = None
    ) -> RegisterDoctorResponse:
        DOCTOR_FORM.validate(asdict(request))

        name = request.name.strip()
        registration_number = request.registration_number.strip()
        doctor = Doctor(
            doctor_id=DoctorId.generate(name, registration_number, now),
            name=name,
            contact_number=request.contact_number,
            registration_number=registration_number,
            opd_fees=to_money(request.opd_fees),
        )

        try:
            stored = await self._gateway.insert(Table.DOCTORS, doctor.to_record())
        except UniqueConstraintError:
            raise DuplicateDoctorError(doctor.doctor_id.value)
        except DatabaseError as e:
            logger.error(f"Doctor insert failed: {e}")
            raise OperationFailedError("Failed to register doctor.", "register_doctor")

        saved = Doctor.from_record(stored)
        audit_logger.info("doctor_registered", doctor_id=saved.doctor_id.value)
        return RegisterDoctorResponse(
            doctor=saved,
            message=f"Doctor registered successfully! ID: {saved.doctor_id.value}",
        )


class ListDoctorsUseCase:
    """Doctors for selectors, by name."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(self) -> List[Doctor]:
        try:
            records = await self._gateway.select(Table.DOCTORS, order_by="name")
        except DatabaseError as e:
            logger.error(f"Doctor listing failed: {e}")
            raise OperationFailedError("Failed to load doctors.", "list_doctors")
        return [Doctor.from_record(record) for record in records]
