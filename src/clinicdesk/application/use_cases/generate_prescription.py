"""Generate Prescription use case.

Builds a printable prescription header from a registered patient and doctor.
Nothing is persisted.
"""

import logging
from dataclasses import asdict
from datetime import date
from typing import Optional

from ...core.exceptions import DatabaseError, RecordNotFoundError
from ...domain.entities.doctor import Doctor
from ...domain.entities.patient import Patient
from ...domain.entities.prescription import Prescription
from ...domain.enums.clinic import Table
from ...domain.errors import DoctorNotFoundError, OperationFailedError, PatientNotFoundError
from ..dto.prescription_dto import GeneratePrescriptionRequest, GeneratePrescriptionResponse
from ..ports.data_gateway import DataGateway
from ..utils.form_validation import FormValidator, required

logger = logging.getLogger(__name__)

PRESCRIPTION_FORM = FormValidator(required("patient_id", "doctor_id"))


class GeneratePrescriptionUseCase:
    """Use case for previewing a prescription."""

    def __init__(self, gateway: DataGateway, validity_days: int = 7):
        self._gateway = gateway
        self._validity_days = validity_days

    async def execute(
        self, request: GeneratePrescriptionRequest, today: Optional[date] = None
    ) -> GeneratePrescriptionResponse:
        PRESCRIPTION_FORM.validate(asdict(request))

        try:
            patient_record = await self._gateway.select_one(
                Table.PATIENTS, {"patient_id": request.patient_id}
            )
        except RecordNotFoundError:
            raise PatientNotFoundError(request.patient_id)
        except DatabaseError as e:
            logger.error(f"Patient lookup failed: {e}")
            raise OperationFailedError("Failed to generate prescription.", "generate_prescription")

        try:
            doctor_record = await self._gateway.select_one(
                Table.DOCTORS, {"doctor_id": request.doctor_id}
            )
        except RecordNotFoundError:
            raise DoctorNotFoundError(request.doctor_id)
        except DatabaseError as e:
            logger.error(f"Doctor lookup failed: {e}")
            raise OperationFailedError("Failed to generate prescription.", "generate_prescription")

        prescription = Prescription.issue(
            patient=Patient.from_record(patient_record),
            doctor=Doctor.from_record(doctor_record),
            validity_days=self._validity_days,
            issued_on=today,
            diagnosis=request.diagnosis,
            medications=request.medications,
        )
        return GeneratePrescriptionResponse(
            prescription=prescription, message="Prescription generated successfully!"
        )
