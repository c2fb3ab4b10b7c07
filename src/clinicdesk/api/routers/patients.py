"""Patient registration and listing endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from ...application.access.role_router import View
from ...application.dto.registration_dto import RegisterPatientRequest as RegisterPatientDTO
from ...application.use_cases.register_patient import ListPatientsUseCase, RegisterPatientUseCase
from ..deps import GatewayDep, require_view
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.registration import PatientOut, RegisterPatientRequest
from ..utils.responses import ok

router = APIRouter(prefix="/patients", tags=["Patient Registration"])


@router.post(
    "",
    response_model=ApiResponse[PatientOut],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new patient",
    dependencies=[Depends(require_view(View.PATIENT_REGISTRATION))],
    responses={
        409: {"model": ErrorResponse, "description": "Duplicate patient ID"},
        422: {"model": ErrorResponse, "description": "Form validation failed"},
        500: {"model": ErrorResponse, "description": "Failed to register patient"},
    },
)
async def register_patient(request: Request, body: RegisterPatientRequest, gateway: GatewayDep):
    """
    Register a new patient.

    Derives the age from the date of birth and the patient ID from the
    registration year, contact number and name.
    """
    result = await RegisterPatientUseCase(gateway).execute(RegisterPatientDTO(**body.model_dump()))
    return ok(request, data=PatientOut.from_entity(result.patient), message=result.message)


@router.get(
    "",
    response_model=ApiResponse[List[PatientOut]],
    dependencies=[Depends(require_view(View.PATIENT_REGISTRATION, View.BILLING, View.PRESCRIPTION))],
)
async def list_patients(request: Request, gateway: GatewayDep):
    patients = await ListPatientsUseCase(gateway).execute()
    return ok(request, data=[PatientOut.from_entity(p) for p in patients], message="OK")
