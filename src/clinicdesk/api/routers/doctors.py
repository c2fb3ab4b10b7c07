"""Doctor registration and listing endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from ...application.access.role_router import View
from ...application.dto.registration_dto import RegisterDoctorRequest as RegisterDoctorDTO
from ...application.use_cases.register_doctor import ListDoctorsUseCase, RegisterDoctorUseCase
from ..deps import GatewayDep, require_view
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.registration import DoctorOut, RegisterDoctorRequest
from ..utils.responses import ok

router = APIRouter(prefix="/doctors", tags=["Doctor Registration"])


@router.post(
    "",
    response_model=ApiResponse[DoctorOut],
    status_code=status.HTTP_201_CREATED,
    summary="Register a doctor",
    dependencies=[Depends(require_view(View.DOCTOR_REGISTRATION))],
    responses={
        409: {"model": ErrorResponse, "description": "Duplicate doctor ID"},
        422: {"model": ErrorResponse, "description": "Form validation failed"},
        500: {"model": ErrorResponse, "description": "Failed to register doctor"},
    },
)
async def register_doctor(request: Request, body: RegisterDoctorRequest, gateway: GatewayDep):
    result = await RegisterDoctorUseCase(gateway).execute(RegisterDoctorDTO(**body.model_dump()))
    return ok(request, data=DoctorOut.from_entity(result.doctor), message=result.message)


@router.get(
    "",
    response_model=ApiResponse[List[DoctorOut]],
    dependencies=[Depends(require_view(View.DOCTOR_REGISTRATION, View.PRESCRIPTION))],
)
async def list_doctors(request: Request, gateway: GatewayDep):
    doctors = await ListDoctorsUseCase(gateway).execute()
    return ok(request, data=[DoctorOut.from_entity(d) for d in doctors], message="OK")
