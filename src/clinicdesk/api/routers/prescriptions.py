"""Prescription preview endpoint."""

from fastapi import APIRouter, Depends, Request

from ...application.access.role_router import View
from ...application.dto.prescription_dto import (
    GeneratePrescriptionRequest as GeneratePrescriptionDTO,
)
from ...application.use_cases.generate_prescription import GeneratePrescriptionUseCase
from ..deps import GatewayDep, SettingsDep, require_view
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.prescription import GeneratePrescriptionRequest, PrescriptionOut
from ..utils.responses import ok

router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])


@router.post(
    "",
    response_model=ApiResponse[PrescriptionOut],
    dependencies=[Depends(require_view(View.PRESCRIPTION))],
    responses={
        404: {"model": ErrorResponse, "description": "Patient or doctor not found"},
        422: {"model": ErrorResponse, "description": "Patient and doctor are required"},
    },
)
async def generate_prescription(
    request: Request, body: GeneratePrescriptionRequest, gateway: GatewayDep, settings: SettingsDep
):
    """Printable prescription preview; nothing is stored."""
    use_case = GeneratePrescriptionUseCase(gateway, settings.clinic.prescription_validity_days)
    result = await use_case.execute(GeneratePrescriptionDTO(**body.model_dump()))
    return ok(request, data=PrescriptionOut.from_entity(result.prescription), message=result.message)
