"""Service catalog endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from ...application.access.role_router import View
from ...application.dto.registration_dto import AddServiceRequest as AddServiceDTO
from ...application.use_cases.manage_services import AddServiceUseCase, ListServicesUseCase
from ..deps import GatewayDep, require_view
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.registration import AddServiceRequest, ServiceOut
from ..utils.responses import ok

router = APIRouter(prefix="/services", tags=["Service Catalog"])


@router.post(
    "",
    response_model=ApiResponse[ServiceOut],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_view(View.SERVICE_CATALOG))],
    responses={
        422: {"model": ErrorResponse, "description": "Form validation failed"},
        500: {"model": ErrorResponse, "description": "Failed to add service"},
    },
)
async def add_service(request: Request, body: AddServiceRequest, gateway: GatewayDep):
    result = await AddServiceUseCase(gateway).execute(AddServiceDTO(**body.model_dump()))
    return ok(request, data=ServiceOut.from_entity(result.service), message=result.message)


@router.get(
    "",
    response_model=ApiResponse[List[ServiceOut]],
    dependencies=[Depends(require_view(View.SERVICE_CATALOG, View.BILLING))],
)
async def list_services(request: Request, gateway: GatewayDep):
    services = await ListServicesUseCase(gateway).execute()
    return ok(request, data=[ServiceOut.from_entity(s) for s in services], message="OK")
