"""Billing, bill history and invoice endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from ...application.access.role_router import View
from ...application.use_cases.bill_history import GetInvoiceUseCase, ListBillsUseCase
from ...application.use_cases.create_bill import CreateBillUseCase, PreviewBillUseCase
from ..deps import GatewayDep, SettingsDep, require_view
from ..schemas.billing import BillDraftRequest, BillOut, BillPreviewOut, InvoiceOut
from ..schemas.common import ApiResponse, ErrorResponse
from ..utils.responses import ok

router = APIRouter(prefix="/bills", tags=["Billing"])


@router.post(
    "/preview",
    response_model=ApiResponse[BillPreviewOut],
    dependencies=[Depends(require_view(View.BILLING))],
)
async def preview_bill(request: Request, body: BillDraftRequest, gateway: GatewayDep):
    """Running total of a draft. Lines with no or unknown service count as zero."""
    preview = await PreviewBillUseCase(gateway).execute(body.to_dto())
    return ok(request, data=BillPreviewOut.from_dto(preview), message="OK")


@router.post(
    "",
    response_model=ApiResponse[BillOut],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_view(View.BILLING))],
    responses={
        404: {"model": ErrorResponse, "description": "Patient not found"},
        422: {"model": ErrorResponse, "description": "Form validation failed"},
        500: {"model": ErrorResponse, "description": "Failed to create bill"},
    },
)
async def create_bill(request: Request, body: BillDraftRequest, gateway: GatewayDep):
    """Create a bill and all of its items in one atomic write."""
    result = await CreateBillUseCase(gateway).execute(body.to_dto())
    return ok(request, data=BillOut.from_entity(result.bill), message=result.message)


@router.get(
    "",
    response_model=ApiResponse[List[BillOut]],
    dependencies=[Depends(require_view(View.BILL_HISTORY))],
)
async def list_bills(
    request: Request,
    gateway: GatewayDep,
    q: Optional[str] = Query(None, description="Bill number or patient ID fragment"),
):
    bills = await ListBillsUseCase(gateway).execute(q)
    return ok(request, data=[BillOut.from_entity(bill) for bill in bills], message="OK")


@router.get(
    "/{bill_number}/invoice",
    response_model=ApiResponse[InvoiceOut],
    dependencies=[Depends(require_view(View.BILL_HISTORY))],
    responses={404: {"model": ErrorResponse, "description": "Bill not found"}},
)
async def get_invoice(request: Request, bill_number: str, gateway: GatewayDep, settings: SettingsDep):
    invoice = await GetInvoiceUseCase(gateway, settings.clinic).execute(bill_number)
    return ok(request, data=InvoiceOut.from_dto(invoice), message="OK")
