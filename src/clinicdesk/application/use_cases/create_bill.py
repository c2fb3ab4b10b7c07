"""Bill preview and submission use cases.

A bill and all of its items are written in one atomic gateway call, so a
failure never leaves a bill without items.
"""

import logging
from dataclasses import asdict
from typing import Dict, List

from ...core.exceptions import (
    ChildInsertError,
    DatabaseError,
    RecordNotFoundError,
    UniqueConstraintError,
)
from ...core.structured_logger import audit_logger
from ...domain.entities.bill import MAX_QUANTITY, Bill, BillItem
from ...domain.entities.service import Service
from ...domain.enums.clinic import Table
from ...domain.errors import OperationFailedError, PatientNotFoundError
from ...domain.value_objects.bill_number import BillNumber
from ...domain.value_objects.money import to_money
from ..dto.bill_dto import (
    BillPreviewResponse,
    CreateBillRequest,
    CreateBillResponse,
    LinePreview,
)
from ..ports.data_gateway import DataGateway
from ..utils.billing import build_price_lookup, calculate_total, price_line_items, to_bill_line
from ..utils.form_validation import FormValidator, each, positive_integer, required

logger = logging.getLogger(__name__)

MISSING_SELECTION_MESSAGE = "Please select a patient and add at least one service."
BILL_NUMBER_ATTEMPTS = 3

BILL_FORM = FormValidator(
    required("patient_id", "lines", message=MISSING_SELECTION_MESSAGE),
    each("lines", positive_integer("quantity", maximum=MAX_QUANTITY)),
)


async def _load_catalog(gateway: DataGateway) -> Dict[str, Service]:
    records = await gateway.select(Table.SERVICES)
    services = [Service.from_record(record) for record in records]
    return {str(service.id): service for service in services}


class PreviewBillUseCase:
    """Running total for a draft.

    Unknown services and unusable quantities count as zero.
    """

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(self, request: CreateBillRequest) -> BillPreviewResponse:
        try:
            catalog = await _load_catalog(self._gateway)
        except DatabaseError as e:
            logger.error(f"Service lookup failed: {e}")
            raise OperationFailedError("Failed to load services.", "preview_bill")

        prices = build_price_lookup(catalog.values())
        lines = [to_bill_line(asdict(line)) for line in request.lines]
        previews = []
        for line in lines:
            service = catalog.get(line.service_id)
            previews.append(
                LinePreview(
                    service_id=line.service_id,
                    service_name=service.service_name if service else None,
                    unit_price=service.price if service else None,
                    quantity=line.quantity,
                    amount=to_money(service.price * line.quantity) if service else to_money(0),
                )
            )
        return BillPreviewResponse(lines=previews, total_amount=calculate_total(lines, prices))


class CreateBillUseCase:
    """Validate a draft, snapshot prices and persist the bill with its items."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(self, request: CreateBillRequest) -> CreateBillResponse:
        """Execute the create bill use case."""
        form = asdict(request)
        BILL_FORM.validate(form)

        try:
            await self._gateway.select_one(Table.PATIENTS, {"patient_id": request.patient_id})
        except RecordNotFoundError:
            raise PatientNotFoundError(request.patient_id)
        except DatabaseError as e:
            logger.error(f"Patient lookup failed: {e}")
            raise OperationFailedError("Failed to create bill.", "create_bill")

        try:
            catalog = await _load_catalog(self._gateway)
        except DatabaseError as e:
            logger.error(f"Service lookup failed: {e}")
            raise OperationFailedError("Failed to create bill.", "create_bill")

        items = price_line_items(form["lines"], catalog)
        bill = await self._persist(request.patient_id, items)

        audit_logger.info(
            "bill_created",
            bill_number=bill.bill_number.value,
            patient_id=bill.patient_id,
            total_amount=bill.total_amount,
            items=len(bill.items),
        )
        return CreateBillResponse(
            bill=bill,
            message=f"Bill generated successfully! Bill #{bill.bill_number.value}",
        )

    async def _persist(self, patient_id: str, items: List[BillItem]) -> Bill:
        attempt = 0
        while True:
            attempt += 1
            bill = Bill.create(patient_id, items, BillNumber.generate())
            try:
                stored = await self._gateway.insert_with_items(
                    Table.BILLS,
                    bill.to_record(),
                    Table.BILL_ITEMS,
                    [item.to_record() for item in items],
                    link_field="bill_id",
                )
            except UniqueConstraintError as e:
                if e.field == "bill_number" and attempt < BILL_NUMBER_ATTEMPTS:
                    logger.warning(f"Bill number collision on {bill.bill_number}, retrying")
                    continue
                logger.error(f"Bill insert failed: {e}")
                raise OperationFailedError("Failed to create bill.", "create_bill")
            except ChildInsertError as e:
                logger.error(f"Bill items insert failed: {e}")
                raise OperationFailedError("Failed to add bill items.", "create_bill_items")
            except DatabaseError as e:
                logger.error(f"Bill insert failed: {e}")
                raise OperationFailedError("Failed to create bill.", "create_bill")

            return Bill.from_record(stored, stored.get("items"))
