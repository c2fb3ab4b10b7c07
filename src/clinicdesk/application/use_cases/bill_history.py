"""Bill history and invoice use cases.

Both read the price snapshot stored on each bill item, never the live
catalog.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from ...core.config import ClinicSettings
from ...core.exceptions import DatabaseError, RecordNotFoundError
from ...domain.entities.bill import Bill
from ...domain.enums.clinic import Table
from ...domain.errors import BillNotFoundError, OperationFailedError
from ..dto.bill_dto import InvoiceLine, InvoiceResponse
from ..ports.data_gateway import DataGateway

logger = logging.getLogger(__name__)


def matches_filter(bill: Bill, term: Optional[str]) -> bool:
    """Case-insensitive substring match on bill number or patient id."""
    if not term or not term.strip():
        return True
    needle = term.strip().lower()
    return needle in bill.bill_number.value.lower() or needle in bill.patient_id.lower()


class ListBillsUseCase:
    """Bill history, newest first, with an optional search term."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(self, term: Optional[str] = None) -> List[Bill]:
        try:
            bill_records = await self._gateway.select(
                Table.BILLS, order_by="created_at", descending=True
            )
            item_records = await self._gateway.select(Table.BILL_ITEMS)
        except DatabaseError as e:
            logger.error(f"Bill history load failed: {e}")
            raise OperationFailedError("Failed to load bills.", "list_bills")

        items_by_bill: Dict[str, list] = defaultdict(list)
        for item in item_records:
            items_by_bill[str(item.get("bill_id"))].append(item)

        bills = [
            Bill.from_record(record, items_by_bill.get(str(record.get("id")), []))
            for record in bill_records
        ]
        return [bill for bill in bills if matches_filter(bill, term)]


class GetInvoiceUseCase:
    """Printable invoice data for one bill."""

    def __init__(self, gateway: DataGateway, clinic: ClinicSettings):
        self._gateway = gateway
        self._clinic = clinic

    async def execute(self, bill_number: str) -> InvoiceResponse:
        try:
            record = await self._gateway.select_one(Table.BILLS, {"bill_number": bill_number})
            items = await self._gateway.select(Table.BILL_ITEMS, {"bill_id": record["id"]})
        except RecordNotFoundError:
            raise BillNotFoundError(bill_number)
        except DatabaseError as e:
            logger.error(f"Invoice load failed for {bill_number}: {e}")
            raise OperationFailedError("Failed to load bill.", "get_invoice")

        bill = Bill.from_record(record, items)
        lines = [
            InvoiceLine(
                item_name=item.service_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                amount=item.amount,
                discount=item.discount,
                final_amount=item.final_amount,
            )
            for item in bill.items
        ]
        return InvoiceResponse(
            clinic={
                "name": self._clinic.name,
                "registration_number": self._clinic.registration_number,
                "address": self._clinic.address,
                "phone": self._clinic.phone,
                "email": self._clinic.email,
                "currency_symbol": self._clinic.currency_symbol,
            },
            bill_number=bill.bill_number.value,
            patient_id=bill.patient_id,
            date=bill.created_at.date() if bill.created_at else None,
            lines=lines,
            total_amount=bill.total_amount,
            paid_amount=bill.paid_amount,
            balance=bill.balance,
            final_amount=bill.total_amount,
            status=bill.status.value,
        )
