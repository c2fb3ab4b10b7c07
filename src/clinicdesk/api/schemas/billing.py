"""
Billing, bill history and invoice schemas.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ...application.dto.bill_dto import (
    BillLineRequest,
    BillPreviewResponse,
    CreateBillRequest,
    InvoiceResponse,
)
from ...domain.entities.bill import Bill, BillItem


class BillLineIn(BaseModel):
    service_id: str = Field("", description="Selected catalog service id")
    quantity: Union[int, str] = Field(1, description="Units of the service")


class BillDraftRequest(BaseModel):
    patient_id: str = Field("", description="Billed patient ID")
    lines: List[BillLineIn] = Field(default_factory=list)

    def to_dto(self) -> CreateBillRequest:
        return CreateBillRequest(
            patient_id=self.patient_id,
            lines=[BillLineRequest(service_id=line.service_id, quantity=line.quantity) for line in self.lines],
        )


class LinePreviewOut(BaseModel):
    service_id: str
    service_name: Optional[str] = None
    unit_price: Optional[Decimal] = None
    quantity: int
    amount: Decimal


class BillPreviewOut(BaseModel):
    lines: List[LinePreviewOut]
    total_amount: Decimal

    @classmethod
    def from_dto(cls, preview: BillPreviewResponse) -> "BillPreviewOut":
        return cls(
            lines=[
                LinePreviewOut(
                    service_id=line.service_id,
                    service_name=line.service_name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    amount=line.amount,
                )
                for line in preview.lines
            ],
            total_amount=preview.total_amount,
        )


class BillItemOut(BaseModel):
    service_id: str
    service_name: str
    unit_price: Decimal
    quantity: int
    amount: Decimal
    discount: Decimal
    final_amount: Decimal

    @classmethod
    def from_entity(cls, item: BillItem) -> "BillItemOut":
        return cls(
            service_id=item.service_id,
            service_name=item.service_name,
            unit_price=item.unit_price,
            quantity=item.quantity,
            amount=item.amount,
            discount=item.discount,
            final_amount=item.final_amount,
        )


class BillOut(BaseModel):
    id: Optional[str] = None
    bill_number: str
    patient_id: str
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    status: str
    created_at: Optional[datetime] = None
    items: List[BillItemOut] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, bill: Bill) -> "BillOut":
        return cls(
            id=bill.id,
            bill_number=bill.bill_number.value,
            patient_id=bill.patient_id,
            total_amount=bill.total_amount,
            paid_amount=bill.paid_amount,
            balance=bill.balance,
            status=bill.status.value,
            created_at=bill.created_at,
            items=[BillItemOut.from_entity(item) for item in bill.items],
        )


class InvoiceLineOut(BaseModel):
    item_name: str
    unit_price: Decimal
    quantity: int
    amount: Decimal
    discount: Decimal
    final_amount: Decimal


class InvoiceOut(BaseModel):
    clinic: Dict[str, str]
    bill_number: str
    patient_id: str
    date: Optional[date]
    lines: List[InvoiceLineOut]
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    final_amount: Decimal
    status: str

    @classmethod
    def from_dto(cls, invoice: InvoiceResponse) -> "InvoiceOut":
        return cls(
            clinic=invoice.clinic,
            bill_number=invoice.bill_number,
            patient_id=invoice.patient_id,
            date=invoice.date,
            lines=[
                InvoiceLineOut(
                    item_name=line.item_name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    amount=line.amount,
                    discount=line.discount,
                    final_amount=line.final_amount,
                )
                for line in invoice.lines
            ],
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            balance=invoice.balance,
            final_amount=invoice.final_amount,
            status=invoice.status,
        )
