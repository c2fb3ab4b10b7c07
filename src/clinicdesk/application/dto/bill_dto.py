"""Billing DTOs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ...domain.entities.bill import Bill


@dataclass
class BillLineRequest:
    """One submitted bill row."""

    service_id: str = ""
    quantity: Any = 1


@dataclass
class CreateBillRequest:
    """Request DTO for bill submission (and preview)."""

    patient_id: str = ""
    lines: List[BillLineRequest] = field(default_factory=list)


@dataclass
class LinePreview:
    service_id: str
    service_name: Optional[str]
    unit_price: Optional[Decimal]
    quantity: int
    amount: Decimal


@dataclass
class BillPreviewResponse:
    """Running total of a draft; nothing is persisted."""

    lines: List[LinePreview]
    total_amount: Decimal


@dataclass
class CreateBillResponse:
    """Response DTO for bill submission."""

    bill: Bill
    message: str


@dataclass
class InvoiceLine:
    item_name: str
    unit_price: Decimal
    quantity: int
    amount: Decimal
    discount: Decimal
    final_amount: Decimal


@dataclass
class InvoiceResponse:
    """Printable invoice for one bill."""

    clinic: Dict[str, str]
    bill_number: str
    patient_id: str
    date: Optional[date]
    lines: List[InvoiceLine]
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    final_amount: Decimal
    status: str
