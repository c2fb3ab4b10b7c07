"""Bill, bill item and bill draft entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..enums.clinic import BillStatus
from ..value_objects.bill_number import BillNumber
from ..value_objects.money import ZERO, money_to_float, to_money

DEFAULT_QUANTITY = 1
MAX_QUANTITY = 9999


@dataclass
class BillLine:
    """One editable row of a bill being prepared."""

    service_id: str = ""
    quantity: int = DEFAULT_QUANTITY


def sum_lines(lines: Iterable[BillLine], price_lookup: Mapping[str, Decimal]) -> Decimal:
    """Sum of price x quantity.

    Lines whose service is unknown, or whose quantity is outside
    ``1..MAX_QUANTITY``, add nothing.
    """
    total = ZERO
    for line in lines:
        price = price_lookup.get(line.service_id)
        if price is None or not 1 <= line.quantity <= MAX_QUANTITY:
            continue
        total += to_money(price) * line.quantity
    return to_money(total)


@dataclass
class BillDraft:
    """Ordered, mutable set of line items for a bill not yet submitted."""

    patient_id: str = ""
    lines: List[BillLine] = field(default_factory=lambda: [BillLine()])

    def add_row(self) -> BillLine:
        """Append an empty row with the default quantity."""
        line = BillLine()
        self.lines.append(line)
        return line

    def remove_row(self, index: int) -> BillLine:
        """Remove the row at ``index``."""
        if not 0 <= index < len(self.lines):
            raise IndexError(f"No bill line at position {index}")
        return self.lines.pop(index)

    def update_row(
        self,
        index: int,
        service_id: Optional[str] = None,
        quantity: Optional[int] = None,
    ) -> BillLine:
        """Change the service selection and/or quantity of a row in place."""
        if not 0 <= index < len(self.lines):
            raise IndexError(f"No bill line at position {index}")
        line = self.lines[index]
        if service_id is not None:
            line.service_id = service_id
        if quantity is not None:
            line.quantity = quantity
        return line

    def total(self, price_lookup: Mapping[str, Decimal]) -> Decimal:
        """Running total of the current rows."""
        return sum_lines(self.lines, price_lookup)


@dataclass
class BillItem:
    """A priced bill line; the unit price is fixed when the bill is created."""

    service_id: str
    service_name: str
    unit_price: Decimal
    quantity: int = DEFAULT_QUANTITY
    discount: Decimal = ZERO
    bill_id: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.unit_price = to_money(self.unit_price)
        self.discount = to_money(self.discount)
        if not 1 <= self.quantity <= MAX_QUANTITY:
            raise ValueError(f"Quantity must be between 1 and {MAX_QUANTITY}")
        if self.discount < 0 or self.discount > self.amount:
            raise ValueError("Discount must be between zero and the line amount")

    @property
    def amount(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)

    @property
    def final_amount(self) -> Decimal:
        return to_money(self.amount - self.discount)

    def to_record(self) -> Dict[str, Any]:
        """Gateway record for the ``bill_items`` table (bill_id added on insert)."""
        record = {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "unit_price": money_to_float(self.unit_price),
            "quantity": self.quantity,
            "amount": money_to_float(self.amount),
            "discount": money_to_float(self.discount),
            "final_amount": money_to_float(self.final_amount),
        }
        if self.bill_id is not None:
            record["bill_id"] = self.bill_id
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "BillItem":
        return cls(
            id=record.get("id"),
            bill_id=record.get("bill_id"),
            service_id=str(record["service_id"]),
            service_name=record.get("service_name", ""),
            unit_price=to_money(record["unit_price"]),
            quantity=int(record["quantity"]),
            discount=to_money(record.get("discount")),
        )


@dataclass
class Bill:
    """A generated bill and its items."""

    bill_number: BillNumber
    patient_id: str
    total_amount: Decimal
    paid_amount: Decimal = ZERO
    status: BillStatus = BillStatus.PENDING
    items: List[BillItem] = field(default_factory=list)
    created_at: Optional[datetime] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.total_amount = to_money(self.total_amount)
        self.paid_amount = to_money(self.paid_amount)

    @property
    def balance(self) -> Decimal:
        return to_money(self.total_amount - self.paid_amount)

    @classmethod
    def create(cls, patient_id: str, items: List[BillItem], bill_number: BillNumber) -> "Bill":
        """New unpaid bill whose total is the sum of its items."""
        total = sum((item.final_amount for item in items), ZERO)
        return cls(
            bill_number=bill_number,
            patient_id=patient_id,
            total_amount=total,
            items=list(items),
        )

    def to_record(self) -> Dict[str, Any]:
        """Gateway record for the ``bills`` table."""
        return {
            "bill_number": self.bill_number.value,
            "patient_id": self.patient_id,
            "total_amount": money_to_float(self.total_amount),
            "paid_amount": money_to_float(self.paid_amount),
            "balance": money_to_float(self.balance),
            "status": self.status.value,
        }

    @classmethod
    def from_record(
        cls, record: Dict[str, Any], items: Optional[List[Dict[str, Any]]] = None
    ) -> "Bill":
        return cls(
            id=record.get("id"),
            bill_number=BillNumber(record["bill_number"]),
            patient_id=record["patient_id"],
            total_amount=to_money(record["total_amount"]),
            paid_amount=to_money(record.get("paid_amount")),
            status=BillStatus(record.get("status", BillStatus.PENDING.value)),
            items=[BillItem.from_record(item) for item in items or []],
            created_at=record.get("created_at"),
        )
