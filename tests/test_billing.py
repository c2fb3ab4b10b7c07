"""
Bill totals, drafts and line pricing.
"""

from decimal import Decimal

import pytest

from clinicdesk.application.utils.billing import (
    INVALID_SERVICE_MESSAGE,
    build_price_lookup,
    calculate_total,
    price_line_items,
    to_bill_line,
)
from clinicdesk.domain.entities.bill import Bill, BillDraft, BillItem, BillLine
from clinicdesk.domain.entities.service import Service
from clinicdesk.domain.enums.clinic import BillStatus, ServiceType
from clinicdesk.domain.errors import FormValidationError
from clinicdesk.domain.value_objects import BillNumber
from clinicdesk.domain.value_objects.money import to_money

PRICES = {"1": Decimal("500"), "2": Decimal("250")}


def test_total_multiplies_price_by_quantity():
    lines = [{"service_id": "1", "quantity": 1}, {"service_id": "2", "quantity": 1}]
    assert calculate_total(lines, PRICES) == Decimal("750.00")


def test_unknown_service_contributes_zero():
    lines = [
        {"service_id": "1", "quantity": 1},
        {"service_id": "2", "quantity": 1},
        {"service_id": "", "quantity": 3},
        {"service_id": "99", "quantity": 2},
    ]
    assert calculate_total(lines, PRICES) == Decimal("750.00")


@pytest.mark.parametrize("quantity", ["abc", "1.5", -2, 0, "\u00b2", 10**6])
def test_unusable_quantity_contributes_zero(quantity):
    lines = [{"service_id": "1", "quantity": 1}, {"service_id": "2", "quantity": quantity}]
    assert to_bill_line(lines[1]).quantity == 0
    assert calculate_total(lines, PRICES) == Decimal("500.00")


def test_blank_quantity_defaults_to_one():
    assert to_bill_line({"service_id": "1", "quantity": ""}).quantity == 1
    assert to_bill_line({"service_id": "1"}).quantity == 1
    assert to_bill_line({"service_id": "1", "quantity": " 3 "}).quantity == 3


def test_empty_draft_totals_zero():
    assert calculate_total([], PRICES) == Decimal("0.00")


def test_draft_rows_can_be_added_updated_and_removed():
    draft = BillDraft(patient_id="25-3210-ALXX")
    assert len(draft.lines) == 1
    assert draft.lines[0].quantity == 1

    draft.update_row(0, service_id="1", quantity=2)
    draft.add_row()
    draft.update_row(1, service_id="2")
    assert draft.total(PRICES) == Decimal("1250.00")

    removed = draft.remove_row(0)
    assert removed == BillLine(service_id="1", quantity=2)
    assert draft.total(PRICES) == Decimal("250.00")


def test_draft_rejects_bad_row_index():
    draft = BillDraft()
    with pytest.raises(IndexError):
        draft.remove_row(3)
    with pytest.raises(IndexError):
        draft.update_row(-1, quantity=2)


def _service(service_id: str, name: str, price: str) -> Service:
    return Service(
        id=service_id,
        service_name=name,
        service_type=ServiceType.CONSULTATION,
        price=Decimal(price),
    )


def test_price_lookup_maps_id_to_price():
    services = [_service("a", "X-Ray", "300"), _service("b", "Consult", "500")]
    assert build_price_lookup(services) == {"a": Decimal("300.00"), "b": Decimal("500.00")}


def test_line_items_snapshot_catalog_price():
    catalog = {"a": _service("a", "X-Ray", "300")}
    items = price_line_items([{"service_id": "a", "quantity": "2"}], catalog)

    assert len(items) == 1
    assert items[0].service_name == "X-Ray"
    assert items[0].unit_price == Decimal("300.00")
    assert items[0].amount == Decimal("600.00")
    assert items[0].final_amount == Decimal("600.00")


@pytest.mark.parametrize("service_id", ["", "missing"])
def test_line_items_reject_unknown_service(service_id):
    catalog = {"a": _service("a", "X-Ray", "300")}
    with pytest.raises(FormValidationError) as exc:
        price_line_items([{"service_id": service_id, "quantity": 1}], catalog)
    assert exc.value.message == INVALID_SERVICE_MESSAGE


def test_bill_total_is_sum_of_items():
    items = [
        BillItem(service_id="a", service_name="X-Ray", unit_price=Decimal("300"), quantity=2),
        BillItem(service_id="b", service_name="Consult", unit_price=Decimal("500")),
    ]
    bill = Bill.create("25-3210-ALXX", items, BillNumber("BILL-1"))

    assert bill.total_amount == Decimal("1100.00")
    assert bill.paid_amount == Decimal("0.00")
    assert bill.balance == Decimal("1100.00")
    assert bill.status == BillStatus.PENDING


def test_bill_item_rejects_zero_quantity():
    with pytest.raises(ValueError):
        BillItem(service_id="a", service_name="X-Ray", unit_price=Decimal("300"), quantity=0)


def test_bill_item_rejects_excessive_quantity():
    with pytest.raises(ValueError):
        BillItem(service_id="a", service_name="X-Ray", unit_price=Decimal("300"), quantity=10**30)


@pytest.mark.parametrize("value", ["1e30", Decimal("1e30"), "abc", "Infinity"])
def test_to_money_rejects_unrepresentable_amounts(value):
    with pytest.raises(ValueError):
        to_money(value)


def test_to_money_rounds_half_up():
    assert to_money("10.005") == Decimal("10.01")
    assert to_money(None) == Decimal("0.00")
