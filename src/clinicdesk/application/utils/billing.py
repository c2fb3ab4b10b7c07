"""
Bill calculation helpers.

Totals are computed against a price lookup (service id -> current catalog
price). Previews are lenient about unknown services; submission is strict.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

from ...domain.entities.bill import DEFAULT_QUANTITY, MAX_QUANTITY, BillItem, BillLine, sum_lines
from ...domain.entities.service import Service
from ...domain.errors import FormValidationError
from .form_validation import is_positive_integer

INVALID_SERVICE_MESSAGE = "Please select a valid service for every line."

LineLike = Union[BillLine, Mapping[str, Any]]


def to_bill_line(line: LineLike) -> BillLine:
    """Accept a ``BillLine`` or a ``{"service_id", "quantity"}`` mapping.

    A blank quantity means the default of one. Anything that is not a whole
    number in ``1..MAX_QUANTITY`` becomes zero, which adds nothing to a total.
    """
    if isinstance(line, BillLine):
        return line
    service_id = line.get("service_id") or ""
    quantity = line.get("quantity")
    if quantity is None or quantity == "":
        quantity = DEFAULT_QUANTITY
    elif is_positive_integer(quantity, MAX_QUANTITY):
        quantity = int(quantity)
    else:
        quantity = 0
    return BillLine(service_id=str(service_id), quantity=quantity)


def build_price_lookup(services: Iterable[Service]) -> Dict[str, Decimal]:
    """Map service id to catalog price."""
    return {str(service.id): service.price for service in services if service.id}


def calculate_total(
    line_items: Iterable[LineLike], price_lookup: Mapping[str, Decimal]
) -> Decimal:
    """Sum of price x quantity over ``line_items``.

    Lines referencing an unknown (or empty) service id contribute zero, so a
    half-filled draft still shows a running total.
    """
    return sum_lines((to_bill_line(line) for line in line_items), price_lookup)


def price_line_items(
    lines: Sequence[LineLike], services: Mapping[str, Service]
) -> List[BillItem]:
    """Snapshot each line into a ``BillItem`` at the current catalog price.

    Raises ``FormValidationError`` when a line has no service selected or
    references a service that is not in the catalog.
    """
    items: List[BillItem] = []
    for raw in lines:
        line = to_bill_line(raw)
        service = services.get(line.service_id)
        if service is None:
            raise FormValidationError(INVALID_SERVICE_MESSAGE, field="service_id")
        items.append(
            BillItem(
                service_id=line.service_id,
                service_name=service.service_name,
                unit_price=service.price,
                quantity=line.quantity,
            )
        )
    return items
