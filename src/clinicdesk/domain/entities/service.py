"""Service catalog entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from ...core.utils.datetime_utils import get_current_timestamp
from ..enums.clinic import ServiceType
from ..value_objects.money import money_to_float, to_money


@dataclass
class Service:
    """A billable service with its current catalog price."""

    service_name: str
    service_type: ServiceType
    price: Decimal
    id: Optional[str] = None
    created_at: datetime = field(default_factory=get_current_timestamp)

    def __post_init__(self) -> None:
        self.price = to_money(self.price)
        if self.price <= 0:
            raise ValueError("Service price must be greater than zero")

    def to_record(self) -> Dict[str, Any]:
        """Gateway record for the ``services`` table."""
        return {
            "service_name": self.service_name,
            "service_type": self.service_type.value,
            "price": money_to_float(self.price),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Service":
        return cls(
            id=record.get("id"),
            service_name=record["service_name"],
            service_type=ServiceType(record["service_type"]),
            price=to_money(record["price"]),
            created_at=record.get("created_at") or get_current_timestamp(),
        )
