"""Service catalog use cases."""

import logging
from dataclasses import asdict
from typing import List

from ...core.exceptions import DatabaseError
from ...core.structured_logger import audit_logger
from ...domain.entities.service import Service
from ...domain.enums.clinic import ServiceType, Table
from ...domain.errors import OperationFailedError
from ...domain.value_objects.money import to_money
from ..dto.registration_dto import AddServiceRequest, AddServiceResponse
from ..ports.data_gateway import DataGateway
from ..utils.form_validation import FormValidator, enum_value, positive_money, required

logger = logging.getLogger(__name__)

SERVICE_FORM = FormValidator(
    required("service_name", "service_type", "price"),
    enum_value("service_type", ServiceType, "Please select a valid service type."),
    positive_money("price", "Please enter a valid price."),
)


class AddServiceUseCase:
    """Add a billable service to the catalog."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(self, request: AddServiceRequest) -> AddServiceResponse:
        SERVICE_FORM.validate(asdict(request))

        service = Service(
            service_name=request.service_name.strip(),
            service_type=ServiceType(request.service_type),
            price=to_money(request.price),
        )
        try:
            stored = await self._gateway.insert(Table.SERVICES, service.to_record())
        except DatabaseError as e:
            logger.error(f"Service insert failed: {e}")
            raise OperationFailedError("Failed to add service.", "add_service")

        saved = Service.from_record(stored)
        audit_logger.info("service_added", service_id=saved.id, service_name=saved.service_name)
        return AddServiceResponse(service=saved, message="Service added successfully!")


class ListServicesUseCase:
    """Whole catalog, by name."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(self) -> List[Service]:
        try:
            records = await self._gateway.select(Table.SERVICES, order_by="service_name")
        except DatabaseError as e:
            logger.error(f"Service listing failed: {e}")
            raise OperationFailedError("Failed to load services.", "list_services")
        return [Service.from_record(record) for record in records]
