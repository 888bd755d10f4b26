"""Application service: Show / List Shipments use cases (queries)."""

from __future__ import annotations

from vinylstock.application.dto import ShipmentDTO
from vinylstock.application.mappers import shipment_to_dto
from vinylstock.domain.exceptions import EntityNotFoundError
from vinylstock.domain.repository.unit_of_work import UnitOfWork


class ShowShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, shipment_id: int) -> ShipmentDTO:
        with self._uow as uow:
            shipment = uow.shipments.get_by_id(shipment_id)
            if shipment is None:
                raise EntityNotFoundError(f"Shipment #{shipment_id} not found")
            return shipment_to_dto(shipment, uow.records)


class ListShipmentsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[ShipmentDTO]:
        with self._uow as uow:
            return [shipment_to_dto(s, uow.records) for s in uow.shipments.list_all()]
