"""Application service: Show / List Sales use cases (queries)."""

from __future__ import annotations

from vinylstock.application.dto import SaleDTO
from vinylstock.application.mappers import sale_to_dto
from vinylstock.domain.exceptions import EntityNotFoundError
from vinylstock.domain.repository.unit_of_work import UnitOfWork


class ShowSaleHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, sale_id: int) -> SaleDTO:
        with self._uow as uow:
            sale = uow.sales.get_by_id(sale_id)
            if sale is None:
                raise EntityNotFoundError(f"Sale #{sale_id} not found")
            return sale_to_dto(sale, uow.records)


class ListSalesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[SaleDTO]:
        with self._uow as uow:
            return [sale_to_dto(s, uow.records) for s in uow.sales.list_all()]
