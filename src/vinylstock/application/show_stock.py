"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from vinylstock.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class StockLineDTO:
    record_id: int
    name: str
    catalog_number: str
    price: str
    quantity: int
    status: str


class ShowStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, in_stock_only: bool = False) -> list[StockLineDTO]:
        """List every record with its stock level and status.

        With ``in_stock_only`` the list is limited to records that can be
        sold right now.
        """
        with self._uow as uow:
            records = uow.records.list_all()
        return [
            StockLineDTO(
                record_id=record.id,  # type: ignore[arg-type]
                name=record.name,
                catalog_number=record.catalog_number,
                price=str(record.current_price),
                quantity=record.stock_quantity,
                status=record.status.label,
            )
            for record in records
            if record.is_available or not in_stock_only
        ]
