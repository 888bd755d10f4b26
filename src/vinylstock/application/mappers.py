"""Mapping from domain aggregates to DTOs, shared by the use cases."""

from __future__ import annotations

from vinylstock.application.dto import (
    LineItemChangesDTO,
    SaleDTO,
    SaleLineItemDTO,
    ShipmentDTO,
    ShipmentLineItemDTO,
    StockChangeDTO,
)
from vinylstock.domain.model.sale import Sale
from vinylstock.domain.model.shipment import Shipment
from vinylstock.domain.repository.record_repository import RecordRepository
from vinylstock.domain.service.line_item_diff import LineItemDiff
from vinylstock.domain.service.stock_adjuster import StockAdjustment

DATE_FORMAT = "%Y-%m-%d"


def _record_name(record_repo: RecordRepository, record_id: int) -> str:
    record = record_repo.get_by_id(record_id)
    return record.name if record is not None else f"<deleted record #{record_id}>"


def shipment_to_dto(shipment: Shipment, record_repo: RecordRepository) -> ShipmentDTO:
    return ShipmentDTO(
        id=shipment.id,  # type: ignore[arg-type]
        supplier_id=shipment.supplier_id,
        date=shipment.date.strftime(DATE_FORMAT),
        invoice_link=shipment.invoice_link,
        version=shipment.version,
        items=[
            ShipmentLineItemDTO(
                record_id=item.record_id,
                record_name=_record_name(record_repo, item.record_id),
                quantity=item.quantity.value,
            )
            for _, item in sorted(shipment.items.items())
        ],
        total_quantity=shipment.total_quantity,
    )


def sale_to_dto(sale: Sale, record_repo: RecordRepository) -> SaleDTO:
    return SaleDTO(
        id=sale.id,  # type: ignore[arg-type]
        date=sale.date.strftime(DATE_FORMAT),
        receipt_link=sale.receipt_link,
        version=sale.version,
        items=[
            SaleLineItemDTO(
                record_id=item.record_id,
                record_name=_record_name(record_repo, item.record_id),
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for _, item in sorted(sale.items.items())
        ],
        total=str(sale.total),
    )


def stock_changes_to_dto(adjustments: list[StockAdjustment]) -> list[StockChangeDTO]:
    return [
        StockChangeDTO(
            record_id=adj.record_id,
            record_name=adj.record_name,
            delta=adj.delta,
            quantity=adj.quantity,
            status=adj.status.label,
        )
        for adj in adjustments
    ]


def line_item_changes_to_dto(diff: LineItemDiff) -> LineItemChangesDTO:
    return LineItemChangesDTO(
        inserted=tuple(diff.added),
        updated=tuple(diff.changed),
        deleted=tuple(diff.removed),
    )
