"""Record aggregate — one vinyl release and the stock held of it.

Stock only moves through ``apply_delta``, which is called by the
StockAdjuster on behalf of shipments and sales.  The availability status
is never stored independently: it is computed from the quantity.
"""

from __future__ import annotations

from dataclasses import dataclass

from vinylstock.domain.exceptions import ValidationError
from vinylstock.domain.model.status import StockStatus, derive_status
from vinylstock.domain.model.value_objects import Money

MIN_YEAR = 1900
MAX_YEAR = 2100
MAX_TEXT_LENGTH = 100


@dataclass
class Record:
    """Aggregate root for a vinyl record.

    Invariants:
    - ``stock_quantity`` is always >= 0
    - ``status`` is IN_STOCK iff ``stock_quantity`` > 0
    """

    id: int | None
    artist_id: int
    name: str
    year: int
    label: str
    catalog_number: str
    current_price: Money
    stock_quantity: int = 0
    opening_quantity: int = 0

    # --- Factory (used for NEW records only) ----------------------------------

    @staticmethod
    def create(
        artist_id: int,
        name: str,
        year: int,
        label: str,
        catalog_number: str,
        current_price: Money,
        stock_quantity: int = 0,
    ) -> Record:
        """Register a new record, enforcing the catalog's field rules."""
        if artist_id is None or artist_id <= 0:
            raise ValidationError("Artist is required")
        fields = {"Name": name, "Label": label, "Catalog number": catalog_number}
        for title, value in fields.items():
            if not value or not value.strip():
                raise ValidationError(f"{title} is required")
            if len(value.strip()) > MAX_TEXT_LENGTH:
                raise ValidationError(
                    f"{title} must be at most {MAX_TEXT_LENGTH} characters"
                )
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
        if stock_quantity < 0:
            raise ValidationError("Opening stock cannot be negative")

        return Record(
            id=None,
            artist_id=artist_id,
            name=name.strip(),
            year=year,
            label=label.strip(),
            catalog_number=catalog_number.strip(),
            current_price=current_price,
            stock_quantity=stock_quantity,
            opening_quantity=stock_quantity,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def status(self) -> StockStatus:
        return derive_status(self.stock_quantity)

    @property
    def is_available(self) -> bool:
        return self.status is StockStatus.IN_STOCK

    # --- Mutations ------------------------------------------------------------

    def apply_delta(self, delta: int) -> int:
        """Move stock by a signed *delta*, clamping at zero.

        Returns the new quantity.  Sufficiency is not checked here; callers
        that must not oversell validate before adjusting.
        """
        self.stock_quantity = max(0, self.stock_quantity + delta)
        return self.stock_quantity

    def update_price(self, new_price: Money) -> None:
        """Change the record's current price.

        This does NOT affect existing sales because sale line items
        capture a price snapshot when they are created.
        """
        self.current_price = new_price
