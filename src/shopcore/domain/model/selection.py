"""Selection aggregate: a customer's shopping cart.

One Selection exists per customer.  It owns at most one SelectionLine per
product, and every line carries the unit price captured when the product
first entered the selection.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shopcore.domain.exceptions import InvalidInputError, NotFoundError
from shopcore.domain.model.product import Product
from shopcore.domain.model.value_objects import Money, Quantity


@dataclass
class SelectionLine:
    """A candidate purchase line.

    ``frozen_unit_price`` is set once when the line is created and is never
    re-read from the product afterwards.  It is ``None`` only for legacy
    rows written before prices were captured; see ``backfill_price``.
    """

    id: int | None
    product_id: int
    quantity: int
    frozen_unit_price: Money | None

    @property
    def line_total(self) -> Money | None:
        if self.frozen_unit_price is None:
            return None
        return self.frozen_unit_price * self.quantity

    def backfill_price(self, price: Money) -> bool:
        """Repair a legacy line that has no captured price.

        Returns True if the price was filled in.  A price that is already
        present is never overwritten.
        """
        if self.frozen_unit_price is not None:
            return False
        self.frozen_unit_price = price
        return True


@dataclass
class Selection:
    """Aggregate root for a customer's working selection.

    Invariant: at most one line per product.
    """

    id: int | None
    customer_id: int
    lines: list[SelectionLine] = field(default_factory=list)

    # --- Commands -------------------------------------------------------------

    def add_product(self, product: Product, quantity: int) -> SelectionLine:
        """Add *quantity* units of *product*, merging with an existing line.

        A new line freezes the product's current price.  An existing line
        keeps its price and has its quantity increased; the combined
        quantity must still fit in the product's availability.
        """
        qty = Quantity(quantity).value
        line = self.line_for_product(product.id)  # type: ignore[arg-type]

        if line is None:
            product.ensure_available(qty)
            line = SelectionLine(
                id=None,
                product_id=product.id,  # type: ignore[arg-type]
                quantity=qty,
                frozen_unit_price=product.price,
            )
            self.lines.append(line)
            return line

        new_quantity = line.quantity + qty
        product.ensure_available(new_quantity)
        line.quantity = new_quantity
        return line

    def set_quantity(self, line_id: int, quantity: int, product: Product) -> SelectionLine:
        """Set a line's quantity absolutely, re-checking live stock."""
        line = self.get_line(line_id)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidInputError("Quantity must be at least 1")
        product.ensure_available(quantity)
        line.quantity = quantity
        return line

    def remove_line(self, line_id: int) -> SelectionLine:
        line = self.get_line(line_id)
        self.lines.remove(line)
        return line

    def clear(self) -> None:
        self.lines.clear()

    # --- Queries --------------------------------------------------------------

    def line_for_product(self, product_id: int) -> SelectionLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def get_line(self, line_id: int) -> SelectionLine:
        for line in self.lines:
            if line.id is not None and line.id == line_id:
                return line
        raise NotFoundError(f"Cart item #{line_id} not found")

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total(self) -> Money:
        """Sum of frozen price x quantity over priced lines."""
        return Money.total(
            line.line_total for line in self.lines if line.line_total is not None
        )
