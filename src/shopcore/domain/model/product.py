"""Product: the Catalog Store entity.

Products live independently of selections and orders.  The core only
reads their current price and availability and, at checkout, decrements
availability.  Price and stock edits belong to the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcore.domain.exceptions import InsufficientStockError, InvalidInputError
from shopcore.domain.model.value_objects import Money

# bounds of the catalog columns
MAX_PRICE = Money.of("99999999.99")
MAX_STOCK = 2**31 - 1


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because price and stock updates are
    legitimate mutations owned by the catalog.
    """

    id: int | None
    name: str
    price: Money
    available_quantity: int

    def __post_init__(self) -> None:
        _check_price(self.price)
        _check_stock(self.available_quantity)

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Open selection lines and existing orders are unaffected because
        they hold a copied price, never a reference to this field.
        """
        _check_price(new_price)
        self.price = new_price

    def set_available_quantity(self, quantity: int) -> None:
        _check_stock(quantity)
        self.available_quantity = quantity

    def ensure_available(self, requested: int) -> None:
        """Raise InsufficientStockError if *requested* exceeds availability."""
        if requested > self.available_quantity:
            raise InsufficientStockError(
                product_id=self.id,  # type: ignore[arg-type]
                product_name=self.name,
                available=self.available_quantity,
                requested=requested,
            )


def _check_stock(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidInputError("Stock must be a non-negative integer")
    if quantity < 0:
        raise InvalidInputError("Stock must be a non-negative integer")
    if quantity > MAX_STOCK:
        raise InvalidInputError(f"Stock cannot exceed {MAX_STOCK}")


def _check_price(price: Money) -> None:
    if price > MAX_PRICE:
        raise InvalidInputError(f"Price cannot exceed {MAX_PRICE}")
