"""Domain service: Stock Allocation.

Coordinates the cross-aggregate step of checkout: every selection line
must fit in its product's current availability, and then every product is
decremented.  It lives in the domain layer because the all-or-nothing rule
is a core business rule, not just orchestration.

The two-phase approach (validate-then-mutate) ensures we never start
decrementing if any line fails validation.  Whatever does slip past
validation (a concurrent writer) is caught by the repository's
conditional decrement and aborts the surrounding unit of work.
"""

from __future__ import annotations

from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.model.product import Product
from shopcore.domain.model.selection import SelectionLine
from shopcore.domain.repository.product_repository import ProductRepository


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def allocate(self, lines: list[SelectionLine]) -> dict[int, Product]:
        """Validate and decrement stock for every line.

        Phase 1 (lock and validate): read each product for update and
                  make sure its availability covers the line.  Fails
                  fast before any mutation.
        Phase 2 (decrement): conditional decrement per product.

        Products are locked in ascending ID order whatever the line order.

        Returns the products keyed by ID with their post-decrement
        availability.
        """
        ordered = sorted(lines, key=lambda line: line.product_id)

        # Phase 1: load all products and validate
        products: dict[int, Product] = {}

        for line in ordered:
            product = self._product_repo.get_for_update(line.product_id)
            if product is None:
                raise NotFoundError(f"Product #{line.product_id} not found")
            product.ensure_available(line.quantity)
            products[line.product_id] = product

        # Phase 2: decrement
        for line in ordered:
            self._product_repo.decrement_available_quantity(
                line.product_id, line.quantity
            )
            product = products[line.product_id]
            product.available_quantity -= line.quantity

        return products
