"""Application service: Add To Selection use case.

Adds a product to the customer's cart.  The first add of a product
freezes its current price on the new line; later adds only increase the
quantity and leave the frozen price alone.
"""

from __future__ import annotations

import structlog

from shopcore.application.dto import SelectionDTO, selection_to_dto
from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.model.value_objects import Quantity
from shopcore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddToSelectionHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int, product_id: int, quantity: int) -> SelectionDTO:
        qty = Quantity(quantity).value

        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError(f"Product #{product_id} not found")

            selection = self._uow.selections.get_or_create(customer_id)

            # Legacy rows may predate price capture.  Repair them from the
            # current price; a captured price is never replaced.
            existing = selection.line_for_product(product_id)
            if existing is not None and existing.backfill_price(product.price):
                logger.warning(
                    "Backfilled missing cart price",
                    customer_id=customer_id,
                    line_id=existing.id,
                    product_id=product_id,
                    price=str(product.price),
                )

            line = selection.add_product(product, qty)
            self._uow.selections.save(selection)

            products = self._uow.products.get_many(item.product_id for item in selection.lines)
            dto = selection_to_dto(selection, products)
            self._uow.commit()

        logger.info(
            "Added item to cart",
            customer_id=customer_id,
            product_id=product_id,
            line_id=line.id,
            quantity=line.quantity,
            unit_price=str(line.frozen_unit_price),
        )
        return dto
