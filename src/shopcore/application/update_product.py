"""Application service: Update Product use case (catalog).

Price and stock edits run in the same kind of unit of work as checkout,
and stock edits lock the product row, so a checkout never validates
against a stale availability.
"""

from __future__ import annotations

import structlog

from shopcore.application.dto import ProductDTO, product_to_dto
from shopcore.domain.exceptions import InvalidInputError, NotFoundError
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: int,
        new_price: str | None = None,
        new_stock: int | None = None,
    ) -> ProductDTO:
        """Update a product's price and/or stock.

        This does NOT affect open cart lines or existing orders; they
        captured a price snapshot.
        """
        if new_price is None and new_stock is None:
            raise InvalidInputError("Nothing to update: give a price or a stock level")
        price = Money.of(new_price) if new_price is not None else None

        with self._uow:
            product = self._uow.products.get_for_update(product_id)
            if product is None:
                raise NotFoundError(f"Product #{product_id} not found")

            if price is not None:
                product.update_price(price)
            if new_stock is not None:
                product.set_available_quantity(new_stock)
            self._uow.products.save(product)

            dto = product_to_dto(product)
            self._uow.commit()

        logger.info(
            "Product updated",
            product_id=product_id,
            price=dto.price,
            available_quantity=dto.available_quantity,
        )
        return dto
