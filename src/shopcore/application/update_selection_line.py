"""Application service: Update Selection Line use case.

Sets a cart line's quantity absolutely.  Stock is re-checked against the
product's live availability; the frozen price is untouched.
"""

from __future__ import annotations

import structlog

from shopcore.application.dto import SelectionDTO, selection_to_dto
from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateSelectionLineHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int, line_id: int, quantity: int) -> SelectionDTO:
        with self._uow:
            selection = self._uow.selections.get_by_customer(customer_id)
            if selection is None:
                raise NotFoundError(f"Cart item #{line_id} not found")

            line = selection.get_line(line_id)
            product = self._uow.products.get_by_id(line.product_id)
            if product is None:
                raise NotFoundError(f"Product #{line.product_id} not found")

            selection.set_quantity(line_id, quantity, product)
            self._uow.selections.save(selection)

            products = self._uow.products.get_many(item.product_id for item in selection.lines)
            dto = selection_to_dto(selection, products)
            self._uow.commit()

        logger.info(
            "Updated cart item", customer_id=customer_id, line_id=line_id, quantity=quantity
        )
        return dto
