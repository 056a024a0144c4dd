"""Application service: Show Selection use case (query).

The selection is created on first access, so this never fails for an
authenticated customer.
"""

from __future__ import annotations

from shopcore.application.dto import SelectionDTO, selection_to_dto
from shopcore.domain.repository.unit_of_work import UnitOfWork


class ShowSelectionHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int) -> SelectionDTO:
        with self._uow:
            selection = self._uow.selections.get_or_create(customer_id)
            products = self._uow.products.get_many(item.product_id for item in selection.lines)
            dto = selection_to_dto(selection, products)
            self._uow.commit()
        return dto
