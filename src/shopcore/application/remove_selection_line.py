"""Application service: Remove Selection Line use case."""

from __future__ import annotations

from shopcore.application.dto import SelectionDTO, selection_to_dto
from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.repository.unit_of_work import UnitOfWork


class RemoveSelectionLineHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int, line_id: int) -> SelectionDTO:
        with self._uow:
            selection = self._uow.selections.get_by_customer(customer_id)
            if selection is None:
                raise NotFoundError(f"Cart item #{line_id} not found")

            selection.remove_line(line_id)
            self._uow.selections.save(selection)

            products = self._uow.products.get_many(item.product_id for item in selection.lines)
            dto = selection_to_dto(selection, products)
            self._uow.commit()
        return dto
