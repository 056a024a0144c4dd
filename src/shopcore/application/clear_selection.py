"""Application service: Clear Selection use case."""

from __future__ import annotations

from shopcore.domain.repository.unit_of_work import UnitOfWork


class ClearSelectionHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int) -> None:
        """Delete every line of the customer's cart.  No-op without a cart."""
        with self._uow:
            selection = self._uow.selections.get_by_customer(customer_id)
            if selection is None:
                return
            selection.clear()
            self._uow.selections.save(selection)
            self._uow.commit()
