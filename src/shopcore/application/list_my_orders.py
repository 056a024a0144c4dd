"""Application service: List My Orders use case (query)."""

from __future__ import annotations

from shopcore.application.dto import OrderDTO, order_to_dto
from shopcore.domain.repository.unit_of_work import UnitOfWork


class ListMyOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int) -> list[OrderDTO]:
        """Return the customer's orders, newest first."""
        with self._uow:
            orders = self._uow.orders.list_for_customer(customer_id)
            products = self._uow.products.get_many(
                item.product_id for order in orders for item in order.items
            )
            return [order_to_dto(order, products) for order in orders]
