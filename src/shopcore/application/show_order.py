"""Application service: Show Order use case (query).

An order owned by someone else is reported exactly like a missing one,
so customers cannot probe for other customers' order IDs.
"""

from __future__ import annotations

from shopcore.application.dto import OrderDTO, order_to_dto
from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int, order_id: int) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None or order.customer_id != customer_id:
                raise NotFoundError(f"Order #{order_id} not found")
            products = self._uow.products.get_many(item.product_id for item in order.items)
            return order_to_dto(order, products)
