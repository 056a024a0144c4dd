"""Application service: List All Orders use case (administrative query).

Role checks happen before this handler is reached.
"""

from __future__ import annotations

from shopcore.application.dto import OrderDTO, order_to_dto
from shopcore.domain.repository.unit_of_work import UnitOfWork


class ListAllOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[OrderDTO]:
        with self._uow:
            orders = self._uow.orders.list_all()
            products = self._uow.products.get_many(
                item.product_id for order in orders for item in order.items
            )
            return [order_to_dto(order, products) for order in orders]
