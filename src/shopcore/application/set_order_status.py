"""Application service: Set Order Status use case (administrative)."""

from __future__ import annotations

import structlog

from shopcore.application.dto import OrderDTO, order_to_dto
from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.model.order import OrderStatus
from shopcore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class SetOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, status: str) -> OrderDTO:
        """Overwrite an order's status.

        The status is parsed before the order is loaded, so an invalid
        value never reaches storage.
        """
        new_status = OrderStatus.parse(status)

        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            previous = order.status
            order.set_status(new_status)
            self._uow.orders.save_status(order)

            products = self._uow.products.get_many(item.product_id for item in order.items)
            dto = order_to_dto(order, products)
            self._uow.commit()

        logger.info(
            "Order status changed",
            order_id=order_id,
            previous=previous.value,
            status=new_status.value,
        )
        return dto
