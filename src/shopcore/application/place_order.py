"""Application service: Place Order use case (checkout).

Turns the customer's cart into an order inside one unit of work:

1. Load the cart.  No lines -> EmptySelectionError.
2. Snapshot the lines into a pending Order (frozen prices, total).
3. Lock, validate and decrement stock for every line (domain service).
4. Persist the order and empty the cart.
5. Commit.

Any failure before commit rolls back steps 3-4, so the cart and every
product's availability stay exactly as they were.  Retrying is not
idempotent: each successful call creates a new order.
"""

from __future__ import annotations

import structlog

from shopcore.application.dto import OrderDTO, order_to_dto
from shopcore.domain.exceptions import EmptySelectionError, InsufficientStockError
from shopcore.domain.model.order import Order
from shopcore.domain.repository.unit_of_work import UnitOfWork
from shopcore.domain.service.stock_allocation_service import StockAllocationService

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int) -> OrderDTO:
        with self._uow:
            selection = self._uow.selections.get_by_customer(customer_id)
            if selection is None or selection.is_empty:
                logger.info("Checkout rejected: empty cart", customer_id=customer_id)
                raise EmptySelectionError("Cart is empty")

            order = Order.place(customer_id, selection.lines)

            svc = StockAllocationService(self._uow.products)
            try:
                products = svc.allocate(selection.lines)
            except InsufficientStockError as exc:
                logger.info(
                    "Checkout rejected: insufficient stock",
                    customer_id=customer_id,
                    product_id=exc.product_id,
                    available=exc.available,
                    requested=exc.requested,
                )
                raise

            self._uow.orders.add(order)
            selection.clear()
            self._uow.selections.save(selection)

            dto = order_to_dto(order, products)
            self._uow.commit()

        logger.info(
            "Order placed",
            customer_id=customer_id,
            order_id=order.id,
            lines=len(order.items),
            total_amount=str(order.total_amount),
        )
        return dto
