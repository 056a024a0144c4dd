"""Order aggregate: the immutable purchase record.

An Order and its lines are created together at checkout and never change
afterwards, except for the bounded ``status`` field set by an operator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from shopcore.domain.exceptions import EmptySelectionError, InvalidInputError
from shopcore.domain.model.selection import SelectionLine
from shopcore.domain.model.value_objects import Money

# bound of the ledger total column
MAX_ORDER_TOTAL = Money.of("999999999999.99")


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidInputError(
                f"Invalid status '{raw}'. Must be one of: {allowed}"
            ) from None


@dataclass(frozen=True)
class OrderLine:
    """Captures the frozen selection price at purchase time.

    ``price_at_purchase`` is copied from the selection line, never
    recomputed from the product.
    """

    product_id: int
    quantity: int
    price_at_purchase: Money

    @property
    def line_total(self) -> Money:
        return self.price_at_purchase * self.quantity


@dataclass
class Order:
    """Aggregate root for purchase records.

    Use ``Order.place()`` for new orders.  The ``__init__`` stays simple so
    repositories can reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_id: int
    items: list[OrderLine]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(customer_id: int, lines: list[SelectionLine]) -> Order:
        """Snapshot selection lines into a new pending order."""
        if not lines:
            raise EmptySelectionError("Cart is empty")

        items: list[OrderLine] = []
        for line in lines:
            if line.frozen_unit_price is None:
                raise InvalidInputError(
                    f"Cart item #{line.id} has no captured price; "
                    f"remove it and add the product again"
                )
            items.append(
                OrderLine(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price_at_purchase=line.frozen_unit_price,
                )
            )

        total_amount = Money.total(item.line_total for item in items)
        if total_amount > MAX_ORDER_TOTAL:
            raise InvalidInputError(
                f"Order total {total_amount} exceeds the maximum of {MAX_ORDER_TOTAL}"
            )

        return Order(
            id=None,
            customer_id=customer_id,
            items=items,
            total_amount=total_amount,
        )

    # --- State transitions ----------------------------------------------------

    def set_status(self, status: OrderStatus) -> None:
        """Overwrite the status.  Lines and total are never touched."""
        self.status = status
