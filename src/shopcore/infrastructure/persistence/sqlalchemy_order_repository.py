"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from shopcore.domain.model.order import Order, OrderLine, OrderStatus
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.order_repository import OrderRepository
from shopcore.infrastructure.persistence.orm import (
    OrderLineRecord,
    OrderRecord,
    fits_id_column,
)


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        record = OrderRecord(
            customer_id=order.customer_id,
            total_amount=order.total_amount.amount,
            status=order.status.value,
            created_at=order.created_at,
            lines=[
                OrderLineRecord(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price_at_purchase=item.price_at_purchase.amount,
                )
                for item in order.items
            ],
        )
        self._session.add(record)
        self._session.flush()
        order.id = record.id

    def get_by_id(self, order_id: int) -> Order | None:
        if not fits_id_column(order_id):
            return None
        stmt = (
            select(OrderRecord)
            .where(OrderRecord.id == order_id)
            .options(selectinload(OrderRecord.lines))
        )
        record = self._session.scalars(stmt).first()
        return self._to_domain(record) if record is not None else None

    def list_for_customer(self, customer_id: int) -> list[Order]:
        stmt = self._newest_first().where(OrderRecord.customer_id == customer_id)
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def list_all(self) -> list[Order]:
        return [self._to_domain(r) for r in self._session.scalars(self._newest_first())]

    def save_status(self, order: Order) -> None:
        stmt = (
            update(OrderRecord)
            .where(OrderRecord.id == order.id)
            .values(status=order.status.value)
        )
        self._session.execute(stmt)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _newest_first():
        return (
            select(OrderRecord)
            .options(selectinload(OrderRecord.lines))
            .order_by(OrderRecord.created_at.desc(), OrderRecord.id.desc())
        )

    @staticmethod
    def _to_domain(record: OrderRecord) -> Order:
        created_at = record.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=record.id,
            customer_id=record.customer_id,
            items=[
                OrderLine(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price_at_purchase=Money(line.price_at_purchase),
                )
                for line in record.lines
            ],
            total_amount=Money(record.total_amount),
            status=OrderStatus(record.status),
            created_at=created_at,
        )
