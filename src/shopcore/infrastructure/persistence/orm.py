"""SQLAlchemy table mappings.

These records are persistence shapes only; repositories translate them to
and from the domain dataclasses.  Monetary columns hold two fractional
digits.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# largest value a 64-bit INTEGER primary key can hold
MAX_ROW_ID = 2**63 - 1


def fits_id_column(value: int) -> bool:
    """False for ids no row can have; drivers raise OverflowError on them."""
    return 0 < value <= MAX_ROW_ID


class ProductRecord(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    available_quantity = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint(
            "available_quantity >= 0", name="ck_product_stock_non_negative"
        ),
    )


class SelectionRecord(Base):
    __tablename__ = "selections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    lines = relationship(
        "SelectionLineRecord",
        cascade="all, delete-orphan",
        order_by="SelectionLineRecord.id",
    )


class SelectionLineRecord(Base):
    __tablename__ = "selection_lines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    selection_id = Column(Integer, ForeignKey("selections.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    # nullable only so rows written before price capture can be loaded
    frozen_unit_price = Column(Numeric(10, 2), nullable=True)

    __table_args__ = (
        UniqueConstraint("selection_id", "product_id", name="uq_selection_line_product"),
        CheckConstraint("quantity >= 1", name="ck_selection_line_quantity_positive"),
    )


class OrderRecord(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, nullable=False, index=True)
    total_amount = Column(Numeric(14, 2), nullable=False)
    status = Column(String(16), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False)

    lines = relationship(
        "OrderLineRecord",
        cascade="all, delete-orphan",
        order_by="OrderLineRecord.id",
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'completed', 'cancelled')",
            name="ck_order_status",
        ),
    )


class OrderLineRecord(Base):
    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price_at_purchase = Column(Numeric(10, 2), nullable=False)
