"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from shopcore.domain.exceptions import ConflictError
from shopcore.domain.model.product import Product
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.product_repository import ProductRepository
from shopcore.infrastructure.persistence.orm import ProductRecord, fits_id_column


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        if not fits_id_column(product_id):
            return None
        record = self._session.get(ProductRecord, product_id)
        return self._to_domain(record) if record is not None else None

    def get_for_update(self, product_id: int) -> Product | None:
        if not fits_id_column(product_id):
            return None
        stmt = (
            select(ProductRecord)
            .where(ProductRecord.id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        record = self._session.scalars(stmt).first()
        return self._to_domain(record) if record is not None else None

    def list_all(self) -> list[Product]:
        stmt = select(ProductRecord).order_by(ProductRecord.id)
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def add(self, product: Product) -> None:
        record = ProductRecord(
            name=product.name,
            price=product.price.amount,
            available_quantity=product.available_quantity,
        )
        self._session.add(record)
        self._session.flush()
        product.id = record.id

    def save(self, product: Product) -> None:
        record = self._session.get(ProductRecord, product.id)
        record.name = product.name
        record.price = product.price.amount
        record.available_quantity = product.available_quantity
        self._session.flush()

    def decrement_available_quantity(self, product_id: int, amount: int) -> None:
        stmt = (
            update(ProductRecord)
            .where(
                ProductRecord.id == product_id,
                ProductRecord.available_quantity >= amount,
            )
            .values(available_quantity=ProductRecord.available_quantity - amount)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        if result.rowcount != 1:
            raise ConflictError(
                f"Stock of product #{product_id} changed during checkout"
            )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            price=Money(record.price),
            available_quantity=record.available_quantity,
        )
