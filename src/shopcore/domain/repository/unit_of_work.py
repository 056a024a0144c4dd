"""Abstract Unit of Work: the single transaction boundary.

Every use case that touches more than one row runs inside one unit of
work.  Changes become visible only on ``commit()``; leaving the ``with``
block without committing, or with an exception, rolls everything back.

    with uow:
        ...
        uow.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.repository.order_repository import OrderRepository
from shopcore.domain.repository.product_repository import ProductRepository
from shopcore.domain.repository.selection_repository import SelectionRepository


class UnitOfWork(ABC):

    products: ProductRepository
    selections: SelectionRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``__enter__`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change.  Safe to call after commit."""
