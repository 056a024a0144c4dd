"""Abstract repository for the Product entity (Catalog Store).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    def get_for_update(self, product_id: int) -> Product | None:
        """Return a product and hold a write lock on it until the unit of work ends.

        Backends without row locks fall back to a plain read; the
        conditional decrement still guards against lost updates.
        """
        return self.get_by_id(product_id)

    def get_many(self, product_ids) -> dict[int, Product]:
        """Return the known products among *product_ids*, keyed by ID."""
        found: dict[int, Product] = {}
        for product_id in set(product_ids):
            product = self.get_by_id(product_id)
            if product is not None:
                found[product_id] = product
        return found

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Persist a new product and assign its ID."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist an updated product."""

    @abstractmethod
    def decrement_available_quantity(self, product_id: int, amount: int) -> None:
        """Subtract *amount* from availability only if enough remains.

        Raises ConflictError when the conditional decrement matches nothing,
        i.e. availability changed after it was validated.
        """
