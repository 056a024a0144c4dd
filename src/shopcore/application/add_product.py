"""Application service: Add Product use case (catalog)."""

from __future__ import annotations

from shopcore.application.dto import ProductDTO, product_to_dto
from shopcore.domain.exceptions import InvalidInputError
from shopcore.domain.model.product import Product
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.unit_of_work import UnitOfWork

MAX_NAME_LENGTH = 200


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, price: str, stock: int) -> ProductDTO:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise InvalidInputError("Product name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise InvalidInputError(
                f"Product name cannot exceed {MAX_NAME_LENGTH} characters"
            )

        product = Product(
            id=None,
            name=name.strip(),
            price=Money.of(price),
            available_quantity=stock,
        )

        with self._uow:
            self._uow.products.add(product)
            dto = product_to_dto(product)
            self._uow.commit()
        return dto
