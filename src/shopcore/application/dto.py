"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Monetary values are
formatted strings with two decimals, e.g. "399.99".
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcore.domain.model.order import Order
from shopcore.domain.model.product import Product
from shopcore.domain.model.selection import Selection


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    price: str
    available_quantity: int


@dataclass(frozen=True)
class SelectionLineDTO:
    """A cart line with the product joined in.

    ``unit_price`` is the frozen price; ``product`` shows the product as
    it is now, which may differ.
    """

    id: int
    product: ProductDTO | None
    quantity: int
    unit_price: str | None
    line_total: str | None


@dataclass(frozen=True)
class SelectionDTO:
    id: int
    customer_id: int
    items: list[SelectionLineDTO]
    total: str


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: int
    product_name: str
    quantity: int
    price_at_purchase: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    customer_id: int
    status: str
    items: list[OrderLineDTO]
    total_amount: str
    created_at: str


# --- Mapping ------------------------------------------------------------------


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        price=str(product.price),
        available_quantity=product.available_quantity,
    )


def selection_to_dto(selection: Selection, products: dict[int, Product]) -> SelectionDTO:
    items = []
    for line in selection.lines:
        product = products.get(line.product_id)
        items.append(
            SelectionLineDTO(
                id=line.id,  # type: ignore[arg-type]
                product=product_to_dto(product) if product else None,
                quantity=line.quantity,
                unit_price=_fmt(line.frozen_unit_price),
                line_total=_fmt(line.line_total),
            )
        )
    return SelectionDTO(
        id=selection.id,  # type: ignore[arg-type]
        customer_id=selection.customer_id,
        items=items,
        total=str(selection.total),
    )


def order_to_dto(order: Order, products: dict[int, Product]) -> OrderDTO:
    items = []
    for item in order.items:
        product = products.get(item.product_id)
        items.append(
            OrderLineDTO(
                product_id=item.product_id,
                product_name=product.name if product else f"#{item.product_id}",
                quantity=item.quantity,
                price_at_purchase=str(item.price_at_purchase),
                line_total=str(item.line_total),
            )
        )
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        status=order.status.value,
        items=items,
        total_amount=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def _fmt(money) -> str | None:
    return None if money is None else str(money)
