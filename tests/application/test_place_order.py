"""Integration tests for the PlaceOrder (checkout) use case."""

import pytest

from shopcore.application.add_to_selection import AddToSelectionHandler
from shopcore.application.place_order import PlaceOrderHandler
from shopcore.application.show_selection import ShowSelectionHandler
from shopcore.domain.exceptions import (
    ConflictError,
    EmptySelectionError,
    InsufficientStockError,
    InvalidInputError,
)
from shopcore.domain.model.order import OrderStatus
from shopcore.domain.model.product import Product
from shopcore.domain.model.selection import SelectionLine
from shopcore.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository, FakeUnitOfWork

ALICE = 1


def _setup() -> FakeUnitOfWork:
    return FakeUnitOfWork(
        [
            Product(id=1, name="Tablet", price=Money.of("399.99"), available_quantity=15),
            Product(id=2, name="Case", price=Money.of("25.00"), available_quantity=5),
        ]
    )


def _update(uow: FakeUnitOfWork, product_id: int, price: str | None = None, stock: int | None = None) -> None:
    product = uow.products.get_by_id(product_id)
    if price is not None:
        product.update_price(Money.of(price))
    if stock is not None:
        product.set_available_quantity(stock)
    uow.products.save(product)


class TestPlaceOrderHappyPath:

    def test_order_keeps_frozen_price_after_price_change(self):
        uow = _setup()
        cart = AddToSelectionHandler(uow).handle(ALICE, 1, 2)
        assert cart.total == "799.98"

        _update(uow, 1, price="499.99")
        assert ShowSelectionHandler(uow).handle(ALICE).items[0].unit_price == "399.99"

        dto = PlaceOrderHandler(uow).handle(ALICE)

        assert dto.status == "pending"
        assert dto.total_amount == "799.98"
        assert len(dto.items) == 1
        assert dto.items[0].price_at_purchase == "399.99"
        assert dto.items[0].product_name == "Tablet"
        assert uow.products.get_by_id(1).available_quantity == 13

    def test_empties_selection(self):
        uow = _setup()
        AddToSelectionHandler(uow).handle(ALICE, 1, 2)
        AddToSelectionHandler(uow).handle(ALICE, 2, 1)

        PlaceOrderHandler(uow).handle(ALICE)

        selection = uow.selections.get_by_customer(ALICE)
        assert selection is not None
        assert selection.lines == []

    def test_decrements_each_product_exactly(self):
        uow = _setup()
        AddToSelectionHandler(uow).handle(ALICE, 1, 4)
        AddToSelectionHandler(uow).handle(ALICE, 2, 5)

        dto = PlaceOrderHandler(uow).handle(ALICE)

        assert uow.products.get_by_id(1).available_quantity == 11
        assert uow.products.get_by_id(2).available_quantity == 0
        assert dto.total_amount == "1724.96"

    def test_persists_pending_order(self):
        uow = _setup()
        AddToSelectionHandler(uow).handle(ALICE, 1, 1)

        dto = PlaceOrderHandler(uow).handle(ALICE)

        saved = uow.orders.get_by_id(dto.id)
        assert saved.customer_id == ALICE
        assert saved.status == OrderStatus.PENDING
        assert saved.items[0].price_at_purchase == Money.of("399.99")

    def test_each_call_creates_a_new_order(self):
        uow = _setup()
        handler = PlaceOrderHandler(uow)
        AddToSelectionHandler(uow).handle(ALICE, 1, 1)
        first = handler.handle(ALICE)
        AddToSelectionHandler(uow).handle(ALICE, 1, 1)
        second = handler.handle(ALICE)

        assert first.id != second.id


class TestPlaceOrderRejections:

    def test_empty_selection_rejected(self):
        uow = _setup()
        ShowSelectionHandler(uow).handle(ALICE)

        with pytest.raises(EmptySelectionError, match="Cart is empty"):
            PlaceOrderHandler(uow).handle(ALICE)

        assert uow.orders.list_all() == []

    def test_customer_without_selection_rejected(self):
        uow = _setup()
        with pytest.raises(EmptySelectionError):
            PlaceOrderHandler(uow).handle(ALICE)

    def test_stock_reduced_after_add_rolls_back_everything(self):
        uow = _setup()
        _update(uow, 2, stock=2)
        AddToSelectionHandler(uow).handle(ALICE, 1, 3)
        AddToSelectionHandler(uow).handle(ALICE, 2, 2)
        _update(uow, 2, stock=1)

        with pytest.raises(InsufficientStockError, match="Only 1 available") as info:
            PlaceOrderHandler(uow).handle(ALICE)

        assert info.value.product_name == "Case"
        assert info.value.available == 1
        assert uow.orders.list_all() == []
        assert uow.products.get_by_id(1).available_quantity == 15
        assert uow.products.get_by_id(2).available_quantity == 1
        lines = uow.selections.get_by_customer(ALICE).lines
        assert sorted((line.product_id, line.quantity) for line in lines) == [(1, 3), (2, 2)]

    def test_unpriced_legacy_line_rejected(self):
        uow = _setup()
        selection = uow.selections.get_or_create(ALICE)
        selection.lines.append(SelectionLine(None, 1, 1, None))
        uow.selections.save(selection)

        with pytest.raises(InvalidInputError, match="no captured price"):
            PlaceOrderHandler(uow).handle(ALICE)

        assert uow.products.get_by_id(1).available_quantity == 15

    def test_concurrent_decrement_conflict_rolls_back(self):
        class RacingProductRepository(FakeProductRepository):
            """Another checkout takes product 2's stock after validation."""

            def decrement_available_quantity(self, product_id, amount):
                if product_id == 2:
                    raise ConflictError("Stock of product #2 changed during checkout")
                super().decrement_available_quantity(product_id, amount)

        uow = _setup()
        AddToSelectionHandler(uow).handle(ALICE, 1, 2)
        AddToSelectionHandler(uow).handle(ALICE, 2, 1)
        racing = RacingProductRepository()
        racing.__dict__.update(uow.products.__dict__)
        uow.products = racing

        with pytest.raises(ConflictError):
            PlaceOrderHandler(uow).handle(ALICE)

        assert uow.products.get_by_id(1).available_quantity == 15
        assert uow.orders.list_all() == []
        assert len(uow.selections.get_by_customer(ALICE).lines) == 2
