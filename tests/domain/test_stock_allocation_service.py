"""Unit tests for the StockAllocationService domain service."""

import pytest

from shopcore.domain.exceptions import InsufficientStockError, NotFoundError
from shopcore.domain.model.product import Product
from shopcore.domain.model.selection import SelectionLine
from shopcore.domain.model.value_objects import Money
from shopcore.domain.service.stock_allocation_service import StockAllocationService
from tests.fakes import FakeProductRepository


def _make_products(*rows: tuple[int, str, int]) -> FakeProductRepository:
    """Create repo with (product_id, name, stock) tuples."""
    return FakeProductRepository(
        [
            Product(id=pid, name=name, price=Money.of("10.00"), available_quantity=stock)
            for pid, name, stock in rows
        ]
    )


def _lines(*rows: tuple[int, int]) -> list[SelectionLine]:
    return [
        SelectionLine(id=i, product_id=pid, quantity=qty, frozen_unit_price=Money.of("10.00"))
        for i, (pid, qty) in enumerate(rows, start=1)
    ]


class TestAllocate:

    def test_decrements_all_products(self):
        repo = _make_products((1, "Widget", 100), (2, "Gadget", 50))
        svc = StockAllocationService(repo)

        products = svc.allocate(_lines((1, 10), (2, 5)))

        assert repo.get_by_id(1).available_quantity == 90
        assert repo.get_by_id(2).available_quantity == 45
        assert products[1].available_quantity == 90

    def test_exact_stock_allowed(self):
        repo = _make_products((1, "Widget", 3))
        StockAllocationService(repo).allocate(_lines((1, 3)))
        assert repo.get_by_id(1).available_quantity == 0

    def test_no_partial_decrement_on_failure(self):
        """If Widget passes but Gadget fails, Widget must NOT be decremented."""
        repo = _make_products((1, "Widget", 100), (2, "Gadget", 3))
        svc = StockAllocationService(repo)

        with pytest.raises(InsufficientStockError, match="Insufficient stock for Gadget") as info:
            svc.allocate(_lines((1, 10), (2, 5)))

        assert info.value.product_id == 2
        assert info.value.available == 3
        assert repo.get_by_id(1).available_quantity == 100
        assert repo.get_by_id(2).available_quantity == 3

    def test_missing_product_rejected(self):
        repo = _make_products()
        with pytest.raises(NotFoundError, match="Product #1 not found"):
            StockAllocationService(repo).allocate(_lines((1, 1)))

    def test_locks_products_in_ascending_id_order(self):
        repo = _make_products((1, "Widget", 10), (2, "Gadget", 10), (3, "Gizmo", 10))
        locked: list[int] = []
        original = repo.get_for_update

        def recording_get_for_update(product_id):
            locked.append(product_id)
            return original(product_id)

        repo.get_for_update = recording_get_for_update

        StockAllocationService(repo).allocate(_lines((3, 1), (1, 1), (2, 1)))

        assert locked == [1, 2, 3]
