"""Unit tests for the Selection aggregate (price capture and merge rules)."""

import pytest

from shopcore.domain.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
)
from shopcore.domain.model.product import Product
from shopcore.domain.model.selection import Selection, SelectionLine
from shopcore.domain.model.value_objects import Money


def _product(price: str = "399.99", stock: int = 15, pid: int = 1) -> Product:
    return Product(id=pid, name="Tablet", price=Money.of(price), available_quantity=stock)


def _selection(*lines: SelectionLine) -> Selection:
    return Selection(id=1, customer_id=7, lines=list(lines))


class TestAddProduct:

    def test_new_line_freezes_current_price(self):
        selection = _selection()
        line = selection.add_product(_product(), 2)

        assert line.quantity == 2
        assert line.frozen_unit_price == Money.of("399.99")
        assert len(selection.lines) == 1

    def test_re_add_merges_and_keeps_first_price(self):
        selection = _selection()
        product = _product()
        selection.add_product(product, 2)

        product.update_price(Money.of("499.99"))
        line = selection.add_product(product, 3)

        assert len(selection.lines) == 1
        assert line.quantity == 5
        assert line.frozen_unit_price == Money.of("399.99")

    def test_new_line_over_stock_rejected(self):
        selection = _selection()
        with pytest.raises(InsufficientStockError) as info:
            selection.add_product(_product(stock=1), 2)

        assert info.value.available == 1
        assert selection.is_empty

    def test_merge_checks_combined_quantity(self):
        selection = _selection()
        product = _product(stock=4)
        selection.add_product(product, 3)

        with pytest.raises(InsufficientStockError, match="Only 4 available"):
            selection.add_product(product, 2)

        assert selection.lines[0].quantity == 3

    def test_zero_quantity_rejected(self):
        with pytest.raises(InvalidInputError):
            _selection().add_product(_product(), 0)

    def test_one_line_per_product(self):
        selection = _selection()
        selection.add_product(_product(pid=1), 1)
        selection.add_product(_product(pid=2), 1)
        selection.add_product(_product(pid=1), 1)

        assert sorted(line.product_id for line in selection.lines) == [1, 2]


class TestSetQuantity:

    def test_sets_absolute_quantity(self):
        selection = _selection(SelectionLine(10, 1, 5, Money.of("399.99")))
        line = selection.set_quantity(10, 2, _product(price="1.00"))

        assert line.quantity == 2
        assert line.frozen_unit_price == Money.of("399.99")

    def test_unknown_line_rejected(self):
        with pytest.raises(NotFoundError, match="Cart item #99 not found"):
            _selection().set_quantity(99, 1, _product())

    def test_quantity_below_one_rejected(self):
        selection = _selection(SelectionLine(10, 1, 5, Money.of("1.00")))
        with pytest.raises(InvalidInputError, match="at least 1"):
            selection.set_quantity(10, 0, _product())

    def test_live_stock_rechecked(self):
        selection = _selection(SelectionLine(10, 1, 1, Money.of("1.00")))
        with pytest.raises(InsufficientStockError, match="Only 3 available"):
            selection.set_quantity(10, 4, _product(stock=3))
        assert selection.lines[0].quantity == 1


class TestRemoveAndClear:

    def test_remove_line(self):
        selection = _selection(
            SelectionLine(10, 1, 1, Money.of("1.00")),
            SelectionLine(11, 2, 1, Money.of("2.00")),
        )
        selection.remove_line(10)
        assert [line.id for line in selection.lines] == [11]

    def test_remove_unknown_rejected(self):
        with pytest.raises(NotFoundError):
            _selection().remove_line(1)

    def test_clear(self):
        selection = _selection(SelectionLine(10, 1, 1, Money.of("1.00")))
        selection.clear()
        assert selection.is_empty


class TestTotals:

    def test_total_uses_frozen_prices(self):
        selection = _selection(
            SelectionLine(10, 1, 2, Money.of("399.99")),
            SelectionLine(11, 2, 3, Money.of("0.10")),
        )
        assert selection.total == Money.of("800.28")

    def test_empty_total_is_zero(self):
        assert str(_selection().total) == "0.00"


class TestLegacyPriceRepair:

    def test_backfill_fills_missing_price(self):
        line = SelectionLine(10, 1, 1, None)
        assert line.backfill_price(Money.of("5.00")) is True
        assert line.frozen_unit_price == Money.of("5.00")

    def test_backfill_never_overwrites(self):
        line = SelectionLine(10, 1, 1, Money.of("3.00"))
        assert line.backfill_price(Money.of("5.00")) is False
        assert line.frozen_unit_price == Money.of("3.00")

    def test_unpriced_line_excluded_from_total(self):
        selection = _selection(
            SelectionLine(10, 1, 1, None),
            SelectionLine(11, 2, 1, Money.of("2.00")),
        )
        assert selection.total == Money.of("2.00")
