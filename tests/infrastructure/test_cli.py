"""End-to-end tests for the click CLI against an in-memory database."""

import pytest
from click.testing import CliRunner

from shopcore.infrastructure.cli.main import cli


@pytest.fixture
def run(uow_factory):
    runner = CliRunner()

    def _run(*args, customer=None, role="customer"):
        options = ["--role", role]
        if customer is not None:
            options += ["--customer-id", str(customer)]
        return runner.invoke(
            cli,
            options + list(args),
            obj={"uow_factory": uow_factory},
            env={"SHOPCORE_CUSTOMER_ID": None, "SHOPCORE_ROLE": None},
        )

    return _run


def _seed_product(run, stock="15"):
    result = run("product", "add", "--name", "Tablet", "--price", "399.99", "--stock", stock,
                 customer=100, role="admin")
    assert result.exit_code == 0, result.output
    assert "Product #1 'Tablet' added at 399.99" in result.output


class TestCartAndCheckout:

    def test_add_show_and_place(self, run):
        _seed_product(run)

        result = run("cart", "add", "--product-id", "1", "--quantity", "2", customer=1)
        assert result.exit_code == 0, result.output
        assert "799.98" in result.output

        result = run("product", "update", "--id", "1", "--price", "499.99",
                     customer=100, role="admin")
        assert result.exit_code == 0, result.output

        result = run("cart", "show", customer=1)
        assert "399.99" in result.output

        result = run("order", "place", customer=1)
        assert result.exit_code == 0, result.output
        assert "Order #1 placed  (status=pending)" in result.output
        assert "799.98" in result.output

        result = run("product", "list")
        assert "13" in result.output

        result = run("cart", "show", customer=1)
        assert "Cart is empty." in result.output

    def test_empty_cart_checkout_fails(self, run):
        result = run("order", "place", customer=1)
        assert result.exit_code == 1
        assert "Cart is empty" in result.output

    def test_insufficient_stock_reports_available(self, run):
        _seed_product(run, stock="1")
        result = run("cart", "add", "--product-id", "1", "--quantity", "2", customer=1)
        assert result.exit_code == 1
        assert "Only 1 available" in result.output

    def test_unknown_product(self, run):
        result = run("cart", "add", "--product-id", "9", customer=1)
        assert result.exit_code == 1
        assert "Product #9 not found" in result.output


class TestOrders:

    def test_other_customers_order_not_found(self, run):
        _seed_product(run)
        run("cart", "add", "--product-id", "1", customer=1)
        run("order", "place", customer=1)

        result = run("order", "show", "--id", "1", customer=2)

        assert result.exit_code == 1
        assert "Order #1 not found" in result.output

    def test_out_of_range_order_id_is_not_found(self, run):
        result = run("order", "show", "--id", "100000000000000000000", customer=1)
        assert result.exit_code == 1
        assert "not found" in result.output

        result = run("admin", "set-status", "--id", "100000000000000000000",
                     "--status", "completed", customer=100, role="admin")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_admin_lists_and_sets_status(self, run):
        _seed_product(run)
        run("cart", "add", "--product-id", "1", customer=1)
        run("order", "place", customer=1)

        result = run("admin", "orders", customer=100, role="admin")
        assert result.exit_code == 0, result.output
        assert "pending" in result.output

        result = run("admin", "set-status", "--id", "1", "--status", "completed",
                     customer=100, role="admin")
        assert result.exit_code == 0, result.output
        assert "status set to completed" in result.output

        result = run("admin", "set-status", "--id", "1", "--status", "lost",
                     customer=100, role="admin")
        assert result.exit_code == 1
        assert "Invalid status" in result.output


class TestIdentity:

    def test_missing_identity_is_unauthenticated(self, run):
        result = run("cart", "show")
        assert result.exit_code == 1
        assert "Not authenticated" in result.output

    def test_customer_cannot_use_admin_commands(self, run):
        result = run("admin", "orders", customer=1)
        assert result.exit_code == 1
        assert "Admin role required" in result.output

    def test_out_of_range_customer_id_rejected_as_usage_error(self, run):
        result = run("cart", "show", customer=10**20)
        assert result.exit_code == 2
        assert "--customer-id" in result.output
