"""CLI commands for placing and viewing orders."""

from __future__ import annotations

import click

from shopcore.application.list_all_orders import ListAllOrdersHandler
from shopcore.application.list_my_orders import ListMyOrdersHandler
from shopcore.application.place_order import PlaceOrderHandler
from shopcore.application.set_order_status import SetOrderStatusHandler
from shopcore.application.show_order import ShowOrderHandler
from shopcore.infrastructure.cli.identity import current_customer_id, require_admin
from shopcore.infrastructure.cli.support import (
    echo_order,
    echo_order_rows,
    handle_errors,
    new_uow,
    principal,
)


@click.command("place")
def order_place() -> None:
    """Check out the cart into a new order.

    Not idempotent: do not blindly retry after an ambiguous failure.
    """
    with handle_errors():
        customer_id = current_customer_id(principal())
        dto = PlaceOrderHandler(new_uow()).handle(customer_id)

    click.echo(f"Order #{dto.id} placed  (status={dto.status})")
    echo_order(dto)


@click.command("list")
def order_list() -> None:
    """List your orders, newest first."""
    with handle_errors():
        customer_id = current_customer_id(principal())
        orders = ListMyOrdersHandler(new_uow()).handle(customer_id)

    echo_order_rows(orders)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of one of your orders."""
    with handle_errors():
        customer_id = current_customer_id(principal())
        dto = ShowOrderHandler(new_uow()).handle(customer_id, order_id)

    echo_order(dto)


@click.command("orders")
def admin_orders() -> None:
    """List every order across customers (admin)."""
    with handle_errors():
        require_admin(principal())
        orders = ListAllOrdersHandler(new_uow()).handle()

    echo_order_rows(orders, with_customer=True)


@click.command("set-status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", required=True, help="pending, completed or cancelled.")
def admin_set_status(order_id: int, status: str) -> None:
    """Change an order's status (admin)."""
    with handle_errors():
        require_admin(principal())
        dto = SetOrderStatusHandler(new_uow()).handle(order_id, status)

    click.echo(f"Order #{dto.id} status set to {dto.status}.")
