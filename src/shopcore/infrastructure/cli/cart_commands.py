"""CLI commands for the customer's cart (the Selection)."""

from __future__ import annotations

import click

from shopcore.application.add_to_selection import AddToSelectionHandler
from shopcore.application.clear_selection import ClearSelectionHandler
from shopcore.application.remove_selection_line import RemoveSelectionLineHandler
from shopcore.application.show_selection import ShowSelectionHandler
from shopcore.application.update_selection_line import UpdateSelectionLineHandler
from shopcore.infrastructure.cli.identity import current_customer_id
from shopcore.infrastructure.cli.support import (
    echo_selection,
    handle_errors,
    new_uow,
    principal,
)


@click.command("add")
@click.option("--product-id", required=True, type=int, help="Product to add.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(product_id: int, quantity: int) -> None:
    """Add a product to the cart (merges with an existing line)."""
    with handle_errors():
        customer_id = current_customer_id(principal())
        dto = AddToSelectionHandler(new_uow()).handle(customer_id, product_id, quantity)

    click.echo("Item added to cart.")
    echo_selection(dto)


@click.command("show")
def cart_show() -> None:
    """Show the cart with its total."""
    with handle_errors():
        customer_id = current_customer_id(principal())
        dto = ShowSelectionHandler(new_uow()).handle(customer_id)

    echo_selection(dto)


@click.command("update")
@click.option("--item-id", required=True, type=int, help="Cart item to change.")
@click.option("--quantity", required=True, type=int, help="New quantity (absolute).")
def cart_update(item_id: int, quantity: int) -> None:
    """Set the quantity of a cart item."""
    with handle_errors():
        customer_id = current_customer_id(principal())
        dto = UpdateSelectionLineHandler(new_uow()).handle(customer_id, item_id, quantity)

    click.echo("Cart item updated.")
    echo_selection(dto)


@click.command("remove")
@click.option("--item-id", required=True, type=int, help="Cart item to remove.")
def cart_remove(item_id: int) -> None:
    """Remove an item from the cart."""
    with handle_errors():
        customer_id = current_customer_id(principal())
        dto = RemoveSelectionLineHandler(new_uow()).handle(customer_id, item_id)

    click.echo("Item removed from cart.")
    echo_selection(dto)


@click.command("clear")
def cart_clear() -> None:
    """Remove every item from the cart."""
    with handle_errors():
        customer_id = current_customer_id(principal())
        ClearSelectionHandler(new_uow()).handle(customer_id)

    click.echo("Cart cleared.")
