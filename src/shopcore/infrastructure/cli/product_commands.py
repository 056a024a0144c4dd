"""CLI commands for the catalog."""

from __future__ import annotations

import click

from shopcore.application.add_product import AddProductHandler
from shopcore.application.list_products import ListProductsHandler
from shopcore.application.update_product import UpdateProductHandler
from shopcore.infrastructure.cli.identity import require_admin
from shopcore.infrastructure.cli.support import handle_errors, new_uow, principal


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units available.")
def product_add(name: str, price: str, stock: int) -> None:
    """Add a new product to the catalog (admin)."""
    with handle_errors():
        require_admin(principal())
        product = AddProductHandler(new_uow()).handle(name=name, price=price, stock=stock)

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.available_quantity} in stock)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    with handle_errors():
        products = ListProductsHandler(new_uow()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 46)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.price:>10} {p.available_quantity:>7}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(product_id: int, price: str | None, stock: int | None) -> None:
    """Update a product's price and/or stock (admin)."""
    with handle_errors():
        require_admin(principal())
        product = UpdateProductHandler(new_uow()).handle(
            product_id, new_price=price, new_stock=stock
        )

    click.echo(
        f"Product #{product.id} updated: price {product.price}, "
        f"{product.available_quantity} in stock"
    )
