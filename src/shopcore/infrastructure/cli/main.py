import click

from shopcore.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from shopcore.infrastructure.cli.identity import Principal, Role
from shopcore.infrastructure.cli.order_commands import (
    admin_orders,
    admin_set_status,
    order_list,
    order_place,
    order_show,
)
from shopcore.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from shopcore.infrastructure.config import load_settings
from shopcore.infrastructure.logging_setup import bind_context, configure_logging
from shopcore.infrastructure.persistence.orm import MAX_ROW_ID


@click.group()
@click.option(
    "--customer-id",
    type=click.IntRange(1, MAX_ROW_ID),
    default=None,
    envvar="SHOPCORE_CUSTOMER_ID",
    help="Authenticated customer ID.",
)
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.CUSTOMER.value,
    envvar="SHOPCORE_ROLE",
    show_default=True,
    help="Role of the caller.",
)
@click.pass_context
def cli(ctx: click.Context, customer_id: int | None, role: str) -> None:
    """shopcore: carts with persistent pricing and transactional checkout"""
    ctx.ensure_object(dict)
    if "uow_factory" not in ctx.obj:
        configure_logging(load_settings())
        ctx.obj["uow_factory"] = None
    ctx.obj["principal"] = Principal(customer_id=customer_id, role=Role(role))
    if customer_id is not None:
        bind_context(customer_id=customer_id)


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """Place and view your orders."""


@cli.group()
def admin() -> None:
    """Administer orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_show)
cart.add_command(cart_update)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
order.add_command(order_place)
order.add_command(order_list)
order.add_command(order_show)
admin.add_command(admin_orders)
admin.add_command(admin_set_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
