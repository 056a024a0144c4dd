"""Shared plumbing for CLI commands: context lookups and error display."""

from __future__ import annotations

from contextlib import contextmanager

import click

from shopcore.domain.exceptions import (
    ConflictError,
    DomainException,
    ForbiddenError,
    OperationFailedError,
    UnauthenticatedError,
)
from shopcore.domain.repository.unit_of_work import UnitOfWork
from shopcore.infrastructure.bootstrap import unit_of_work_factory
from shopcore.infrastructure.cli.identity import Principal
from shopcore.infrastructure.config import load_settings


def new_uow() -> UnitOfWork:
    """Build a unit of work from the root context, creating the factory once."""
    obj = click.get_current_context().find_root().obj
    if obj.get("uow_factory") is None:
        obj["uow_factory"] = unit_of_work_factory(load_settings())
    return obj["uow_factory"]()


def principal() -> Principal:
    return click.get_current_context().find_root().obj["principal"]


@contextmanager
def handle_errors():
    """Turn core exceptions into user-facing ClickExceptions."""
    try:
        yield
    except (DomainException, UnauthenticatedError, ForbiddenError) as exc:
        raise click.ClickException(str(exc))
    except ConflictError:
        raise click.ClickException(
            "The operation conflicted with a concurrent update. Please retry."
        )
    except OperationFailedError:
        raise click.ClickException("Operation failed.")


def echo_selection(dto) -> None:
    click.echo(f"Cart #{dto.id}  (customer={dto.customer_id})")
    if not dto.items:
        click.echo("  Cart is empty.")
        click.echo(f"  {'Cart Total':<38} {dto.total:>12}")
        return
    click.echo(f"  {'Item':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        name = item.product.name if item.product else "(unknown)"
        click.echo(
            f"  {item.id:<6} {name:<20} {item.quantity:>5} "
            f"{item.unit_price or '-':>10} {item.line_total or '-':>12}"
        )
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Cart Total':<38} {dto.total:>12}")


def echo_order(dto) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{item.price_at_purchase:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>20}")


def echo_order_rows(orders, with_customer: bool = False) -> None:
    if not orders:
        click.echo("No orders found.")
        return
    header = f"{'ID':<6} {'Status':<10} {'Items':>5} {'Total':>12}  Created"
    if with_customer:
        header = f"{'Customer':<9} " + header
    click.echo(header)
    click.echo("-" * len(header))
    for o in orders:
        row = f"{o.id:<6} {o.status:<10} {len(o.items):>5} {o.total_amount:>12}  {o.created_at}"
        if with_customer:
            row = f"{o.customer_id:<9} " + row
        click.echo(row)
