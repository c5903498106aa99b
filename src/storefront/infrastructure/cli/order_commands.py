"""CLI commands for the order back-office."""

from __future__ import annotations

import click

from storefront.application.list_orders import ListOrdersHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import (
    order_repository,
    settings,
    transition_table,
)


@click.command("list")
def order_list() -> None:
    """List all orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository(), currency=settings().currency)

    try:
        overview = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not overview.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<38} {'Status':<12} {'Total':>12}  Created")
    click.echo("-" * 84)
    for o in overview.orders:
        click.echo(f"{o.id:<38} {o.status:<12} {o.breakdown.total:>12}  {o.created_at}")
    click.echo("-" * 84)
    click.echo(f"Orders: {len(overview.orders)}  Open: {overview.open_count}  "
               f"Revenue: {overview.total_revenue}")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="New status.",
)
def order_status(order_id: str, new_status: str) -> None:
    """Change an order's status."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        transitions=transition_table(),
    )

    try:
        dto = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} status changed to {dto.status}")
