from __future__ import annotations

import click

from storefront.infrastructure.bootstrap import settings
from storefront.infrastructure.cli.cart_commands import cart_add, cart_open, cart_set, cart_show
from storefront.infrastructure.cli.catalog_commands import catalog_list, catalog_save
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.order_commands import order_list, order_status
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override STOREFRONT_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Storefront: catalog, cart, checkout and back-office"""
    s = settings()
    configure_logging(level=log_level or s.log_level, json_output=s.log_json)


@cli.group()
def catalog() -> None:
    """Browse and manage products."""


@cli.group()
def cart() -> None:
    """Manage a shopping cart."""


@cli.group()
def order() -> None:
    """Manage placed orders."""


# Register subcommands
catalog.add_command(catalog_list)
catalog.add_command(catalog_save)
cart.add_command(cart_open)
cart.add_command(cart_add)
cart.add_command(cart_set)
cart.add_command(cart_show)
order.add_command(order_list)
order.add_command(order_status)
cli.add_command(checkout)
