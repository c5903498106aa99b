"""CLI commands for shopping carts."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.dto import CartDTO
from storefront.application.open_cart import OpenCartHandler
from storefront.application.set_line_quantity import SetLineQuantityHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    catalog_repository,
    price_calculator,
)


@click.command("open")
@click.option("--session", "session_id", required=True, help="Shopper session ID.")
def cart_open(session_id: str) -> None:
    """Show the open cart for a session, creating it if needed."""
    handler = OpenCartHandler(cart_repo=cart_repository())

    try:
        opened = handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {opened.id}  (session={opened.session_id}, status={opened.status})")


@click.command("add")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--variant", "variant_id", required=True, help="Variant ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(cart_id: str, variant_id: str, quantity: int) -> None:
    """Add a variant to a cart (merges with an existing line)."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        catalog_repo=catalog_repository(),
    )

    try:
        line = handler.handle(cart_id, variant_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{line.variant_id} x{line.quantity} @ {line.unit_price} = {line.line_total}")


@click.command("set")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--variant", "variant_id", required=True, help="Variant ID.")
@click.option("--quantity", required=True, type=int, help="New quantity; 0 removes the line.")
def cart_set(cart_id: str, variant_id: str, quantity: int) -> None:
    """Overwrite a line's quantity."""
    handler = SetLineQuantityHandler(cart_repo=cart_repository())

    try:
        line = handler.handle(cart_id, variant_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if line is None:
        click.echo(f"Removed {variant_id} from cart {cart_id}")
    else:
        click.echo(f"{line.variant_id} x{line.quantity} = {line.line_total}")


def display_cart(dto: CartDTO) -> None:
    """Shared formatting for a cart and its breakdown."""
    click.echo(f"Cart {dto.cart_id}  ({dto.item_count} items)")
    click.echo()
    click.echo(f"  {'Variant':<20} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*51}")
    for line in dto.lines:
        click.echo(
            f"  {line.variant_id:<20} {line.quantity:>5} {line.unit_price:>12} {line.line_total:>12}"
        )
    for variant_id in dto.unavailable:
        click.echo(f"  {variant_id:<20} {'':>5} {'N/A':>12} {'N/A':>12}")
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Subtotal':<39} {dto.breakdown.subtotal:>12}")
    click.echo(f"  {'Shipping':<39} {dto.breakdown.shipping:>12}")
    click.echo(f"  {'Tax':<39} {dto.breakdown.tax:>12}")
    click.echo(f"  {'Total':<39} {dto.breakdown.total:>12}")


@click.command("show")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
def cart_show(cart_id: str) -> None:
    """Show a cart's lines and totals."""
    handler = ShowCartHandler(cart_repo=cart_repository(), calculator=price_calculator())

    try:
        dto = handler.handle(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dto.lines and not dto.unavailable:
        click.echo(f"Cart {cart_id} is empty.")
        return
    display_cart(dto)
    if dto.unavailable:
        click.echo()
        click.echo("Items marked N/A are no longer sold; remove them with `cart set --quantity 0`.")
