"""CLI command for checking out a cart."""

from __future__ import annotations

import click

from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import AddressSpec, CustomerSpec
from storefront.domain.exceptions import DomainException, PartialOrderError
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import (
    cart_repository,
    catalog_repository,
    order_repository,
    payment_gateway,
    price_calculator,
)


@click.command("checkout")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--first-name", required=True, help="Customer first name.")
@click.option("--last-name", required=True, help="Customer last name.")
@click.option("--phone", default=None, help="Customer phone.")
@click.option("--company", default=None, help="Shipping company name.")
@click.option("--line1", required=True, help="Shipping address line 1.")
@click.option("--line2", default=None, help="Shipping address line 2.")
@click.option("--city", required=True, help="Shipping city.")
@click.option("--region", required=True, help="Shipping state or region.")
@click.option("--postal-code", required=True, help="Shipping postal code.")
@click.option("--country", "country_code", default=None, help="Shipping country code.")
@click.option("--billing-line1", default=None, help="Billing line 1 (omit to bill to shipping).")
@click.option("--billing-city", default=None, help="Billing city.")
@click.option("--billing-region", default=None, help="Billing state or region.")
@click.option("--billing-postal-code", default=None, help="Billing postal code.")
@click.option("--notes", default=None, help="Order notes.")
def checkout(
    cart_id: str,
    email: str,
    first_name: str,
    last_name: str,
    phone: str | None,
    company: str | None,
    line1: str,
    line2: str | None,
    city: str,
    region: str,
    postal_code: str,
    country_code: str | None,
    billing_line1: str | None,
    billing_city: str | None,
    billing_region: str | None,
    billing_postal_code: str | None,
    notes: str | None,
) -> None:
    """Pay for a cart and place the order."""
    customer = CustomerSpec(email=email, first_name=first_name, last_name=last_name, phone=phone)
    shipping = AddressSpec(
        line1=line1,
        line2=line2,
        city=city,
        region=region,
        postal_code=postal_code,
        country_code=country_code,
        first_name=first_name,
        last_name=last_name,
        company=company,
        phone=phone,
    )
    billing = None
    if any((billing_line1, billing_city, billing_region, billing_postal_code)):
        billing = AddressSpec(
            line1=billing_line1 or "",
            city=billing_city or "",
            region=billing_region or "",
            postal_code=billing_postal_code or "",
            first_name=first_name,
            last_name=last_name,
        )

    handler = CheckoutHandler(
        cart_repo=cart_repository(),
        catalog_repo=catalog_repository(),
        order_repo=order_repository(),
        calculator=price_calculator(),
    )
    gateway = payment_gateway()
    taken: list[str] = []

    def charge(amount: Money, customer_email: str) -> str:
        reference = gateway.charge(amount, customer_email=customer_email)
        taken.append(reference)
        return reference

    try:
        result = handler.handle(
            cart_id,
            customer,
            shipping,
            billing_address=billing,
            notes=notes,
            charge=charge,
        )
    except PartialOrderError as exc:
        raise click.ClickException(
            f"Payment {taken[0]} was taken but checkout did not finish: {exc}. "
            f"Completed steps: {', '.join(exc.completed_steps)}."
        )
    except DomainException as exc:
        if taken:
            raise click.ClickException(
                f"Payment {taken[0]} was taken but no order was saved: {exc}"
            )
        raise click.ClickException(str(exc))

    o = result.order
    click.echo(f"Order #{o.id} placed  (status={o.status}, payment={result.payment_reference})")
    click.echo()
    click.echo(f"  {'Item':<24} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*55}")
    for item in result.items:
        click.echo(f"  {item.title:<24} {item.quantity:>5} {item.unit_price:>12} {item.total_price:>12}")
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Subtotal':<43} {o.breakdown.subtotal:>12}")
    click.echo(f"  {'Shipping':<43} {o.breakdown.shipping:>12}")
    click.echo(f"  {'Tax':<43} {o.breakdown.tax:>12}")
    click.echo(f"  {'Total':<43} {o.breakdown.total:>12}")
