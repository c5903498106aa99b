"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.dto import ProductSpec, VariantSpec
from storefront.application.list_catalog import ListCatalogHandler
from storefront.application.save_product import SaveProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import catalog_repository, settings


def _parse_variant(raw: str) -> VariantSpec:
    """Parse 'Small:299.99' or 'Small:299.99:QFJ-S' into a VariantSpec."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) not in (2, 3):
        raise click.BadParameter(
            f"Invalid variant format '{raw}'. Expected 'Title:Price[:SKU]'."
        )
    title, price = parts[0], parts[1]
    sku = parts[2] if len(parts) == 3 else None
    return VariantSpec(title=title, price=price, sku=sku or None)


@click.command("list")
@click.option("--published", is_flag=True, default=False, help="Only storefront-visible products.")
def catalog_list(published: bool) -> None:
    """List products with their price ranges."""
    handler = ListCatalogHandler(catalog_repo=catalog_repository())

    try:
        products = handler.handle(published_only=published)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<24} {'Status':<14} {'Variants':>8}  Price")
    click.echo("-" * 100)
    for p in products:
        state = p.availability_status if p.is_published else "DRAFT"
        click.echo(f"{p.id:<38} {p.name:<24} {state:<14} {p.variant_count:>8}  {p.price_range}")


@click.command("save")
@click.option("--id", "product_id", default=None, help="Existing product ID (omit to create).")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default=None, help="Product description.")
@click.option("--image-url", default=None, help="Image URL.")
@click.option("--tags", default=None, help="Comma-separated tags.")
@click.option("--published/--draft", default=False, help="Show on the storefront.")
@click.option("--availability", default="IN_STOCK", show_default=True,
              help="IN_STOCK, OUT_OF_STOCK or DISCONTINUED.")
@click.option("--variant", "variants", multiple=True,
              help="Variant as 'Title:Price[:SKU]'; repeat for several.")
def catalog_save(
    product_id: str | None,
    name: str,
    description: str | None,
    image_url: str | None,
    tags: str | None,
    published: bool,
    availability: str,
    variants: tuple[str, ...],
) -> None:
    """Create or update a product and add variants to it."""
    spec = ProductSpec(
        name=name,
        description=description,
        image_url=image_url,
        is_published=published,
        availability_status=availability,
        tags=tags,
    )
    variant_specs = [_parse_variant(v) for v in variants]

    handler = SaveProductHandler(catalog_repo=catalog_repository(), currency=settings().currency)

    try:
        product, saved = handler.handle(spec, variant_specs, product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    verb = "updated" if product_id else "created"
    click.echo(f"Product {product.id} '{product.name}' {verb}")
    for v in saved:
        click.echo(f"  variant {v.id} '{v.title}' at {v.price}")
