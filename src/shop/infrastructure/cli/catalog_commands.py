"""CLI commands for categories and products."""

from __future__ import annotations

import click

from shop.application.add_category import AddCategoryHandler
from shop.application.add_product import AddProductHandler
from shop.application.browse_catalog import BrowseCatalogHandler
from shop.application.delete_category import DeleteCategoryHandler
from shop.application.delete_product import DeleteProductHandler
from shop.application.dto import ProductDTO
from shop.application.update_category import UpdateCategoryHandler
from shop.application.update_product import UpdateProductHandler
from shop.domain.exceptions import DomainException
from shop.infrastructure.bootstrap import category_repository, product_repository
from shop.infrastructure.cli.context import CliContext, pass_cli_context


def _browser(ctx: CliContext) -> BrowseCatalogHandler:
    return BrowseCatalogHandler(
        product_repo=product_repository(ctx.settings),
        category_repo=category_repository(ctx.settings),
    )


# --- Categories ---------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Category name.")
@click.option("--description", default="", help="Category description.")
@pass_cli_context
def category_add(ctx: CliContext, name: str, description: str) -> None:
    """Add a category (admins only)."""
    handler = AddCategoryHandler(category_repo=category_repository(ctx.settings))

    try:
        dto = handler.handle(ctx.principal(), name=name, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{dto.id} '{dto.name}' added")


@click.command("update")
@click.option("--id", "category_id", required=True, type=int, help="Category ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--description", default="", help="New description.")
@pass_cli_context
def category_update(ctx: CliContext, category_id: int, name: str, description: str) -> None:
    """Rename or re-describe a category (admins only)."""
    handler = UpdateCategoryHandler(category_repo=category_repository(ctx.settings))

    try:
        dto = handler.handle(ctx.principal(), category_id, name=name, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{dto.id} updated")


@click.command("delete")
@click.option("--id", "category_id", required=True, type=int, help="Category ID.")
@pass_cli_context
def category_delete(ctx: CliContext, category_id: int) -> None:
    """Delete an empty category (admins only)."""
    handler = DeleteCategoryHandler(
        category_repo=category_repository(ctx.settings),
        product_repo=product_repository(ctx.settings),
    )

    try:
        handler.handle(ctx.principal(), category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category_id} deleted")


@click.command("list")
@pass_cli_context
def category_list(ctx: CliContext) -> None:
    """List all categories."""
    categories = _browser(ctx).list_categories()

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} Description")
    click.echo("-" * 48)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<20} {c.description}")


# --- Products -----------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=click.IntRange(min=0), help="Units in stock.")
@click.option("--category", "category_id", required=True, type=int, help="Category ID.")
@click.option("--description", default="", help="Product description.")
@pass_cli_context
def product_add(
    ctx: CliContext, name: str, price: str, stock: int, category_id: int, description: str
) -> None:
    """Add a new product to the catalog (admins only)."""
    handler = AddProductHandler(
        product_repo=product_repository(ctx.settings),
        category_repo=category_repository(ctx.settings),
    )

    try:
        dto = handler.handle(
            ctx.principal(),
            name=name,
            price=price,
            stock=stock,
            category_id=category_id,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {dto.price} ({dto.stock} in stock)")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=click.IntRange(min=0), help="New stock level.")
@click.option("--category", "category_id", default=None, type=int, help="New category ID.")
@pass_cli_context
def product_update(
    ctx: CliContext,
    product_id: int,
    name: str | None,
    description: str | None,
    price: str | None,
    stock: int | None,
    category_id: int | None,
) -> None:
    """Update a product (admins only)."""
    handler = UpdateProductHandler(
        product_repo=product_repository(ctx.settings),
        category_repo=category_repository(ctx.settings),
    )

    try:
        dto = handler.handle(
            ctx.principal(),
            product_id,
            name=name,
            description=description,
            price=price,
            stock=stock,
            category_id=category_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated: {dto.price}, {dto.stock} in stock")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@pass_cli_context
def product_delete(ctx: CliContext, product_id: int) -> None:
    """Remove a product from the catalog (admins only)."""
    handler = DeleteProductHandler(product_repo=product_repository(ctx.settings))

    try:
        handler.handle(ctx.principal(), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted")


@click.command("list")
@click.option("--category", "category_id", default=None, type=int, help="Only this category.")
@pass_cli_context
def product_list(ctx: CliContext, category_id: int | None) -> None:
    """List products in the catalog."""
    browser = _browser(ctx)

    try:
        if category_id is None:
            products = browser.list_products()
        else:
            products = browser.list_products_by_category(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7} Category")
    click.echo("-" * 56)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.price:>10} {p.stock:>7} {p.category_name or '-'}"
        )


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product #{dto.id}: {dto.name}")
    click.echo(f"Price:    {dto.price}")
    click.echo(f"Stock:    {dto.stock}")
    click.echo(f"Category: {dto.category_name or '-'} (#{dto.category_id})")
    if dto.description:
        click.echo(f"\n{dto.description}")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@pass_cli_context
def product_show(ctx: CliContext, product_id: int) -> None:
    """Show one product."""
    try:
        dto = _browser(ctx).get_product(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)
