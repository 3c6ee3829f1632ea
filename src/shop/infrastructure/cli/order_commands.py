"""CLI commands for orders."""

from __future__ import annotations

import click

from shop.application.dto import OrderDTO, OrderItemSpec
from shop.application.list_orders import GetAllOrdersHandler, GetMyOrdersHandler
from shop.application.place_order import PlaceOrderHandler
from shop.application.show_order import ShowOrderHandler
from shop.application.update_order_status import UpdateOrderStatusHandler
from shop.domain.exceptions import DomainException
from shop.domain.model.order import OrderStatus
from shop.infrastructure.bootstrap import inventory_ledger, order_repository
from shop.infrastructure.cli.context import CliContext, parse_items, pass_cli_context


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Owner:   user #{dto.owner_id}")
    click.echo(f"Created: {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>20}")


def _display_summary(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Owner':>6} {'Status':<10} {'Items':>6} {'Total':>12}")
    click.echo("-" * 44)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.owner_id:>6} {o.status:<10} {len(o.items):>6} {o.total_amount:>12}"
        )


@click.command("place")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@pass_cli_context
def order_place(ctx: CliContext, items: str) -> None:
    """Place an order (customers only)."""
    specs = [OrderItemSpec(product_id=pid, quantity=qty) for pid, qty in parse_items(items)]
    principal = ctx.principal()

    handler = PlaceOrderHandler(
        order_repo=order_repository(ctx.settings),
        ledger=inventory_ledger(ctx.settings),
    )

    try:
        dto = handler.handle(principal, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("mine")
@pass_cli_context
def order_mine(ctx: CliContext) -> None:
    """List your own orders (customers only)."""
    handler = GetMyOrdersHandler(order_repo=order_repository(ctx.settings))

    try:
        orders = handler.handle(ctx.principal())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(orders)


@click.command("list")
@pass_cli_context
def order_list(ctx: CliContext) -> None:
    """List every order (admins only)."""
    handler = GetAllOrdersHandler(order_repo=order_repository(ctx.settings))

    try:
        orders = handler.handle(ctx.principal())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(orders)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@pass_cli_context
def order_show(ctx: CliContext, order_id: int) -> None:
    """Show details of an order."""
    handler = ShowOrderHandler(order_repo=order_repository(ctx.settings))

    try:
        dto = handler.handle(ctx.principal(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--to",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="New status.",
)
@pass_cli_context
def order_status(ctx: CliContext, order_id: int, new_status: str) -> None:
    """Change an order's status (admins only)."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository(ctx.settings))

    try:
        dto = handler.handle(ctx.principal(), order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")
