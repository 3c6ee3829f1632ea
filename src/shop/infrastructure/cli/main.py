from __future__ import annotations

import click

from shop.infrastructure.cli.catalog_commands import (
    category_add,
    category_delete,
    category_list,
    category_update,
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from shop.infrastructure.cli.context import CliContext
from shop.infrastructure.cli.order_commands import (
    order_list,
    order_mine,
    order_place,
    order_show,
    order_status,
)
from shop.infrastructure.cli.user_commands import user_register, user_whoami
from shop.infrastructure.config import Settings
from shop.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--user", "username", envvar="SHOP_USER", default=None, help="Username to act as.")
@click.option("--password", envvar="SHOP_PASSWORD", default=None, help="Password for --user.")
@click.pass_context
def cli(ctx: click.Context, username: str | None, password: str | None) -> None:
    """Shop: catalog, inventory and orders"""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    ctx.obj = CliContext(settings=settings, username=username, password=password)


@cli.group()
def user() -> None:
    """Manage accounts."""


@cli.group()
def category() -> None:
    """Manage categories."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


# Register subcommands
user.add_command(user_register)
user.add_command(user_whoami)
category.add_command(category_add)
category.add_command(category_update)
category.add_command(category_delete)
category.add_command(category_list)
product.add_command(product_add)
product.add_command(product_update)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
order.add_command(order_place)
order.add_command(order_mine)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
