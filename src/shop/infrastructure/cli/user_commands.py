"""CLI commands for accounts."""

from __future__ import annotations

import click

from shop.application.register_user import RegisterUserHandler
from shop.domain.exceptions import DomainException
from shop.domain.model.user import Role
from shop.infrastructure.bootstrap import user_repository
from shop.infrastructure.cli.context import CliContext, pass_cli_context


@click.command("register")
@click.option("--username", required=True, help="Unique username.")
@click.option("--password", required=True, help="Account password.")
@click.option("--email", default="", help="Contact email.")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    default=Role.CUSTOMER.value,
    show_default=True,
    help="Account role.",
)
@pass_cli_context
def user_register(ctx: CliContext, username: str, password: str, email: str, role: str) -> None:
    """Register a new account."""
    handler = RegisterUserHandler(
        user_repo=user_repository(ctx.settings),
        bcrypt_rounds=ctx.settings.bcrypt_rounds,
    )

    try:
        principal = handler.handle(username=username, password=password, email=email, role=role)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{principal.user_id} '{principal.username}' registered as {principal.role.value}")


@click.command("whoami")
@pass_cli_context
def user_whoami(ctx: CliContext) -> None:
    """Check credentials and show the resolved identity."""
    principal = ctx.principal()
    click.echo(f"{principal.username} (#{principal.user_id}, {principal.role.value})")
