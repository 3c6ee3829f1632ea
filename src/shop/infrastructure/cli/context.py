"""Per-invocation state shared by CLI commands.

The CLI plays the identity-context role: it authenticates the
``--user``/``--password`` pair once and hands the resulting Principal to
the handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import click

from shop.application.credentials import CredentialService
from shop.domain.exceptions import DomainException
from shop.domain.model.user import Principal
from shop.infrastructure.bootstrap import user_repository
from shop.infrastructure.config import Settings


@dataclass
class CliContext:

    settings: Settings
    username: str | None = None
    password: str | None = None
    _principal: Principal | None = field(default=None, repr=False)

    def principal(self) -> Principal:
        if self._principal is None:
            if not self.username or self.password is None:
                raise click.UsageError(
                    "This command needs credentials: pass --user and --password "
                    "(or set SHOP_USER / SHOP_PASSWORD)."
                )
            service = CredentialService(user_repository(self.settings))
            try:
                self._principal = service.authenticate(self.username, self.password)
            except DomainException as exc:
                raise click.ClickException(str(exc))
        return self._principal


pass_cli_context = click.make_pass_decorator(CliContext)


def parse_items(raw: str) -> list[tuple[int, int]]:
    """Parse '1:3,2:5' into [(product_id, quantity), ...]."""
    pairs: list[tuple[int, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        pid_str, qty_str = pair.rsplit(":", 1)
        try:
            pairs.append((int(pid_str), int(qty_str)))
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Product id and quantity must be integers."
            )
    return pairs
