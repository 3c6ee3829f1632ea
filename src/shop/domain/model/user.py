"""Users, roles and the per-request Principal."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"


@dataclass
class User:
    """A registered account.

    ``password_hash`` is opaque to the domain; only the credential
    service knows how to produce or check it.
    """

    id: int | None
    username: str
    password_hash: str
    email: str
    role: Role

    def to_principal(self) -> Principal:
        return Principal(user_id=self.id, username=self.username, role=self.role)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a single request.

    Passed explicitly to every handler; nothing reads identity from
    global state.
    """

    user_id: int
    username: str
    role: Role
