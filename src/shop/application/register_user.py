"""Application service: Register User use case."""

from __future__ import annotations

import logging

from shop.application.credentials import DEFAULT_BCRYPT_ROUNDS, hash_password
from shop.domain.exceptions import AlreadyExistsError, ValidationError
from shop.domain.model.user import Principal, Role, User
from shop.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class RegisterUserHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ) -> None:
        self._user_repo = user_repo
        self._bcrypt_rounds = bcrypt_rounds

    def handle(
        self,
        username: str,
        password: str,
        email: str,
        role: Role | str = Role.CUSTOMER,
    ) -> Principal:
        if not username or not username.strip():
            raise ValidationError("Username is required")
        if not password:
            raise ValidationError("Password is required")
        username = username.strip()

        if not isinstance(role, Role):
            try:
                role = Role(role.strip().upper())
            except ValueError:
                raise ValidationError(f"Unknown role {role!r}") from None

        if self._user_repo.get_by_username(username) is not None:
            raise AlreadyExistsError(f"Username '{username}' already exists")

        user = User(
            id=None,
            username=username,
            password_hash=hash_password(password, self._bcrypt_rounds),
            email=email,
            role=role,
        )
        self._user_repo.save(user)
        logger.info("user registered", extra={"user_id": user.id, "role": role.value})
        return user.to_principal()
