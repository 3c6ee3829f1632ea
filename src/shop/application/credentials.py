"""Credential service: password hashing and login.

Passwords are hashed with bcrypt. Callers of the order workflow never
see any of this; they receive the Principal that ``authenticate``
returns.
"""

from __future__ import annotations

import logging

import bcrypt

from shop.domain.exceptions import AuthenticationError
from shop.domain.model.user import Principal
from shop.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage
        return False


class CredentialService:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def authenticate(self, username: str, password: str) -> Principal:
        """Return the Principal for valid credentials.

        Unknown usernames and wrong passwords fail with the same message.
        """
        user = self._user_repo.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("authentication failed", extra={"username": username})
            raise AuthenticationError("Invalid username or password")
        return user.to_principal()
