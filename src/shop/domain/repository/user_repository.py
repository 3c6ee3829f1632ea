"""Abstract repository for User accounts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def get_by_username(self, username: str) -> User | None:
        """Return a user by exact username, or None."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user, assigning an ID if missing.

        Raises AlreadyExistsError when another user has the same username.
        """
