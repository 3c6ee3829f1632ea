"""Abstract repository for Category entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.category import Category


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Category | None:
        """Return a category by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category, ordered by ID."""

    @abstractmethod
    def save(self, category: Category) -> None:
        """Persist a new or updated category, assigning an ID if missing.

        Raises AlreadyExistsError when another category has the same name
        (case-insensitive).
        """

    @abstractmethod
    def delete(self, category_id: int) -> None:
        """Remove a category. Unknown IDs are ignored."""
