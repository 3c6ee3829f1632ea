"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by ID."""

    @abstractmethod
    def list_by_category(self, category_id: int) -> list[Product]:
        """Return the products of one category, ordered by ID."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product, assigning an ID if missing.

        Raises AlreadyExistsError when another product has the same name
        (case-insensitive).

        For a product that already exists the stored stock is kept (and
        copied back onto *product*); stock only moves through
        ``compare_and_set_stock``.
        """

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove a product. Unknown IDs are ignored."""

    @abstractmethod
    def compare_and_set_stock(self, product_id: int, expected: int, new: int) -> bool:
        """Atomically set stock to *new* if it currently equals *expected*.

        Returns False (and changes nothing) when the product is missing or
        its stock no longer matches *expected*.
        """
