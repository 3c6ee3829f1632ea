"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, ordered by ID."""

    @abstractmethod
    def list_by_owner(self, owner_id: int) -> list[Order]:
        """Return the orders placed by one user, ordered by ID."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new order.

        Assigns the order ID and any missing item IDs.
        """

    @abstractmethod
    def compare_and_set_status(
        self, order_id: int, expected: OrderStatus, new: OrderStatus
    ) -> bool:
        """Atomically set the status to *new* if it currently equals *expected*."""
