"""Domain service: Inventory Ledger.

Reserves and releases product stock. A reservation is a single
compare-and-swap on the product's stock: read once, decide, then swap
only if nobody changed the value in between. A lost race is retried a
bounded number of times; nothing waits on another caller.

``reserve_all`` groups the reservations of one order attempt so they
are applied all-or-nothing.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator

from shop.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ReservationConflictError,
)
from shop.domain.model.value_objects import Money, Quantity
from shop.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


@dataclass(frozen=True)
class StockReservation:
    """Stock taken for one order item, with the price seen at that moment."""

    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money


class InventoryLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._product_repo = product_repo
        self._max_attempts = max_attempts

    def reserve(self, product_id: int, quantity: Quantity) -> StockReservation:
        """Take *quantity* units of a product out of stock.

        Raises NotFoundError for an unknown product, InsufficientStockError
        when stock is too low, and ReservationConflictError when every
        attempt lost its compare-and-swap to a concurrent writer.
        """
        for attempt in range(1, self._max_attempts + 1):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise NotFoundError(f"Product not found with id: {product_id}")

            current = product.stock
            if quantity.value > current:
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name} "
                    f"(need {quantity.value}, have {current})"
                )

            if self._product_repo.compare_and_set_stock(
                product_id, current, current - quantity.value
            ):
                logger.debug(
                    "reserved stock",
                    extra={"product_id": product_id, "quantity": quantity.value,
                           "remaining": current - quantity.value},
                )
                return StockReservation(
                    product_id=product_id,
                    product_name=product.name,
                    quantity=quantity,
                    unit_price=product.price,
                )

            logger.debug(
                "stock changed during reservation, retrying",
                extra={"product_id": product_id, "attempt": attempt},
            )

        raise ReservationConflictError(
            f"Could not reserve product {product_id} after "
            f"{self._max_attempts} attempts due to concurrent updates"
        )

    def release(self, reservation: StockReservation) -> None:
        """Put reserved units back into stock."""
        for _ in range(self._max_attempts):
            product = self._product_repo.get_by_id(reservation.product_id)
            if product is None:
                raise NotFoundError(
                    f"Product not found with id: {reservation.product_id}"
                )
            current = product.stock
            if self._product_repo.compare_and_set_stock(
                reservation.product_id, current, current + reservation.quantity.value
            ):
                return

        raise ReservationConflictError(
            f"Could not release stock of product {reservation.product_id} after "
            f"{self._max_attempts} attempts due to concurrent updates"
        )

    @contextmanager
    def reserve_all(
        self, requests: Iterable[tuple[int, Quantity]]
    ) -> Iterator[list[StockReservation]]:
        """Reserve every ``(product_id, quantity)`` pair, all-or-nothing.

        If a reservation fails, or the body of the ``with`` block raises,
        everything already reserved is released before the exception
        propagates. A release that itself fails (the product was deleted,
        say) is logged and skipped; the original exception is re-raised::

            with ledger.reserve_all(pairs) as reservations:
                ...  # build and persist the order
        """
        reservations: list[StockReservation] = []
        try:
            for product_id, quantity in requests:
                reservations.append(self.reserve(product_id, quantity))
            yield reservations
        except Exception:
            if reservations:
                logger.warning(
                    "rolling back stock reservations",
                    extra={"products": [r.product_id for r in reservations]},
                )
            # Release newest first; one failed release must not strand the rest
            for reservation in reversed(reservations):
                try:
                    self.release(reservation)
                except Exception:
                    logger.exception(
                        "could not release stock reservation",
                        extra={"product_id": reservation.product_id,
                               "quantity": reservation.quantity.value},
                    )
            raise
