"""Application service: Update Order Status use case.

The transition check and the write happen as one conditional update on
the stored status, so two admins racing on the same order cannot both
act on a status that no longer holds (e.g. revive a cancelled order).
"""

from __future__ import annotations

import logging

from shop.application.dto import OrderDTO, order_to_dto
from shop.domain.exceptions import ConcurrentUpdateError, NotFoundError
from shop.domain.model.order import OrderStatus, validate_transition
from shop.domain.model.user import Principal, Role
from shop.domain.repository.order_repository import OrderRepository
from shop.domain.service.authorization import require_role

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        principal: Principal,
        order_id: int,
        new_status: OrderStatus | str,
    ) -> OrderDTO:
        require_role(principal, Role.ADMIN)
        requested = OrderStatus.parse(new_status)

        for _ in range(MAX_ATTEMPTS):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order not found with id: {order_id}")

            previous = order.status
            validate_transition(previous, requested)

            if self._order_repo.compare_and_set_status(order_id, previous, requested):
                order.status = requested
                logger.info(
                    "order status changed",
                    extra={"order_id": order_id, "from": previous.value,
                           "to": requested.value, "by": principal.username},
                )
                return order_to_dto(order)

        raise ConcurrentUpdateError(
            f"Order #{order_id} was modified concurrently; try again"
        )
