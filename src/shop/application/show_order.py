"""Application service: Show Order use case (query)."""

from __future__ import annotations

from shop.application.dto import OrderDTO, order_to_dto
from shop.domain.exceptions import NotFoundError
from shop.domain.model.user import Principal
from shop.domain.repository.order_repository import OrderRepository
from shop.domain.service.authorization import require_order_access


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order not found with id: {order_id}")
        require_order_access(principal, order)
        return order_to_dto(order)
