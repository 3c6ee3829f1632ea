"""Application services: order listing queries."""

from __future__ import annotations

from shop.application.dto import OrderDTO, order_to_dto
from shop.domain.model.user import Principal, Role
from shop.domain.repository.order_repository import OrderRepository
from shop.domain.service.authorization import require_role


class GetMyOrdersHandler:
    """Orders placed by the calling customer."""

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal) -> list[OrderDTO]:
        require_role(principal, Role.CUSTOMER)
        return [order_to_dto(o) for o in self._order_repo.list_by_owner(principal.user_id)]


class GetAllOrdersHandler:
    """Every order in the system; admins only."""

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal) -> list[OrderDTO]:
        require_role(principal, Role.ADMIN)
        return [order_to_dto(o) for o in self._order_repo.list_all()]
