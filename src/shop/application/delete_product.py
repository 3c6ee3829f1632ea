"""Application service: Delete Product use case.

Existing orders keep their item snapshots; nothing in an order needs
the product record after placement.
"""

from __future__ import annotations

from shop.domain.exceptions import NotFoundError
from shop.domain.model.user import Principal, Role
from shop.domain.repository.product_repository import ProductRepository
from shop.domain.service.authorization import require_role


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, principal: Principal, product_id: int) -> None:
        require_role(principal, Role.ADMIN)

        if self._product_repo.get_by_id(product_id) is None:
            raise NotFoundError(f"Product not found with id: {product_id}")
        self._product_repo.delete(product_id)
