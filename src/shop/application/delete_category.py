"""Application service: Delete Category use case.

A category that products still point at cannot be removed.
"""

from __future__ import annotations

from shop.domain.exceptions import NotFoundError, ValidationError
from shop.domain.model.user import Principal, Role
from shop.domain.repository.category_repository import CategoryRepository
from shop.domain.repository.product_repository import ProductRepository
from shop.domain.service.authorization import require_role


class DeleteCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, principal: Principal, category_id: int) -> None:
        require_role(principal, Role.ADMIN)

        if self._category_repo.get_by_id(category_id) is None:
            raise NotFoundError(f"Category not found with id: {category_id}")

        in_use = self._product_repo.list_by_category(category_id)
        if in_use:
            raise ValidationError(
                f"Category {category_id} still has {len(in_use)} product(s)"
            )

        self._category_repo.delete(category_id)
