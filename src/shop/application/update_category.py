"""Application service: Update Category use case."""

from __future__ import annotations

from shop.application.dto import CategoryDTO, category_to_dto
from shop.domain.exceptions import AlreadyExistsError, NotFoundError
from shop.domain.model.category import Category
from shop.domain.model.user import Principal, Role
from shop.domain.repository.category_repository import CategoryRepository
from shop.domain.service.authorization import require_role


class UpdateCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(
        self,
        principal: Principal,
        category_id: int,
        name: str,
        description: str = "",
    ) -> CategoryDTO:
        require_role(principal, Role.ADMIN)

        if self._category_repo.get_by_id(category_id) is None:
            raise NotFoundError(f"Category not found with id: {category_id}")

        updated = Category(id=category_id, name=name, description=description)
        clash = self._category_repo.get_by_name(updated.name)
        if clash is not None and clash.id != category_id:
            raise AlreadyExistsError(f"Category '{updated.name}' already exists")

        self._category_repo.save(updated)
        return category_to_dto(updated)
