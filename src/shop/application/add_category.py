"""Application service: Add Category use case."""

from __future__ import annotations

import logging

from shop.application.dto import CategoryDTO, category_to_dto
from shop.domain.exceptions import AlreadyExistsError
from shop.domain.model.category import Category
from shop.domain.model.user import Principal, Role
from shop.domain.repository.category_repository import CategoryRepository
from shop.domain.service.authorization import require_role

logger = logging.getLogger(__name__)


class AddCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self, principal: Principal, name: str, description: str = "") -> CategoryDTO:
        require_role(principal, Role.ADMIN)

        category = Category(id=None, name=name, description=description)
        if self._category_repo.get_by_name(category.name) is not None:
            raise AlreadyExistsError(f"Category '{category.name}' already exists")

        self._category_repo.save(category)
        logger.info("category added", extra={"category_id": category.id})
        return category_to_dto(category)
