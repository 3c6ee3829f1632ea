"""Application service: catalog queries. Open to everyone, no principal needed."""

from __future__ import annotations

from shop.application.dto import CategoryDTO, ProductDTO, category_to_dto, product_to_dto
from shop.domain.exceptions import NotFoundError
from shop.domain.model.product import Product
from shop.domain.repository.category_repository import CategoryRepository
from shop.domain.repository.product_repository import ProductRepository


class BrowseCatalogHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    # --- Categories -----------------------------------------------------------

    def list_categories(self) -> list[CategoryDTO]:
        return [category_to_dto(c) for c in self._category_repo.list_all()]

    def get_category(self, category_id: int) -> CategoryDTO:
        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise NotFoundError(f"Category not found with id: {category_id}")
        return category_to_dto(category)

    # --- Products -------------------------------------------------------------

    def list_products(self) -> list[ProductDTO]:
        return self._to_dtos(self._product_repo.list_all())

    def get_product(self, product_id: int) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product not found with id: {product_id}")
        return product_to_dto(product, self._category_repo.get_by_id(product.category_id))

    def list_products_by_category(self, category_id: int) -> list[ProductDTO]:
        if self._category_repo.get_by_id(category_id) is None:
            raise NotFoundError(f"Category not found with id: {category_id}")
        return self._to_dtos(self._product_repo.list_by_category(category_id))

    def _to_dtos(self, products: list[Product]) -> list[ProductDTO]:
        categories = {c.id: c for c in self._category_repo.list_all()}
        return [product_to_dto(p, categories.get(p.category_id)) for p in products]
