"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from shop.domain.exceptions import AlreadyExistsError
from shop.domain.model.product import Product
from shop.domain.model.value_objects import Money
from shop.domain.repository.product_repository import ProductRepository
from shop.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._file.load():
            if raw["name"].lower() == name.strip().lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def list_by_category(self, category_id: int) -> list[Product]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["category_id"] == category_id
        ]

    def save(self, product: Product) -> None:
        with self._file.locked():
            records = self._file.load()
            for raw in records:
                if raw["id"] != product.id and raw["name"].lower() == product.name.lower():
                    raise AlreadyExistsError(f"Product '{product.name}' already exists")
            if product.id is None:
                product.id = JsonFile.next_id(records)
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    product.stock = raw["stock"]
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))
            self._file.persist(records)

    def delete(self, product_id: int) -> None:
        with self._file.locked():
            records = self._file.load()
            self._file.persist([r for r in records if r["id"] != product_id])

    def compare_and_set_stock(self, product_id: int, expected: int, new: int) -> bool:
        if new < 0:
            return False
        with self._file.locked():
            records = self._file.load()
            for raw in records:
                if raw["id"] == product_id:
                    if raw["stock"] != expected:
                        return False
                    raw["stock"] = new
                    self._file.persist(records)
                    return True
            return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "stock": product.stock,
            "category_id": product.category_id,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            price=Money(Decimal(raw["price"])),
            stock=raw["stock"],
            category_id=raw["category_id"],
        )
