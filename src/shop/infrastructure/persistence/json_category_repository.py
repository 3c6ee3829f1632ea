"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from pathlib import Path

from shop.domain.exceptions import AlreadyExistsError
from shop.domain.model.category import Category
from shop.domain.repository.category_repository import CategoryRepository
from shop.infrastructure.persistence.json_file import JsonFile


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CategoryRepository interface -----------------------------------------

    def get_by_id(self, category_id: int) -> Category | None:
        for raw in self._file.load():
            if raw["id"] == category_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Category | None:
        for raw in self._file.load():
            if raw["name"].lower() == name.strip().lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Category]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, category: Category) -> None:
        with self._file.locked():
            records = self._file.load()
            for raw in records:
                if raw["id"] != category.id and raw["name"].lower() == category.name.lower():
                    raise AlreadyExistsError(f"Category '{category.name}' already exists")
            if category.id is None:
                category.id = JsonFile.next_id(records)
            for i, raw in enumerate(records):
                if raw["id"] == category.id:
                    records[i] = self._to_raw(category)
                    break
            else:
                records.append(self._to_raw(category))
            self._file.persist(records)

    def delete(self, category_id: int) -> None:
        with self._file.locked():
            records = self._file.load()
            self._file.persist([r for r in records if r["id"] != category_id])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(category: Category) -> dict:
        return {
            "id": category.id,
            "name": category.name,
            "description": category.description,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
        )
