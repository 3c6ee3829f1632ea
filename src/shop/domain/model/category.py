"""Category entity. Products point at a category by id; a category owns nothing."""

from __future__ import annotations

from dataclasses import dataclass

from shop.domain.exceptions import ValidationError


@dataclass
class Category:

    id: int | None
    name: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Category name is required")
        self.name = self.name.strip()
