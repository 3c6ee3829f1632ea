"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from pathlib import Path

from shop.domain.exceptions import AlreadyExistsError
from shop.domain.model.user import Role, User
from shop.domain.repository.user_repository import UserRepository
from shop.infrastructure.persistence.json_file import JsonFile


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, user_id: int) -> User | None:
        for raw in self._file.load():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_by_username(self, username: str) -> User | None:
        for raw in self._file.load():
            if raw["username"] == username:
                return self._to_domain(raw)
        return None

    def save(self, user: User) -> None:
        with self._file.locked():
            records = self._file.load()
            for raw in records:
                if raw["id"] != user.id and raw["username"] == user.username:
                    raise AlreadyExistsError(f"Username '{user.username}' already exists")
            if user.id is None:
                user.id = JsonFile.next_id(records)
            for i, raw in enumerate(records):
                if raw["id"] == user.id:
                    records[i] = self._to_raw(user)
                    break
            else:
                records.append(self._to_raw(user))
            self._file.persist(records)

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "username": user.username,
            "password_hash": user.password_hash,
            "email": user.email,
            "role": user.role.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            username=raw["username"],
            password_hash=raw["password_hash"],
            email=raw.get("email", ""),
            role=Role(raw["role"]),
        )
