"""Runtime settings, read from the environment.

``SHOP_DATA_DIR``              directory holding the JSON files
``SHOP_LOG_LEVEL``             logging level name (default WARNING)
``SHOP_RESERVATION_ATTEMPTS``  compare-and-swap attempts per stock reservation
``SHOP_BCRYPT_ROUNDS``         bcrypt cost factor for new passwords
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from shop.application.credentials import DEFAULT_BCRYPT_ROUNDS
from shop.domain.service.inventory_ledger import DEFAULT_MAX_ATTEMPTS

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    reservation_attempts: int = DEFAULT_MAX_ATTEMPTS
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            data_dir=Path(os.getenv("SHOP_DATA_DIR", str(DEFAULT_DATA_DIR))),
            log_level=os.getenv("SHOP_LOG_LEVEL", "WARNING").upper(),
            reservation_attempts=_int_env("SHOP_RESERVATION_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
            bcrypt_rounds=_int_env("SHOP_BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS),
        )
