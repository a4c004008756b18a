"""Runtime settings for the player store and cache."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

CACHE_SIZE_ENV = "TENISTAS_CACHE_SIZE"
DB_PATH_ENV = "TENISTAS_DB_PATH"
LOGICAL_DELETE_ENV = "TENISTAS_LOGICAL_DELETE"
REMOVE_DATA_ENV = "TENISTAS_REMOVE_DATA"

_CACHE_SIZE_DEFAULT = 10
_DB_PATH_DEFAULT = "tenistas.sqlite"

_TRUE_TOKENS = {"1", "true", "t", "yes", "y", "on"}
_FALSE_TOKENS = {"0", "false", "f", "no", "n", "off"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return _parse_flag(name, raw, default)


def _parse_flag(name: str, raw: object, default: bool) -> bool:
    text = str(raw).strip().lower()
    if text in _TRUE_TOKENS:
        return True
    if text in _FALSE_TOKENS:
        return False
    logger.warning("Invalid flag for %s: %s; using default %s", name, raw, default)
    return default


@dataclass(frozen=True)
class AppConfig:
    cache_size: int = _CACHE_SIZE_DEFAULT
    database_path: str = _DB_PATH_DEFAULT
    logical_delete: bool = True
    database_remove_data: bool = False

    @classmethod
    def from_env(cls, base: Optional["AppConfig"] = None) -> "AppConfig":
        """Overlay ``TENISTAS_*`` environment variables on ``base`` (or defaults)."""

        base = base or cls()
        return replace(
            base,
            cache_size=_env_int(CACHE_SIZE_ENV, base.cache_size),
            database_path=os.getenv(DB_PATH_ENV) or base.database_path,
            logical_delete=_env_flag(LOGICAL_DELETE_ENV, base.logical_delete),
            database_remove_data=_env_flag(REMOVE_DATA_ENV, base.database_remove_data),
        )

    @classmethod
    def load(cls, path: Path) -> "AppConfig":
        data = json.loads(path.read_text(encoding="utf-8"))
        defaults = cls()
        return cls(
            cache_size=int(data.get("cache_size", defaults.cache_size)),
            database_path=str(data.get("database_path", defaults.database_path)),
            logical_delete=_parse_flag(
                "logical_delete",
                data.get("logical_delete", defaults.logical_delete),
                defaults.logical_delete,
            ),
            database_remove_data=_parse_flag(
                "database_remove_data",
                data.get("database_remove_data", defaults.database_remove_data),
                defaults.database_remove_data,
            ),
        )

    def save(self, path: Path) -> None:
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
