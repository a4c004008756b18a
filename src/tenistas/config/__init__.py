"""Configuration helpers for the player store and cache."""

from .settings import (
    CACHE_SIZE_ENV,
    DB_PATH_ENV,
    LOGICAL_DELETE_ENV,
    REMOVE_DATA_ENV,
    AppConfig,
)

__all__ = [
    "AppConfig",
    "CACHE_SIZE_ENV",
    "DB_PATH_ENV",
    "LOGICAL_DELETE_ENV",
    "REMOVE_DATA_ENV",
]
