"""Build a ready-to-use service from configuration."""

from __future__ import annotations

import logging
from typing import Optional

from tenistas.cache import BoundedCache
from tenistas.config import AppConfig
from tenistas.models import PlayerRecord
from tenistas.persistence import SQLitePlayerRepository
from tenistas.service.players import PlayerService
from tenistas.validation import PlayerValidator


logger = logging.getLogger(__name__)


def build_service(
    config: Optional[AppConfig] = None,
    *,
    repository: Optional[SQLitePlayerRepository] = None,
) -> PlayerService:
    config = config or AppConfig.from_env()
    if repository is None:
        repository = SQLitePlayerRepository(config.database_path)
        if config.database_remove_data:
            repository.clear()
    cache: BoundedCache[int, PlayerRecord] = BoundedCache(config.cache_size)
    logger.info(
        "Player service ready (db=%s, cache_size=%d, logical_delete=%s)",
        config.database_path,
        config.cache_size,
        config.logical_delete,
    )
    return PlayerService(
        cache,
        repository,
        PlayerValidator(),
        logical_delete=config.logical_delete,
    )
