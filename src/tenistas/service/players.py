"""Cache-aside orchestration of the validator, cache and player store."""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from tenistas.cache import BoundedCache
from tenistas.errors import PlayerAlreadyExists, PlayerDoesNotExist, PlayerError
from tenistas.models import PlayerRecord
from tenistas.persistence import PlayerRepository
from tenistas.results import Err, Ok, Result
from tenistas.validation import PlayerValidator


logger = logging.getLogger(__name__)


class PlayerService:
    """Keeps a bounded cache consistent with the authoritative store.

    The store is the source of truth. Every mutation is validated first and
    then invalidates or repopulates the cache entry for the player's key.
    Operations hold an internal lock so the existence check and the write
    that follows it cannot interleave with another caller.
    """

    def __init__(
        self,
        cache: BoundedCache[int, PlayerRecord],
        repository: PlayerRepository,
        validator: Optional[PlayerValidator] = None,
        *,
        logical_delete: bool = True,
    ):
        self._cache = cache
        self._repository = repository
        self._validator = validator or PlayerValidator()
        self._logical_delete = logical_delete
        self._lock = threading.RLock()

    @property
    def cache(self) -> BoundedCache[int, PlayerRecord]:
        return self._cache

    def save(self, player: PlayerRecord) -> Result[PlayerRecord, PlayerError]:
        logger.debug("Saving player %s (id=%s)", player.name, player.id)
        validated = self._validator.validate(player)
        if validated.is_err:
            logger.warning("Rejected player %s: %s", player.name, validated.error)
            return validated
        with self._lock:
            if self._cache.get(player.id) is not None or self._repository.get(player.id) is not None:
                logger.warning("Player with id %s already exists", player.id)
                return Err(PlayerAlreadyExists(f"Player with id {player.id} already exists"))
            created = self._repository.create(player.model_copy(update={"is_deleted": False}))
            if created is None:
                logger.error("Store did not persist player %s", player.name)
                return Err(PlayerAlreadyExists(f"Player {player.name} could not be stored"))
            self._cache.put(created.id, created)
        return Ok(created)

    def find_by_id(self, player_id: int) -> Result[PlayerRecord, PlayerError]:
        logger.debug("Looking up player %s", player_id)
        with self._lock:
            cached = self._cached(player_id)
            if cached is not None:
                return Ok(cached)
            stored = self._active(player_id)
            if stored is None:
                logger.warning("Player %s not found", player_id)
                return Err(PlayerDoesNotExist(f"Player with id {player_id} does not exist"))
            self._cache.put(stored.id, stored)
        return Ok(stored)

    def update(self, player: PlayerRecord) -> Result[PlayerRecord, PlayerError]:
        logger.debug("Updating player %s", player.id)
        validated = self._validator.validate(player)
        if validated.is_err:
            logger.warning("Rejected update of player %s: %s", player.id, validated.error)
            return validated
        with self._lock:
            if self._cached(player.id) is None and self._active(player.id) is None:
                logger.warning("Cannot update player %s: not found", player.id)
                return Err(PlayerDoesNotExist(f"Player with id {player.id} does not exist"))
            updated = self._repository.update(player)
            if updated is None:
                logger.error("Store did not update player %s", player.id)
                return Err(PlayerDoesNotExist(f"Player with id {player.id} could not be updated"))
            self._cache.remove(updated.id)
            self._cache.put(updated.id, updated)
        return Ok(updated)

    def delete(self, player: PlayerRecord) -> Result[None, PlayerError]:
        logger.debug("Deleting player %s", player.id)
        with self._lock:
            if self._cached(player.id) is None and self._active(player.id) is None:
                logger.warning("Cannot delete player %s: not found", player.id)
                return Err(PlayerDoesNotExist(f"Player with id {player.id} does not exist"))
            if self._repository.delete(player.id, self._logical_delete) is None:
                logger.error("Store did not delete player %s", player.id)
                return Err(PlayerDoesNotExist(f"Player with id {player.id} could not be deleted"))
            self._cache.remove(player.id)
        return Ok(None)

    def find_all(self, *, include_deleted: bool = False) -> Result[List[PlayerRecord], PlayerError]:
        logger.debug("Listing players (include_deleted=%s)", include_deleted)
        players = self._repository.get_all()
        if not include_deleted:
            players = [player for player in players if not player.is_deleted]
        return Ok(players)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _cached(self, player_id: int) -> Optional[PlayerRecord]:
        cached = self._cache.get(player_id)
        if cached is not None and cached.is_deleted:
            self._cache.remove(player_id)
            return None
        return cached

    def _active(self, player_id: int) -> Optional[PlayerRecord]:
        stored = self._repository.get(player_id)
        if stored is None or stored.is_deleted:
            return None
        return stored
