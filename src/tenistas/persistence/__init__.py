"""Persistence layer for player records."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol

from tenistas.models import PlayerRecord, parse_handedness


logger = logging.getLogger(__name__)


class PlayerRepository(Protocol):
    """Store contract consumed by the service.

    Failures are reported as ``None`` (or an empty list), never raised.
    """

    def create(self, player: PlayerRecord) -> Optional[PlayerRecord]: ...

    def get(self, player_id: int) -> Optional[PlayerRecord]: ...

    def update(self, player: PlayerRecord) -> Optional[PlayerRecord]: ...

    def delete(self, player_id: int, logical: bool = True) -> Optional[PlayerRecord]: ...

    def get_all(self) -> List[PlayerRecord]: ...


class SQLitePlayerRepository:
    """SQLite-backed store for player records."""

    def __init__(self, db_path: Path | str):
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
            self._use_uri = False
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    country TEXT NOT NULL,
                    weight REAL NOT NULL,
                    height REAL NOT NULL,
                    handedness TEXT NOT NULL,
                    points INTEGER NOT NULL,
                    birth_date TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    is_deleted INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            conn.commit()

    def create(self, player: PlayerRecord) -> Optional[PlayerRecord]:
        logger.debug("Inserting player %s", player.name)
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO players (
                        name, country, weight, height, handedness, points,
                        birth_date, created_at, updated_at, is_deleted
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        player.name,
                        player.country,
                        player.weight,
                        player.height,
                        player.handedness.value,
                        player.points,
                        player.birth_date.isoformat(),
                        now,
                        now,
                        int(player.is_deleted),
                    ),
                )
                conn.commit()
                player_id = cursor.lastrowid
        except sqlite3.Error as exc:
            logger.error("Failed to insert player %s: %s", player.name, exc)
            return None
        if player_id is None:  # pragma: no cover
            return None
        return self.get(player_id)

    def get(self, player_id: int) -> Optional[PlayerRecord]:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        except sqlite3.Error as exc:
            logger.error("Failed to load player %s: %s", player_id, exc)
            return None
        if row is None:
            return None
        return self._row_to_player(row)

    def get_all(self) -> List[PlayerRecord]:
        try:
            with self._connect() as conn:
                rows = conn.execute("SELECT * FROM players ORDER BY id").fetchall()
        except sqlite3.Error as exc:
            logger.error("Failed to list players: %s", exc)
            return []
        return [self._row_to_player(row) for row in rows]

    def update(self, player: PlayerRecord) -> Optional[PlayerRecord]:
        logger.debug("Updating player %s", player.id)
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    """
                    UPDATE players
                    SET name = ?,
                        country = ?,
                        weight = ?,
                        height = ?,
                        handedness = ?,
                        points = ?,
                        birth_date = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        player.name,
                        player.country,
                        player.weight,
                        player.height,
                        player.handedness.value,
                        player.points,
                        player.birth_date.isoformat(),
                        now,
                        player.id,
                    ),
                )
                conn.commit()
                changed = cursor.rowcount
        except sqlite3.Error as exc:
            logger.error("Failed to update player %s: %s", player.id, exc)
            return None
        if not changed:
            return None
        return self.get(player.id)

    def delete(self, player_id: int, logical: bool = True) -> Optional[PlayerRecord]:
        """Mark the row deleted (``logical``) or remove it; returns the affected record."""

        logger.debug("Deleting player %s (logical=%s)", player_id, logical)
        existing = self.get(player_id)
        if existing is None:
            return None
        try:
            with self._connect() as conn:
                if logical:
                    conn.execute(
                        "UPDATE players SET is_deleted = 1, updated_at = ? WHERE id = ?",
                        (datetime.now(timezone.utc).isoformat(), player_id),
                    )
                else:
                    conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
                conn.commit()
        except sqlite3.Error as exc:
            logger.error("Failed to delete player %s: %s", player_id, exc)
            return None
        if logical:
            return self.get(player_id)
        return existing

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM players")
            conn.commit()
        logger.info("Removed all stored players")

    def _row_to_player(self, row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            id=row["id"],
            name=row["name"],
            country=row["country"],
            weight=row["weight"],
            height=row["height"],
            handedness=parse_handedness(row["handedness"]),
            points=row["points"],
            birth_date=date.fromisoformat(row["birth_date"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            is_deleted=bool(row["is_deleted"]),
        )


__all__ = ["PlayerRepository", "SQLitePlayerRepository"]
