"""Validation gate applied before any player is written."""

from __future__ import annotations

from tenistas.errors import InvalidPlayer
from tenistas.models import PlayerRecord
from tenistas.results import Err, Ok, Result

MIN_MEASURE = 0.0
MAX_MEASURE = 400.0


def _in_range(value: float) -> bool:
    return MIN_MEASURE <= value <= MAX_MEASURE


def validate_player(player: PlayerRecord) -> Result[PlayerRecord, InvalidPlayer]:
    """Check name, country, weight and height in that order.

    The first failing check wins. Handedness and birth date are not checked:
    an unrecognized hand is stored as ``unknown``.
    """

    if not player.name.strip():
        return Err(InvalidPlayer("Player name must not be empty", field="name"))
    if not player.country.strip():
        return Err(
            InvalidPlayer(f"Country of player {player.name} must not be empty", field="country")
        )
    if not _in_range(player.weight):
        return Err(
            InvalidPlayer(
                f"Weight of player {player.name} must be between {MIN_MEASURE:g} and "
                f"{MAX_MEASURE:g}, got {player.weight:g}",
                field="weight",
            )
        )
    if not _in_range(player.height):
        return Err(
            InvalidPlayer(
                f"Height of player {player.name} must be between {MIN_MEASURE:g} and "
                f"{MAX_MEASURE:g}, got {player.height:g}",
                field="height",
            )
        )
    return Ok(player)


class PlayerValidator:
    """Injectable wrapper around :func:`validate_player`."""

    def validate(self, player: PlayerRecord) -> Result[PlayerRecord, InvalidPlayer]:
        return validate_player(player)


__all__ = ["MAX_MEASURE", "MIN_MEASURE", "PlayerValidator", "validate_player"]
