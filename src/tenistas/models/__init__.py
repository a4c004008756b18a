"""Domain models."""

from .player import FEED_HANDEDNESS_CODES, Handedness, PlayerRecord, parse_handedness

__all__ = [
    "FEED_HANDEDNESS_CODES",
    "Handedness",
    "PlayerRecord",
    "parse_handedness",
]
