"""Canonical player model shared across the service, store and codecs."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Handedness(str, Enum):
    RIGHT_HANDED = "right-handed"
    LEFT_HANDED = "left-handed"
    AMBIDEXTROUS = "ambidextrous"
    UNKNOWN = "unknown"


# Delimited feeds use their own vocabulary for the dominant hand.
FEED_HANDEDNESS_CODES: dict[Handedness, str] = {
    Handedness.RIGHT_HANDED: "DIESTRO",
    Handedness.LEFT_HANDED: "ZURDO",
    Handedness.AMBIDEXTROUS: "AMBIDIESTRO",
}


def _build_handedness_lookup() -> dict[str, Handedness]:
    lookup: dict[str, Handedness] = {}
    for hand in Handedness:
        lookup[hand.value.upper()] = hand
        lookup[hand.name] = hand
    for hand, code in FEED_HANDEDNESS_CODES.items():
        lookup[code] = hand
    lookup["RIGHTHANDED"] = Handedness.RIGHT_HANDED
    lookup["LEFTHANDED"] = Handedness.LEFT_HANDED
    return lookup


_HANDEDNESS_LOOKUP = _build_handedness_lookup()


def parse_handedness(token: object) -> Handedness:
    """Map any token to a handedness; unrecognized input becomes ``UNKNOWN``."""

    if isinstance(token, Handedness):
        return token
    if not isinstance(token, str):
        return Handedness.UNKNOWN
    return _HANDEDNESS_LOOKUP.get(token.strip().upper(), Handedness.UNKNOWN)


class PlayerRecord(BaseModel):
    """A player profile. ``id`` stays 0 until the store assigns one."""

    id: int = 0
    name: str
    country: str
    weight: float
    height: float
    handedness: Handedness = Handedness.UNKNOWN
    points: int = Field(0, ge=0)
    birth_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_deleted: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("handedness", mode="before")
    @classmethod
    def _coerce_handedness(cls, value: object) -> Handedness:
        return parse_handedness(value)
