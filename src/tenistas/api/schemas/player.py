from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from tenistas.models import Handedness, PlayerRecord


class PlayerPayload(BaseModel):
    name: str
    country: str
    weight: float
    height: float
    handedness: str = Handedness.UNKNOWN.value
    points: int = Field(0, ge=0)
    birth_date: date

    def to_record(self, player_id: int = 0) -> PlayerRecord:
        return PlayerRecord(id=player_id, **self.model_dump())


class PlayerResponse(BaseModel):
    id: int
    name: str
    country: str
    weight: float
    height: float
    handedness: Handedness
    points: int
    birth_date: date
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_deleted: bool = False

    @classmethod
    def from_record(cls, player: PlayerRecord) -> "PlayerResponse":
        return cls(**player.model_dump())


class RejectedPlayerResponse(BaseModel):
    name: str
    reason: str


class ImportReportResponse(BaseModel):
    total: int
    saved: list[PlayerResponse] = Field(default_factory=list)
    rejected: list[RejectedPlayerResponse] = Field(default_factory=list)
