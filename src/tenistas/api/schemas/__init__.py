"""Pydantic models for API I/O."""

from .player import ImportReportResponse, PlayerPayload, PlayerResponse, RejectedPlayerResponse

__all__ = [
    "ImportReportResponse",
    "PlayerPayload",
    "PlayerResponse",
    "RejectedPlayerResponse",
]
