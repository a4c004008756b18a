"""Player service and wiring helpers."""

from .players import PlayerService
from .wiring import build_service

__all__ = ["PlayerService", "build_service"]
