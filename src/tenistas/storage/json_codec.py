"""Structured-text (JSON) codec: an array of player objects."""

from __future__ import annotations

from typing import List, Sequence

from pydantic import TypeAdapter, ValidationError

from tenistas.errors import PlayerImportError
from tenistas.models import PlayerRecord
from tenistas.results import Err, Ok, Result
from tenistas.storage.base import PlayerCodec


_PLAYERS_ADAPTER: TypeAdapter[List[PlayerRecord]] = TypeAdapter(List[PlayerRecord])


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if not location:
        return first.get("msg", str(exc))
    return f"entry {location}: {first.get('msg', '')}"


class JsonPlayerCodec(PlayerCodec):
    format_name = "json"
    suffix = ".json"

    def __init__(self, *, indent: int = 2):
        self.indent = indent

    def parse(self, text: str) -> Result[List[PlayerRecord], PlayerImportError]:
        if not text.strip():
            return Err(PlayerImportError.because("source is empty"))
        try:
            players = _PLAYERS_ADAPTER.validate_json(text)
        except ValidationError as exc:
            return Err(PlayerImportError.because(_describe(exc)))
        return Ok(players)

    def render(self, players: Sequence[PlayerRecord]) -> str:
        return _PLAYERS_ADAPTER.dump_json(list(players), indent=self.indent).decode("utf-8")


__all__ = ["JsonPlayerCodec"]
