"""Delimited-text codec for player feeds."""

from __future__ import annotations

import csv
from datetime import date
from io import StringIO
from typing import List, Mapping, Sequence

from pydantic import ValidationError

from tenistas.errors import PlayerImportError
from tenistas.models import FEED_HANDEDNESS_CODES, PlayerRecord, parse_handedness
from tenistas.results import Err, Ok, Result
from tenistas.storage.base import PlayerCodec, format_number


CSV_HEADERS: tuple[str, ...] = (
    "id",
    "nombre",
    "pais",
    "altura",
    "peso",
    "puntos",
    "mano",
    "fecha_nacimiento",
)


def _row_to_player(row: Mapping[str, str | None]) -> PlayerRecord:
    missing = [column for column in CSV_HEADERS if row.get(column) is None]
    if missing:
        raise ValueError(f"missing values for {', '.join(missing)}")
    raw_id = (row["id"] or "").strip()
    return PlayerRecord(
        id=int(raw_id) if raw_id else 0,
        name=(row["nombre"] or "").strip(),
        country=(row["pais"] or "").strip(),
        height=float(row["altura"] or ""),
        weight=float(row["peso"] or ""),
        points=int((row["puntos"] or "").strip()),
        handedness=parse_handedness(row["mano"]),
        birth_date=date.fromisoformat((row["fecha_nacimiento"] or "").strip()),
    )


class CsvPlayerCodec(PlayerCodec):
    """Reads and writes the fixed ``id,nombre,pais,...`` player feed.

    Timestamps and the soft-delete flag are not part of this format.
    """

    format_name = "csv"
    suffix = ".csv"

    def parse(self, text: str) -> Result[List[PlayerRecord], PlayerImportError]:
        if not text.strip():
            return Err(PlayerImportError.because("source is empty"))
        reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))
        header = [name.strip() for name in reader.fieldnames or []]
        absent = [column for column in CSV_HEADERS if column not in header]
        if absent:
            return Err(PlayerImportError.because(f"header is missing columns: {', '.join(absent)}"))
        reader.fieldnames = header

        players: List[PlayerRecord] = []
        for row in reader:
            if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                continue
            try:
                players.append(_row_to_player(row))
            except (ValueError, ValidationError) as exc:
                return Err(PlayerImportError.because(f"invalid row at line {reader.line_num}: {exc}"))
        return Ok(players)

    def render(self, players: Sequence[PlayerRecord]) -> str:
        buffer = StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for player in players:
            writer.writerow([
                player.id,
                player.name,
                player.country,
                format_number(player.height),
                format_number(player.weight),
                player.points,
                FEED_HANDEDNESS_CODES.get(player.handedness, ""),
                player.birth_date.isoformat(),
            ])
        return buffer.getvalue()


__all__ = ["CSV_HEADERS", "CsvPlayerCodec"]
