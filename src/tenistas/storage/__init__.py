"""Import/export of player files in CSV, JSON and XML."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from tenistas.errors import PlayerError, PlayerExportError, PlayerImportError
from tenistas.models import PlayerRecord
from tenistas.results import Err, Ok, Result
from tenistas.storage.base import PlayerCodec
from tenistas.storage.csv_codec import CsvPlayerCodec
from tenistas.storage.json_codec import JsonPlayerCodec
from tenistas.storage.xml_codec import XmlPlayerCodec

if TYPE_CHECKING:
    from tenistas.service import PlayerService


logger = logging.getLogger(__name__)


@dataclass
class BulkLoadReport:
    saved: List[PlayerRecord] = field(default_factory=list)
    rejected: List[Tuple[PlayerRecord, PlayerError]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.saved) + len(self.rejected)


class PlayerStorage:
    """Front door for the three codecs, picking one by name or file suffix."""

    def __init__(
        self,
        csv: Optional[CsvPlayerCodec] = None,
        json: Optional[JsonPlayerCodec] = None,
        xml: Optional[XmlPlayerCodec] = None,
    ):
        self.csv = csv or CsvPlayerCodec()
        self.json = json or JsonPlayerCodec()
        self.xml = xml or XmlPlayerCodec()

    def codec_for(self, name_or_path: str | Path) -> Optional[PlayerCodec]:
        key = str(name_or_path).lower()
        if "." in key or "/" in key:
            key = Path(key).suffix.lstrip(".")
        return {"csv": self.csv, "json": self.json, "xml": self.xml}.get(key)

    def import_from_csv(self, source: Path | str) -> Result[List[PlayerRecord], PlayerImportError]:
        return self.csv.import_players(source)

    def import_from_json(self, source: Path | str) -> Result[List[PlayerRecord], PlayerImportError]:
        return self.json.import_players(source)

    def import_from_xml(self, source: Path | str) -> Result[List[PlayerRecord], PlayerImportError]:
        return self.xml.import_players(source)

    def export_to_csv(
        self, target: Path | str, players: Sequence[PlayerRecord]
    ) -> Result[None, PlayerExportError]:
        return self.csv.export_players(target, players)

    def export_to_json(
        self, target: Path | str, players: Sequence[PlayerRecord]
    ) -> Result[None, PlayerExportError]:
        return self.json.export_players(target, players)

    def export_to_xml(
        self, target: Path | str, players: Sequence[PlayerRecord]
    ) -> Result[None, PlayerExportError]:
        return self.xml.export_players(target, players)

    def import_file(self, source: Path | str) -> Result[List[PlayerRecord], PlayerImportError]:
        codec = self.codec_for(Path(source))
        if codec is None:
            return Err(PlayerImportError.because(f"unsupported file type: {source}"))
        return codec.import_players(source)

    def export_file(
        self, target: Path | str, players: Sequence[PlayerRecord]
    ) -> Result[None, PlayerExportError]:
        codec = self.codec_for(Path(target))
        if codec is None:
            return Err(PlayerExportError.because(f"unsupported file type: {target}"))
        return codec.export_players(target, players)

    def load_into(
        self, service: "PlayerService", source: Path | str
    ) -> Result[BulkLoadReport, PlayerImportError]:
        """Import ``source`` and save every record through ``service``.

        A record the service rejects is reported and skipped; it does not stop
        the remaining records from being saved.
        """

        imported = self.import_file(source)
        if imported.is_err:
            return imported
        return Ok(save_all(service, imported.value))


def save_all(service: "PlayerService", players: Sequence[PlayerRecord]) -> BulkLoadReport:
    report = BulkLoadReport()
    for player in players:
        outcome = service.save(player)
        if outcome.is_ok:
            report.saved.append(outcome.value)
        else:
            report.rejected.append((player, outcome.error))
    if report.rejected:
        logger.warning(
            "Saved %d of %d imported players; %d rejected",
            len(report.saved),
            report.total,
            len(report.rejected),
        )
    else:
        logger.info("Saved %d imported players", len(report.saved))
    return report


__all__ = [
    "BulkLoadReport",
    "CsvPlayerCodec",
    "JsonPlayerCodec",
    "PlayerCodec",
    "PlayerStorage",
    "XmlPlayerCodec",
    "save_all",
]
