"""Markup (XML) codec: one ``<player>`` element per record."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import date, datetime
from typing import List, Optional, Sequence

from pydantic import ValidationError

from tenistas.errors import PlayerImportError
from tenistas.models import PlayerRecord, parse_handedness
from tenistas.results import Err, Ok, Result
from tenistas.storage.base import PlayerCodec, format_number


ROOT_TAG = "players"
PLAYER_TAG = "player"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters XML 1.0 cannot carry, even as character references.
_ILLEGAL_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _text(element: ET.Element, tag: str, *, required: bool = True) -> Optional[str]:
    child = element.find(tag)
    if child is None:
        if required:
            raise ValueError(f"missing <{tag}>")
        return None
    return (child.text or "").strip()


def _timestamp(element: ET.Element, tag: str) -> Optional[datetime]:
    value = _text(element, tag, required=False)
    return datetime.fromisoformat(value) if value else None


def _element_to_player(element: ET.Element) -> PlayerRecord:
    raw_id = (element.get("id") or "").strip()
    deleted = (_text(element, "is_deleted", required=False) or "false").lower()
    return PlayerRecord(
        id=int(raw_id) if raw_id else 0,
        name=_text(element, "name") or "",
        country=_text(element, "country") or "",
        weight=float(_text(element, "weight") or ""),
        height=float(_text(element, "height") or ""),
        handedness=parse_handedness(_text(element, "handedness", required=False)),
        points=int(_text(element, "points") or ""),
        birth_date=date.fromisoformat(_text(element, "birth_date") or ""),
        created_at=_timestamp(element, "created_at"),
        updated_at=_timestamp(element, "updated_at"),
        is_deleted=deleted in {"true", "1", "yes"},
    )


def _player_to_element(player: PlayerRecord) -> ET.Element:
    element = ET.Element(PLAYER_TAG, {"id": str(player.id)})
    fields = (
        ("name", player.name),
        ("country", player.country),
        ("weight", format_number(player.weight)),
        ("height", format_number(player.height)),
        ("handedness", player.handedness.value),
        ("points", str(player.points)),
        ("birth_date", player.birth_date.isoformat()),
        ("created_at", player.created_at.isoformat() if player.created_at else ""),
        ("updated_at", player.updated_at.isoformat() if player.updated_at else ""),
        ("is_deleted", "true" if player.is_deleted else "false"),
    )
    for tag, value in fields:
        if _ILLEGAL_XML_CHARS.search(value):
            raise ValueError(f"player {player.id} has a character not allowed in XML in <{tag}>")
        ET.SubElement(element, tag).text = value
    return element


class XmlPlayerCodec(PlayerCodec):
    format_name = "xml"
    suffix = ".xml"

    def parse(self, text: str) -> Result[List[PlayerRecord], PlayerImportError]:
        if not text.strip():
            return Err(PlayerImportError.because("source is empty"))
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            return Err(PlayerImportError.because(f"malformed document: {exc}"))
        if root.tag != ROOT_TAG:
            return Err(PlayerImportError.because(f"expected <{ROOT_TAG}> root, found <{root.tag}>"))

        players: List[PlayerRecord] = []
        for index, element in enumerate(root.findall(PLAYER_TAG), start=1):
            try:
                players.append(_element_to_player(element))
            except (ValueError, ValidationError) as exc:
                return Err(PlayerImportError.because(f"invalid <{PLAYER_TAG}> #{index}: {exc}"))
        return Ok(players)

    def render(self, players: Sequence[PlayerRecord]) -> str:
        root = ET.Element(ROOT_TAG)
        for player in players:
            root.append(_player_to_element(player))
        ET.indent(root)
        return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


__all__ = ["XmlPlayerCodec"]
