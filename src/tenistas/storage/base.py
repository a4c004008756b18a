"""Shared file handling for the player codecs."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Sequence

from tenistas.errors import PlayerExportError, PlayerImportError
from tenistas.models import PlayerRecord
from tenistas.results import Err, Ok, Result


logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Existing targets keep their permissions; new files get the umask default."""

    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def format_number(value: float) -> str:
    """Render integral floats without a trailing ``.0``."""

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class PlayerCodec:
    """Base class: subclasses provide ``parse`` and ``render``.

    Imports are all-or-nothing: a single bad row fails the whole file.
    Exports go through a temporary file that replaces the target on success.
    """

    format_name = ""
    suffix = ""

    def parse(self, text: str) -> Result[List[PlayerRecord], PlayerImportError]:
        raise NotImplementedError

    def render(self, players: Sequence[PlayerRecord]) -> str:
        raise NotImplementedError

    def import_players(self, source: Path | str) -> Result[List[PlayerRecord], PlayerImportError]:
        path = Path(source)
        logger.debug("Importing %s players from %s", self.format_name, path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Unable to read %s: %s", path, exc)
            return Err(PlayerImportError.because(f"cannot read {path}: {exc}"))
        result = self.parse(text)
        if result.is_ok:
            logger.info("Imported %d players from %s", len(result.value), path)
        else:
            logger.warning("Import of %s failed: %s", path, result.error)
        return result

    def export_players(
        self, target: Path | str, players: Sequence[PlayerRecord]
    ) -> Result[None, PlayerExportError]:
        path = Path(target)
        logger.debug("Exporting %d players to %s", len(players), path)
        try:
            payload = self.render(players)
        except (TypeError, ValueError) as exc:
            return Err(PlayerExportError.because(f"cannot serialize players: {exc}"))
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(payload)
            os.chmod(tmp_name, _target_mode(path))
            os.replace(tmp_name, path)
        except OSError as exc:
            logger.warning("Unable to write %s: %s", path, exc)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return Err(PlayerExportError.because(f"cannot write {path}: {exc}"))
        logger.info("Exported %d players to %s", len(players), path)
        return Ok(None)


__all__ = ["PlayerCodec", "format_number"]
