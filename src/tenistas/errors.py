"""Error kinds surfaced by the player service and the storage codecs."""

from __future__ import annotations

from dataclasses import dataclass

IMPORT_ERROR_PREFIX = "Error importing players"
EXPORT_ERROR_PREFIX = "Error exporting players"


@dataclass(frozen=True)
class PlayerError:
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class InvalidPlayer(PlayerError):
    field: str = ""


@dataclass(frozen=True)
class PlayerAlreadyExists(PlayerError):
    pass


@dataclass(frozen=True)
class PlayerDoesNotExist(PlayerError):
    pass


@dataclass(frozen=True)
class PlayerImportError(PlayerError):
    @classmethod
    def because(cls, detail: str) -> "PlayerImportError":
        return cls(f"{IMPORT_ERROR_PREFIX}: {detail}")


@dataclass(frozen=True)
class PlayerExportError(PlayerError):
    @classmethod
    def because(cls, detail: str) -> "PlayerExportError":
        return cls(f"{EXPORT_ERROR_PREFIX}: {detail}")


__all__ = [
    "EXPORT_ERROR_PREFIX",
    "IMPORT_ERROR_PREFIX",
    "InvalidPlayer",
    "PlayerAlreadyExists",
    "PlayerDoesNotExist",
    "PlayerError",
    "PlayerExportError",
    "PlayerImportError",
]
