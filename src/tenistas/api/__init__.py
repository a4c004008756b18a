"""REST API over the player service."""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from tenistas.api.schemas import (
    ImportReportResponse,
    PlayerPayload,
    PlayerResponse,
    RejectedPlayerResponse,
)
from tenistas.config import AppConfig
from tenistas.errors import (
    InvalidPlayer,
    PlayerAlreadyExists,
    PlayerDoesNotExist,
    PlayerError,
    PlayerExportError,
    PlayerImportError,
)
from tenistas.service import PlayerService, build_service
from tenistas.storage import PlayerStorage, save_all


logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
    "xml": "application/xml",
}


def _raise_for(error: PlayerError) -> NoReturn:
    if isinstance(error, InvalidPlayer):
        raise HTTPException(status_code=422, detail={"field": error.field, "message": error.message})
    if isinstance(error, PlayerAlreadyExists):
        raise HTTPException(status_code=409, detail=error.message)
    if isinstance(error, PlayerDoesNotExist):
        raise HTTPException(status_code=404, detail=error.message)
    if isinstance(error, PlayerImportError):
        raise HTTPException(status_code=400, detail=error.message)
    raise HTTPException(status_code=500, detail=error.message)


def create_app(
    config: Optional[AppConfig] = None,
    *,
    service: Optional[PlayerService] = None,
    storage: Optional[PlayerStorage] = None,
) -> FastAPI:
    app = FastAPI(title="tenistas")
    service = service or build_service(config)
    storage = storage or PlayerStorage()
    app.state.player_service = service
    app.state.player_storage = storage

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=list[PlayerResponse])
    def list_players(include_deleted: bool = Query(False)) -> list[PlayerResponse]:
        players = service.find_all(include_deleted=include_deleted).unwrap()
        return [PlayerResponse.from_record(player) for player in players]

    @app.get("/players/export")
    def export_players(fmt: str = Query("json", alias="format")) -> Response:
        codec = storage.codec_for(fmt)
        if codec is None:
            raise HTTPException(status_code=400, detail=f"Unsupported format {fmt!r}")
        players = service.find_all().unwrap()
        try:
            content = codec.render(players)
        except (TypeError, ValueError) as exc:
            logger.warning("Export to %s failed: %s", codec.format_name, exc)
            _raise_for(PlayerExportError.because(f"cannot serialize players: {exc}"))
        return Response(
            content=content,
            media_type=MEDIA_TYPES[codec.format_name],
            headers={"Content-Disposition": f'attachment; filename="players{codec.suffix}"'},
        )

    @app.post("/players/import", response_model=ImportReportResponse)
    async def import_players(file: UploadFile = File(...)) -> ImportReportResponse:
        codec = storage.codec_for(file.filename or "")
        if codec is None:
            raise HTTPException(status_code=400, detail=f"Unsupported file type: {file.filename}")
        raw = await file.read()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise HTTPException(status_code=400, detail="Upload must be UTF-8 encoded") from None
        parsed = codec.parse(text)
        if parsed.is_err:
            _raise_for(parsed.error)
        report = save_all(service, parsed.value)
        logger.info("Imported %s: %d saved, %d rejected", file.filename, len(report.saved), len(report.rejected))
        return ImportReportResponse(
            total=report.total,
            saved=[PlayerResponse.from_record(player) for player in report.saved],
            rejected=[
                RejectedPlayerResponse(name=player.name, reason=error.message)
                for player, error in report.rejected
            ],
        )

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    def get_player(player_id: int) -> PlayerResponse:
        result = service.find_by_id(player_id)
        if result.is_err:
            _raise_for(result.error)
        return PlayerResponse.from_record(result.value)

    @app.post("/players", response_model=PlayerResponse, status_code=201)
    def create_player(payload: PlayerPayload) -> PlayerResponse:
        result = service.save(payload.to_record())
        if result.is_err:
            _raise_for(result.error)
        return PlayerResponse.from_record(result.value)

    @app.put("/players/{player_id}", response_model=PlayerResponse)
    def update_player(player_id: int, payload: PlayerPayload) -> PlayerResponse:
        result = service.update(payload.to_record(player_id))
        if result.is_err:
            _raise_for(result.error)
        return PlayerResponse.from_record(result.value)

    @app.delete("/players/{player_id}", status_code=204)
    def delete_player(player_id: int) -> Response:
        existing = service.find_by_id(player_id)
        if existing.is_err:
            _raise_for(existing.error)
        result = service.delete(existing.value)
        if result.is_err:
            _raise_for(result.error)
        return Response(status_code=204)

    return app


__all__ = ["create_app"]
