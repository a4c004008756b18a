"""Command-line interface for managing stored players."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from tenistas.config import AppConfig
from tenistas.models import PlayerRecord
from tenistas.service import PlayerService, build_service
from tenistas.storage import PlayerStorage


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage tennis player records")
    parser.add_argument("--config", type=Path, default=None, help="Load settings from a JSON profile")
    parser.add_argument("--db", default=None, help="SQLite database path (overrides config)")
    parser.add_argument("--cache-size", type=int, default=None, help="Number of players kept in memory")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g., INFO, DEBUG)")

    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser("import", help="Import players from a CSV, JSON or XML file")
    import_cmd.add_argument("source", type=Path)

    export_cmd = commands.add_parser("export", help="Export stored players to a CSV, JSON or XML file")
    export_cmd.add_argument("target", type=Path)
    export_cmd.add_argument(
        "--include-deleted",
        action="store_true",
        help="Also export players that were soft-deleted",
    )

    list_cmd = commands.add_parser("list", help="List stored players")
    list_cmd.add_argument("--include-deleted", action="store_true")

    show_cmd = commands.add_parser("show", help="Show a single player")
    show_cmd.add_argument("player_id", type=int)

    delete_cmd = commands.add_parser("delete", help="Delete a player")
    delete_cmd.add_argument("player_id", type=int)
    return parser


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    base = AppConfig.load(args.config) if args.config else None
    config = AppConfig.from_env(base)
    overrides = {}
    if args.db:
        overrides["database_path"] = args.db
    if args.cache_size is not None:
        overrides["cache_size"] = args.cache_size
    if overrides:
        config = replace(config, **overrides)
    return config


def _describe(player: PlayerRecord) -> str:
    flag = " [deleted]" if player.is_deleted else ""
    return (
        f"{player.id:>4}  {player.name} ({player.country})  "
        f"{player.points} pts  {player.handedness.value}  born {player.birth_date.isoformat()}{flag}"
    )


def _run(args: argparse.Namespace, service: PlayerService, storage: PlayerStorage) -> int:
    if args.command == "import":
        loaded = storage.load_into(service, args.source)
        if loaded.is_err:
            print(loaded.error.message, file=sys.stderr)
            return 1
        report = loaded.value
        print(f"Saved {len(report.saved)}/{report.total} players from {args.source}")
        for player, error in report.rejected[:5]:
            print(f"Rejected {player.name or '<unnamed>'}: {error.message}")
        more = len(report.rejected) - 5
        if more > 0:
            print(f"... +{more} more rejected")
        return 0

    if args.command == "export":
        players = service.find_all(include_deleted=args.include_deleted).unwrap()
        exported = storage.export_file(args.target, players)
        if exported.is_err:
            print(exported.error.message, file=sys.stderr)
            return 1
        print(f"Wrote {len(players)} players to {args.target}")
        return 0

    if args.command == "list":
        for player in service.find_all(include_deleted=args.include_deleted).unwrap():
            print(_describe(player))
        return 0

    found = service.find_by_id(args.player_id)
    if found.is_err:
        print(found.error.message, file=sys.stderr)
        return 1

    if args.command == "show":
        print(_describe(found.value))
        return 0

    deleted = service.delete(found.value)
    if deleted.is_err:
        print(deleted.error.message, file=sys.stderr)
        return 1
    print(f"Deleted player {args.player_id}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    service = build_service(_resolve_config(args))
    return _run(args, service, PlayerStorage())


if __name__ == "__main__":
    sys.exit(main())
