"""Lightweight REST client for the tenistas API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


MEDIA_TYPES = {
    ".csv": "text/csv",
    ".json": "application/json",
    ".xml": "application/xml",
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the tenistas REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--import-file", type=Path, help="Upload a CSV, JSON or XML players file")
    parser.add_argument("--list", action="store_true", help="List stored players and exit")
    parser.add_argument("--get", metavar="PLAYER_ID", type=int, help="Fetch a single player and exit")
    parser.add_argument("--export-format", choices=("csv", "json", "xml"), help="Download all players")
    parser.add_argument("--export-path", type=Path, help="Destination path for the export")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list:
            resp = client.get("/players")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return
        if args.get is not None:
            resp = client.get(f"/players/{args.get}")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.get} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return
        if args.export_format:
            resp = client.get("/players/export", params={"format": args.export_format})
            resp.raise_for_status()
            if args.export_path:
                args.export_path.write_text(resp.text, encoding="utf-8")
                print(f"Export saved to {args.export_path}")
            else:
                print(resp.text)
            return
        if args.import_file is None:
            raise SystemExit("one of --import-file, --list, --get or --export-format is required")

        media_type = MEDIA_TYPES.get(args.import_file.suffix.lower(), "application/octet-stream")
        files = {"file": (args.import_file.name, args.import_file.read_bytes(), media_type)}
        resp = client.post("/players/import", files=files)
        if resp.status_code == 400:
            raise SystemExit(resp.json().get("detail", "import failed"))
        resp.raise_for_status()
        report = resp.json()
        print(f"Saved {len(report['saved'])}/{report['total']} players")
        for rejected in report["rejected"]:
            print(f"Rejected {rejected['name']}: {rejected['reason']}")


if __name__ == "__main__":
    main()
