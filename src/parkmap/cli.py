"""Command line entry point.

Renders the current lot once (or on every poll with ``--watch``) as an SVG
schematic, a text table, or a status-annotated GeoJSON collection.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path

from parkmap._redact import redact_for_log
from parkmap.config import ParkmapConfig
from parkmap.exceptions import ParkmapConfigError
from parkmap.render.table import format_table
from parkmap.session import LotSession, RenderPhase

_logger = logging.getLogger("parkmap.cli")

_FORMATS = ("svg", "table", "geojson")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="parkmap", description=__doc__.splitlines()[0])
    parser.add_argument("format", choices=_FORMATS, help="Output format")
    parser.add_argument("--layout", help="Layout GeoJSON path or URL (env: PARKMAP_LAYOUT_SOURCE)")
    parser.add_argument("--status-url", help="Live status feed URL (env: PARKMAP_STATUS_URL)")
    parser.add_argument("-o", "--output", type=Path, help="Write to this file instead of stdout")
    parser.add_argument("--watch", action="store_true", help="Keep polling and re-render on each update")
    parser.add_argument("--interval", type=float, help="Poll interval in seconds (env: PARKMAP_POLL_INTERVAL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _render(session: LotSession, fmt: str) -> str:
    if fmt == "svg":
        return session.svg()
    if fmt == "table":
        return format_table(session.table_rows())
    collection = session.annotated_collection()
    return json.dumps(collection if collection is not None else {}, indent=2) + "\n"


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    output.write_text(text, encoding="utf-8")


async def _run(args: argparse.Namespace, config: ParkmapConfig) -> int:
    if not args.watch:
        async with LotSession(config, poll=False) as session:
            state = session.render()
            if state.phase is RenderPhase.ERROR:
                _logger.error("Layout error: %s", state.error)
                return 1
            _emit(_render(session, args.format), args.output)
            return 0

    def _on_update(session: LotSession) -> None:
        if session.render().phase is RenderPhase.READY:
            _emit(_render(session, args.format), args.output)

    async with LotSession(config, on_update=_on_update) as session:
        if session.render().phase is RenderPhase.ERROR:
            return 1
        # runs until interrupted; leaving the block stops the poller
        await asyncio.Event().wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.layout:
        overrides["layout_source"] = args.layout
    if args.status_url:
        overrides["status_url"] = args.status_url
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    try:
        config = ParkmapConfig.from_env(**overrides)
    except ParkmapConfigError as exc:
        _logger.error("%s", exc)
        return 2
    _logger.debug("Configuration: %s", redact_for_log(dataclasses.asdict(config)))

    try:
        return asyncio.run(_run(args, config))
    except KeyboardInterrupt:
        return 0
