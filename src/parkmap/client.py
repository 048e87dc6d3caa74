"""High-level async client for the layout document and status feed."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiohttp

from parkmap._redact import redact_url
from parkmap._transport import HttpTransport, Transport
from parkmap.config import ParkmapConfig
from parkmap.exceptions import ParkmapError, ParkmapLayoutError
from parkmap.ingestion.status import merge_status, parse_status_feed
from parkmap.models.feature import Layout
from parkmap.result import FetchResult

_logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_json_file(path: Path) -> Any:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


class ParkmapClient:
    """Async client fetching the static layout and the live status feed.

    Both fetches return a :class:`~parkmap.result.FetchResult`; transport and
    parse failures are logged and reported, never raised.

    Usage::

        async with ParkmapClient(config) as client:
            layout = await client.load_layout()
            status = await client.fetch_status()
    """

    def __init__(
        self,
        config: ParkmapConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ParkmapClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise ParkmapError("Client not initialized. Use 'async with ParkmapClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Fetches
    # ------------------------------------------------------------------

    async def _fetch_layout_document(self, source: str) -> Any:
        if _is_url(source):
            return await self._require_transport().get_json(source)
        try:
            return await asyncio.to_thread(_read_json_file, Path(source))
        except OSError as exc:
            raise ParkmapLayoutError(f"Failed to read layout {source}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ParkmapLayoutError(f"Layout {source} is not valid JSON: {exc}") from exc

    async def load_layout(self, source: str | None = None) -> FetchResult[Layout]:
        """Load and parse the layout document (path or HTTP(S) URL)."""
        source = source or self._config.layout_source
        try:
            document = await self._fetch_layout_document(source)
            layout = Layout.from_geojson(document)
        except ParkmapError as exc:
            _logger.warning("Layout load failed: %s", exc)
            return FetchResult.failure(str(exc), exc)
        _logger.debug("Loaded %d features from %s", len(layout), redact_url(source))
        return FetchResult.success(layout)

    async def fetch_status(self) -> FetchResult[dict[str, str | None]]:
        """Fetch the live feed and merge it into a fresh status lookup.

        With no ``status_url`` configured the lookup is empty and the result
        is still successful: live status is optional.
        """
        url = self._config.status_url
        if not url:
            return FetchResult.success({})
        try:
            payload = await self._require_transport().get_json(url)
            records = parse_status_feed(payload)
        except ParkmapError as exc:
            _logger.warning("Live status fetch failed; using fallback status: %s", exc)
            return FetchResult.failure(str(exc), exc)
        return FetchResult.success(merge_status(records))
