"""HTTP transport for layout documents and the status feed."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from parkmap._constants import USER_AGENT
from parkmap._redact import redact_url
from parkmap.exceptions import ParkmapTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface.

    Tests pass doubles implementing this protocol; production code uses
    :class:`HttpTransport`.
    """

    async def get_json(self, url: str) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed JSON fetcher."""

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float = 0.0,
    ) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout > 0 else None

    async def get_json(self, url: str) -> Any:
        """GET *url* and decode the body as JSON.

        Raises
        ------
        ParkmapTransportError
            On network failure, timeout, non-200 status or invalid JSON.
        """
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        safe_url = redact_url(url)
        _logger.debug("GET %s", safe_url)

        try:
            kwargs: dict[str, Any] = {"headers": headers}
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            async with self._http.get(url, **kwargs) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise ParkmapTransportError(
                        f"HTTP {resp.status} from {safe_url}: {text[:200]}",
                        status_code=resp.status,
                        url=safe_url,
                    )
        except ParkmapTransportError:
            raise
        except TimeoutError as exc:
            raise ParkmapTransportError(f"Request to {safe_url} timed out", url=safe_url) from exc
        except aiohttp.ClientError as exc:
            raise ParkmapTransportError(f"Request to {safe_url} failed: {exc}", url=safe_url) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParkmapTransportError(
                f"Invalid JSON from {safe_url}: {text[:200]}",
                status_code=200,
                url=safe_url,
            ) from exc
