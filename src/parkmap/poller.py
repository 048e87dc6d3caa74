"""Timer-driven status polling.

The poller is an explicit ``asyncio`` task owned by a session. It is
stopped through a cancellation token (an :class:`asyncio.Event`) handed in
by the owner, or by cancelling the task. Each tick produces a complete new
lookup; a failed tick leaves the previous lookup in place.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Mapping

from parkmap.result import FetchResult

_logger = logging.getLogger(__name__)

StatusFetcher = Callable[[], Awaitable[FetchResult[dict[str, str | None]]]]


class StatusPoller:
    """Polls a status fetcher on a fixed interval.

    Parameters
    ----------
    fetch
        Coroutine function returning a fresh status lookup result.
    on_lookup
        Called with every successfully fetched lookup; the receiver swaps it
        in wholesale.
    interval
        Seconds between the end of one tick and the start of the next.
    on_failure
        Optional callback receiving the failure reason of a failed tick.
    """

    def __init__(
        self,
        fetch: StatusFetcher,
        on_lookup: Callable[[Mapping[str, str | None]], None],
        *,
        interval: float,
        on_failure: Callable[[str], None] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._fetch = fetch
        self._on_lookup = on_lookup
        self._on_failure = on_failure
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._token: asyncio.Event | None = None
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> FetchResult[dict[str, str | None]]:
        """Run a single fetch-and-swap cycle."""
        self.ticks += 1
        try:
            result = await self._fetch()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            _logger.warning("Status poll raised unexpectedly", exc_info=True)
            result = FetchResult.failure(str(exc) or type(exc).__name__, exc)

        if result.ok and result.value is not None:
            self._on_lookup(result.value)
        elif self._on_failure is not None:
            self._on_failure(result.reason)
        return result

    async def run(self, token: asyncio.Event) -> None:
        """Poll until *token* is set. The first tick runs immediately."""
        while not token.is_set():
            await self.tick()
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(token.wait(), self._interval)
        _logger.debug("Status poller stopped after %d ticks", self.ticks)

    def start(self, token: asyncio.Event | None = None) -> asyncio.Event:
        """Start the polling task; returns the token that stops it."""
        if self.is_running:
            raise RuntimeError("poller already running")
        self._token = token if token is not None else asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self.run(self._token))
        return self._token

    async def stop(self) -> None:
        """Signal the token, then cancel and await the task."""
        task = self._task
        self._task = None
        if self._token is not None:
            self._token.set()
        if task is None:
            return
        if not task.done():
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
