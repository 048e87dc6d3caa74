"""Rendering session: owns layout, projector and the current status lookup."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from parkmap.client import ParkmapClient
from parkmap.config import ParkmapConfig
from parkmap.geometry.projection import Projector, build_projector, compute_envelope
from parkmap.models.feature import Layout
from parkmap.models.render import Envelope, RenderShape
from parkmap.poller import StatusPoller
from parkmap.render.assemble import StatusLookup, assemble_all
from parkmap.render.mapdata import annotate_collection
from parkmap.render.svg import render_placeholder, render_svg
from parkmap.render.table import SlotRow, dashboard_rows

_logger = logging.getLogger(__name__)

_EMPTY_LOOKUP: StatusLookup = MappingProxyType({})


class RenderPhase(StrEnum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class RenderState:
    """What the display surface should show right now."""

    phase: RenderPhase
    shapes: tuple[RenderShape, ...] = ()
    error: str = ""
    status_error: str = ""

    @property
    def is_ready(self) -> bool:
        return self.phase is RenderPhase.READY


class LotSession:
    """One rendering session over a parking layout.

    The layout is loaded once on entry and the envelope/projector pair is
    built from it. The status lookup is replaced wholesale on every poll
    tick; render output is recomputed from (layout, projector, lookup) on
    each call and never cached or patched.

    Usage::

        async with LotSession(config) as session:
            state = session.render()
    """

    def __init__(
        self,
        config: ParkmapConfig,
        *,
        client: ParkmapClient | None = None,
        poll: bool = True,
        on_update: Callable[[LotSession], None] | None = None,
    ) -> None:
        self._config = config
        self._client = client if client is not None else ParkmapClient(config)
        self._poll = poll
        self._on_update = on_update
        self._layout: Layout | None = None
        self._envelope: Envelope | None = None
        self._projector: Projector | None = None
        self._lookup: StatusLookup = _EMPTY_LOOKUP
        self._layout_error = ""
        self._status_error = ""
        self._poller: StatusPoller | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LotSession:
        await self._client.__aenter__()
        try:
            await self.reload_layout()
            if self._poll and self._config.status_url:
                self._poller = StatusPoller(
                    self._client.fetch_status,
                    self.set_status_lookup,
                    interval=self._config.poll_interval,
                    on_failure=self._on_status_failure,
                )
                self._poller.start()
            else:
                await self.refresh_status()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Cancel any pending poll and release the client."""
        poller = self._poller
        self._poller = None
        if poller is not None:
            await poller.stop()
        await self._client.__aexit__(None, None, None)

    # ------------------------------------------------------------------
    # State updates
    # ------------------------------------------------------------------

    async def reload_layout(self) -> None:
        """(Re)load the layout and rebuild the envelope and projector."""
        result = await self._client.load_layout()
        if not result.ok or result.value is None:
            self._layout_error = result.reason
            self._notify()
            return
        self._layout_error = ""
        self.set_layout(result.value)

    def set_layout(self, layout: Layout) -> None:
        self._layout = layout
        self._envelope = compute_envelope(layout.features)
        self._projector = (
            build_projector(self._envelope, self._config.canvas) if self._envelope is not None else None
        )
        if self._envelope is None:
            _logger.debug("Layout has no positions; rendering stays in loading state")
        self._notify()

    async def refresh_status(self) -> None:
        """Fetch the status feed once, outside the poll loop."""
        result = await self._client.fetch_status()
        if result.ok and result.value is not None:
            self.set_status_lookup(result.value)
        else:
            self._on_status_failure(result.reason)

    def set_status_lookup(self, lookup: Mapping[str, str | None]) -> None:
        """Swap in a complete new lookup. The projector is untouched."""
        self._lookup = MappingProxyType(dict(lookup))
        self._status_error = ""
        self._notify()

    def _on_status_failure(self, reason: str) -> None:
        self._status_error = reason
        self._notify()

    def _notify(self) -> None:
        if self._on_update is None:
            return
        try:
            self._on_update(self)
        except Exception:
            _logger.debug("on_update callback failed", exc_info=True)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def layout(self) -> Layout | None:
        return self._layout

    @property
    def envelope(self) -> Envelope | None:
        return self._envelope

    @property
    def projector(self) -> Projector | None:
        return self._projector

    @property
    def status_lookup(self) -> StatusLookup:
        return self._lookup

    @property
    def is_polling(self) -> bool:
        return self._poller is not None and self._poller.is_running

    def render(self) -> RenderState:
        """Current render state; shapes are recomputed on every call."""
        if self._layout_error:
            return RenderState(phase=RenderPhase.ERROR, error=self._layout_error)
        if self._layout is None or self._projector is None:
            return RenderState(phase=RenderPhase.LOADING, status_error=self._status_error)
        shapes = assemble_all(self._layout.features, self._lookup, self._projector)
        return RenderState(phase=RenderPhase.READY, shapes=tuple(shapes), status_error=self._status_error)

    def svg(self) -> str:
        state = self.render()
        if state.phase is RenderPhase.ERROR:
            return render_placeholder(f"Layout error: {state.error}", self._config.canvas)
        if state.phase is RenderPhase.LOADING:
            return render_placeholder("Loading layout…", self._config.canvas)
        return render_svg(state.shapes, self._config.canvas)

    def annotated_collection(self) -> dict[str, Any] | None:
        if self._layout is None:
            return None
        return annotate_collection(self._layout, self._lookup)

    def table_rows(self) -> list[SlotRow]:
        if self._layout is None:
            return []
        return dashboard_rows(self._layout, self._lookup)
