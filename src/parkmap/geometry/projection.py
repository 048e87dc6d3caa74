"""Envelope computation and the affine source-to-canvas projector.

This is a schematic, not a geodetic map: longitude and latitude are scaled
linearly and independently into the canvas, with the vertical axis flipped
so that increasing latitude renders toward the top.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence

from parkmap._constants import EPSILON
from parkmap.config import Canvas
from parkmap.geometry.walker import Position
from parkmap.models.feature import SlotFeature
from parkmap.models.render import Envelope


def iter_positions(features: Iterable[SlotFeature]) -> Iterable[Position]:
    """Every position of every feature geometry, in collection order."""
    for feature in features:
        if feature.geometry is None:
            continue
        yield from feature.geometry.positions()


def compute_envelope(features: Iterable[SlotFeature]) -> Envelope | None:
    """Bounding envelope over all positions of *features*.

    Returns ``None`` for an empty collection or one without any position;
    callers must then show a loading/empty state instead of projecting.
    """
    return Envelope.from_positions(iter_positions(features))


@dataclasses.dataclass(frozen=True, slots=True)
class Projector:
    """Stateless affine mapping from source space into a canvas.

    Rebuild it when the envelope changes (a new layout); status changes
    never require a new projector.
    """

    envelope: Envelope
    canvas: Canvas

    def project_h(self, h: float) -> float:
        env = self.envelope
        span = env.max_h - env.min_h
        if span <= 0:
            return self.canvas.margin
        return self.canvas.margin + (h - env.min_h) / max(EPSILON, span) * self.canvas.inner_width

    def project_v(self, v: float) -> float:
        env = self.envelope
        span = env.max_v - env.min_v
        if span <= 0:
            return self.canvas.margin
        return self.canvas.margin + (1 - (v - env.min_v) / max(EPSILON, span)) * self.canvas.inner_height

    def __call__(self, position: Position) -> Position:
        h, v = position
        return (self.project_h(h), self.project_v(v))

    def project_ring(self, ring: Sequence[Position]) -> tuple[Position, ...]:
        """Project every vertex of *ring*, preserving order."""
        return tuple(self(position) for position in ring)


def build_projector(envelope: Envelope, canvas: Canvas | None = None) -> Projector:
    """Build the projector for *envelope* into *canvas* (default 1200x520, margin 20)."""
    return Projector(envelope=envelope, canvas=canvas if canvas is not None else Canvas())
