"""Derived geometry models: envelope and render shapes."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import model_validator

from parkmap.geometry.walker import Position
from parkmap.models._base import ParkmapBaseModel
from parkmap.models.status import SlotStatus


class Envelope(ParkmapBaseModel):
    """Axis-aligned bounding box in source coordinate space.

    An envelope always contains at least one position; a collection without
    positions has no envelope at all (``None``), never a zero-sized one.
    """

    min_h: float
    max_h: float
    min_v: float
    max_v: float

    @model_validator(mode="after")
    def _check_order(self) -> Envelope:
        if self.min_h > self.max_h or self.min_v > self.max_v:
            raise ValueError(
                f"envelope bounds out of order: h=[{self.min_h}, {self.max_h}] v=[{self.min_v}, {self.max_v}]"
            )
        return self

    @classmethod
    def from_positions(cls, positions: Iterable[Position]) -> Envelope | None:
        """Fold a running min/max over *positions*; ``None`` when there are none."""
        min_h = min_v = float("inf")
        max_h = max_v = float("-inf")
        seen = False
        for h, v in positions:
            seen = True
            if h < min_h:
                min_h = h
            if h > max_h:
                max_h = h
            if v < min_v:
                min_v = v
            if v > max_v:
                max_v = v
        if not seen:
            return None
        return cls(min_h=min_h, max_h=max_h, min_v=min_v, max_v=max_v)

    @property
    def width(self) -> float:
        return self.max_h - self.min_h

    @property
    def height(self) -> float:
        return self.max_v - self.min_v

    def contains(self, position: Position) -> bool:
        h, v = position
        return self.min_h <= h <= self.max_h and self.min_v <= v <= self.max_v


class RenderShape(ParkmapBaseModel):
    """A drawable slot outline in target space.

    Parameters
    ----------
    slot_id : str
        Slot identifier shared by every part of a multipolygon.
    status : str
        Resolved status string (live, embedded, or ``"unknown"``).
    outline : tuple of Position
        Projected outer ring; the last point implicitly connects to the first.
    centroid : Position
        Mean of the projected outline vertices, used as the label anchor.
    """

    slot_id: str
    status: str
    outline: tuple[Position, ...]
    centroid: Position

    @property
    def classification(self) -> SlotStatus:
        return SlotStatus.classify(self.status)
