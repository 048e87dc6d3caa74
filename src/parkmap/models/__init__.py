"""Data models for layouts, status feeds and render output."""

from parkmap.geometry.walker import Position
from parkmap.models.feature import Layout, SlotFeature
from parkmap.models.geometry import (
    Geometry,
    GeometryKind,
    MultiPolygonGeometry,
    PolygonGeometry,
    UnsupportedGeometry,
    parse_geometry,
)
from parkmap.models.render import Envelope, RenderShape
from parkmap.models.status import SlotStatus, StatusRecord

__all__ = [
    "Envelope",
    "Geometry",
    "GeometryKind",
    "Layout",
    "MultiPolygonGeometry",
    "PolygonGeometry",
    "Position",
    "RenderShape",
    "SlotFeature",
    "SlotStatus",
    "StatusRecord",
    "UnsupportedGeometry",
    "parse_geometry",
]
