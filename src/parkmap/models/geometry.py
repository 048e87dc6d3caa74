"""Geometry models.

A feature's geometry is an explicit tagged union discriminated by
:class:`GeometryKind`. Each variant normalizes itself into a list of
ring-groups through :meth:`Geometry.polygons`; the raw coordinate tree is
kept untouched so the walker can tolerate malformed nesting.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import Field

from parkmap.geometry.walker import Position, flatten, outer_ring, polygon_groups
from parkmap.ingestion.normalize import as_mapping
from parkmap.models._base import ParkmapBaseModel


class GeometryKind(StrEnum):
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    UNSUPPORTED = "Unsupported"


class Geometry(ParkmapBaseModel):
    """Base for every geometry variant.

    Parameters
    ----------
    type_name : str
        The GeoJSON ``type`` as received (kept for unsupported kinds).
    coordinates : Any
        Raw nested coordinate tree.
    """

    kind: ClassVar[GeometryKind] = GeometryKind.UNSUPPORTED

    type_name: str = ""
    coordinates: Any = Field(default=None)

    def polygons(self) -> list[Any]:
        """Ring-groups of this geometry (one per polygon)."""
        return polygon_groups(self.kind.value, self.coordinates)

    def outer_rings(self) -> list[list[Position]]:
        """Outer ring positions of every ring-group, in order."""
        return [outer_ring(group) for group in self.polygons()]

    def positions(self) -> list[Position]:
        """Every position reachable in the coordinate tree, holes included."""
        return flatten(self.coordinates)


class PolygonGeometry(Geometry):
    """Ordered rings; ring 0 is the outer boundary, the rest are holes."""

    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON


class MultiPolygonGeometry(Geometry):
    """Ordered sequence of polygons."""

    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POLYGON


class UnsupportedGeometry(Geometry):
    """Points, lines and anything else not meant for area rendering."""


_VARIANTS: dict[str, type[Geometry]] = {
    GeometryKind.POLYGON.value: PolygonGeometry,
    GeometryKind.MULTI_POLYGON.value: MultiPolygonGeometry,
}


def parse_geometry(raw: Any) -> Geometry | None:
    """Build the geometry variant for a GeoJSON geometry object.

    Returns ``None`` when *raw* is absent or not an object.
    """
    if isinstance(raw, Geometry):
        return raw
    data = as_mapping(raw)
    if not data:
        return None
    type_name = data.get("type")
    type_name = type_name if isinstance(type_name, str) else ""
    variant = _VARIANTS.get(type_name, UnsupportedGeometry)
    return variant(type_name=type_name, coordinates=data.get("coordinates"))
