"""Shape assembly.

Turns one slot feature plus the current status lookup into drawable
:class:`~parkmap.models.render.RenderShape` records.

Two simplifications are deliberate:

* only the outer ring of each polygon is drawn; holes are not subtracted
  from the fill;
* the label anchor is the mean of the projected outline vertices, not an
  area-weighted centroid. For concave outlines it can fall outside the
  shape.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from parkmap._constants import STATUS_UNKNOWN
from parkmap.geometry.projection import Projector
from parkmap.geometry.walker import Position
from parkmap.models.feature import SlotFeature
from parkmap.models.render import RenderShape
from parkmap.models.status import SlotStatus

StatusLookup = Mapping[str, str | None]


def resolve_status(feature: SlotFeature, lookup: StatusLookup) -> str:
    """Live status, else the embedded status, else ``"unknown"``.

    Empty strings fall through to the next source.
    """
    return lookup.get(feature.slot_id) or feature.status or STATUS_UNKNOWN


def classify(status: str | None) -> SlotStatus:
    return SlotStatus.classify(status)


def vertex_centroid(points: Sequence[Position]) -> Position:
    """Arithmetic mean of *points* (must be non-empty)."""
    count = len(points)
    return (
        sum(x for x, _ in points) / count,
        sum(y for _, y in points) / count,
    )


def assemble(feature: SlotFeature, lookup: StatusLookup, projector: Projector) -> list[RenderShape]:
    """Render shapes for one feature, one per ring-group with a non-empty outer ring."""
    geometry = feature.geometry
    if geometry is None:
        return []
    status = resolve_status(feature, lookup)

    shapes: list[RenderShape] = []
    for ring in geometry.outer_rings():
        if not ring:
            continue
        outline = projector.project_ring(ring)
        shapes.append(
            RenderShape(
                slot_id=feature.slot_id,
                status=status,
                outline=outline,
                centroid=vertex_centroid(outline),
            )
        )
    return shapes


def assemble_all(
    features: Iterable[SlotFeature],
    lookup: StatusLookup,
    projector: Projector,
) -> list[RenderShape]:
    """Render shapes for every feature, in collection order."""
    shapes: list[RenderShape] = []
    for feature in features:
        shapes.extend(assemble(feature, lookup, projector))
    return shapes
