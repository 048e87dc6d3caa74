"""Coordinate tree walking.

GeoJSON coordinate arrays nest to a depth that depends on the geometry
type (ring, polygon, multipolygon). :func:`flatten` collects every
position regardless of depth; :func:`polygon_groups` is the small
per-variant adapter that normalizes a geometry into a list of
ring-groups (one per polygon).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from parkmap.ingestion.normalize import is_number

Position = tuple[float, float]
"""A ``(horizontal, vertical)`` pair in source (lon, lat) or target (x, y) space."""


def is_position(node: Any) -> bool:
    """Return True when the first two elements of *node* are both real numbers.

    Extra elements (altitude, measure) are allowed and ignored.
    """
    if not _is_branch(node) or len(node) < 2:
        return False
    return is_number(node[0]) and is_number(node[1])


_EXHAUSTED = object()


def _is_branch(node: Any) -> bool:
    return isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray))


def flatten(tree: Any) -> list[Position]:
    """Collect every position of an arbitrarily nested coordinate tree.

    Depth-first, first-encountered-first-emitted. ``None`` yields an empty
    list. Malformed nodes never raise: anything that is not a position is
    traversed as a sequence, and scalars or mappings contribute nothing.

    The walk uses an explicit stack so nesting depth is not bounded by the
    interpreter's recursion limit.
    """
    out: list[Position] = []
    if tree is None:
        return out
    stack: list[Iterator[Any]] = [iter((tree,))]
    while stack:
        node = next(stack[-1], _EXHAUSTED)
        if node is _EXHAUSTED:
            stack.pop()
            continue
        if is_position(node):
            out.append((float(node[0]), float(node[1])))
        elif _is_branch(node):
            stack.append(iter(node))
        # scalars, strings, mappings: nothing collectible
    return out


def polygon_groups(kind: str, coordinates: Any) -> list[Any]:
    """Normalize a geometry's coordinates into a list of ring-groups.

    ``Polygon`` contributes its own coordinate tree as a single group,
    ``MultiPolygon`` contributes one group per contained polygon. Any other
    kind contributes nothing.
    """
    if not _is_branch(coordinates) or not coordinates:
        return []
    if kind == "Polygon":
        return [coordinates]
    if kind == "MultiPolygon":
        return list(coordinates)
    return []


def outer_ring(group: Any) -> list[Position]:
    """Positions of ring 0 of a ring-group; holes are not returned."""
    if not _is_branch(group) or not group:
        return []
    return flatten(group[0])
