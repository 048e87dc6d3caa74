"""Data for the external interactive map widget.

The widget itself (tiles, styling engine, popups) is not part of this
library. It consumes a feature collection annotated with the resolved
status per feature, a set of style layers that colour slots with the same
three-way classification as the schematic, and a request-transform hook
that signs tile-service requests with the API key.
"""

from __future__ import annotations

import copy
from typing import Any
from urllib.parse import quote

from parkmap._constants import FILL_DEFAULT, FILL_OCCUPIED, FILL_VACANT, LABEL_FONT_SIZE
from parkmap.config import MapServiceConfig
from parkmap.models.feature import Layout
from parkmap.models.status import SlotStatus
from parkmap.render.assemble import StatusLookup, resolve_status

SOURCE_ID = "slots"

#: Fill opacity used by the map widget (slightly lower than the schematic's).
MAP_FILL_OPACITY = 0.52


def annotate_collection(layout: Layout, lookup: StatusLookup) -> dict[str, Any]:
    """Feature collection with ``slot_id`` and resolved ``status`` on every feature.

    Works on a deep copy; neither *layout* nor its raw document is mutated.
    """
    features: list[dict[str, Any]] = []
    for feature in layout.features:
        annotated = copy.deepcopy(feature.raw) if feature.raw else {"type": "Feature"}
        properties = annotated.get("properties")
        if not isinstance(properties, dict):
            properties = {}
        properties["slot_id"] = feature.slot_id
        properties["status"] = resolve_status(feature, lookup)
        annotated["properties"] = properties
        if "geometry" not in annotated and feature.geometry is not None:
            annotated["geometry"] = {
                "type": feature.geometry.type_name,
                "coordinates": copy.deepcopy(feature.geometry.coordinates),
            }
        features.append(annotated)

    document = {key: copy.deepcopy(value) for key, value in layout.raw.items() if key != "features"}
    document.setdefault("type", "FeatureCollection")
    document["features"] = features
    return document


def status_color_expression() -> list[Any]:
    """Style expression mapping ``status`` to fill colour, with a default arm."""
    return [
        "match",
        ["get", "status"],
        SlotStatus.OCCUPIED.value,
        FILL_OCCUPIED,
        SlotStatus.VACANT.value,
        FILL_VACANT,
        FILL_DEFAULT,
    ]


def slot_layers(source_id: str = SOURCE_ID) -> list[dict[str, Any]]:
    """Fill, outline and label layers for the annotated collection."""
    return [
        {
            "id": f"{source_id}-fill",
            "type": "fill",
            "source": source_id,
            "paint": {"fill-color": status_color_expression(), "fill-opacity": MAP_FILL_OPACITY},
        },
        {
            "id": f"{source_id}-outline",
            "type": "line",
            "source": source_id,
            "paint": {"line-color": "#2f2f2f", "line-width": 1},
        },
        {
            "id": f"{source_id}-labels",
            "type": "symbol",
            "source": source_id,
            "layout": {
                "text-field": [
                    "format",
                    ["get", "slot_id"],
                    {"font-scale": 1.0},
                    "\n",
                    ["get", "status"],
                    {"font-scale": 0.85},
                ],
                "text-size": LABEL_FONT_SIZE,
                "text-allow-overlap": True,
                "symbol-z-order": "source",
            },
            "paint": {"text-color": "#111", "text-halo-color": "#ffffff", "text-halo-width": 1.2},
        },
    ]


def transform_request(url: str, service: MapServiceConfig) -> dict[str, str]:
    """Append ``key=`` to every request aimed at the tile service.

    URLs for other hosts, or already carrying a key, pass through unchanged.
    """
    if not service.region or not url.startswith(service.host):
        return {"url": url}
    if "key=" in url:
        return {"url": url}
    sep = "&" if "?" in url else "?"
    return {"url": f"{url}{sep}key={quote(service.api_key, safe='')}"}
