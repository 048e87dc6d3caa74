"""Shared layout fixtures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from parkmap.exceptions import ParkmapTransportError


def _square(h0: float, v0: float, size: float = 2.0) -> list[list[float]]:
    return [[h0, v0], [h0, v0 + size], [h0 + size, v0 + size], [h0 + size, v0]]


def _polygon_feature(slot_id: str | None, ring: list[list[float]], **properties: Any) -> dict[str, Any]:
    props: dict[str, Any] = dict(properties)
    if slot_id is not None:
        props["slot_id"] = slot_id
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [ring]},
        "properties": props,
    }


@pytest.fixture
def square() -> Callable[..., list[list[float]]]:
    """Factory for a square ring ``[[h0, v0], [h0, v0+s], [h0+s, v0+s], [h0+s, v0]]``."""
    return _square


@pytest.fixture
def polygon_feature() -> Callable[..., dict[str, Any]]:
    """Factory for a single-ring Polygon GeoJSON feature."""
    return _polygon_feature


@pytest.fixture
def layout_document() -> dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "name": "lot-a",
        "features": [
            _polygon_feature("A1", _square(101.0, 4.0, 1.0)),
            _polygon_feature("A2", _square(102.0, 4.0, 1.0), status="vacant"),
            {
                "type": "Feature",
                "geometry": {
                    "type": "MultiPolygon",
                    "coordinates": [[_square(103.0, 4.0, 1.0)], [_square(103.0, 6.0, 1.0)]],
                },
                "properties": {"slot_id": "B1"},
            },
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [101.5, 5.5]},
                "properties": {"slot_id": "entrance"},
            },
        ],
    }


@dataclass
class FakeBackend:
    """Transport double serving a layout URL and a status feed URL."""

    layout: Any = None
    feeds: list[Any] = field(default_factory=list)
    calls: dict[str, int] = field(default_factory=dict)

    LAYOUT_URL = "https://lot.example.com/parking_slots.geojson"
    STATUS_URL = "https://api.example.com/status"

    async def get_json(self, url: str) -> Any:
        self.calls[url] = self.calls.get(url, 0) + 1
        if url == self.LAYOUT_URL:
            if isinstance(self.layout, Exception):
                raise self.layout
            return self.layout
        if url == self.STATUS_URL:
            # replay feeds in order, repeating the last one
            index = min(self.calls[url], len(self.feeds)) - 1
            payload = self.feeds[index] if self.feeds else []
            if isinstance(payload, Exception):
                raise payload
            return payload
        raise ParkmapTransportError(f"HTTP 404 from {url}", status_code=404, url=url)


@pytest.fixture
def backend(layout_document) -> FakeBackend:
    return FakeBackend(layout=layout_document)
