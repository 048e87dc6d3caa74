"""Layout models: slot features and the feature collection."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError, field_validator

from parkmap.exceptions import ParkmapLayoutError
from parkmap.ingestion.normalize import as_mapping, safe_str
from parkmap.models._base import ParkmapBaseModel
from parkmap.models.geometry import Geometry, parse_geometry

_logger = logging.getLogger(__name__)


class SlotFeature(ParkmapBaseModel):
    """One parking slot's static description.

    Built from a GeoJSON ``Feature``. Missing or malformed ``properties``
    are tolerated and read as ``{slot_id: "", status: None}``.

    Parameters
    ----------
    slot_id : str
        Slot identifier. Uniqueness is not enforced.
    status : str or None
        Fallback status embedded in the layout.
    geometry : Geometry or None
        Tagged geometry variant; ``None`` when the feature has none.
    raw : dict
        The feature object as received.
    """

    slot_id: str = ""
    status: str | None = None
    geometry: Geometry | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @field_validator("geometry", mode="before")
    @classmethod
    def _parse_geometry(cls, value: Any) -> Any:
        return parse_geometry(value)

    @classmethod
    def from_geojson(cls, raw: dict[str, Any]) -> SlotFeature:
        """Build a slot from a GeoJSON ``Feature`` object.

        Identity and fallback status are read from ``properties`` only;
        top-level keys of *raw* are never consulted.
        """
        properties = as_mapping(raw.get("properties"))
        return cls(
            slot_id=safe_str(properties.get("slot_id")) or "",
            status=safe_str(properties.get("status")),
            geometry=raw.get("geometry"),
            raw=raw,
        )


class Layout(ParkmapBaseModel):
    """The hand-authored feature collection, immutable for a session."""

    features: tuple[SlotFeature, ...] = ()
    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_geojson(cls, document: Any) -> Layout:
        """Parse a GeoJSON ``FeatureCollection`` document.

        Non-object entries in ``features`` are skipped.

        Raises
        ------
        ParkmapLayoutError
            If *document* is not an object with a ``features`` array, or a
            feature object cannot be turned into a slot.
        """
        if not isinstance(document, dict):
            raise ParkmapLayoutError(f"layout must be a JSON object, got {type(document).__name__}")
        raw_features = document.get("features")
        if not isinstance(raw_features, list):
            raise ParkmapLayoutError("layout has no 'features' array")

        features: list[SlotFeature] = []
        for index, raw_feature in enumerate(raw_features):
            if not isinstance(raw_feature, dict):
                _logger.debug("Skipping non-object feature at index %d", index)
                continue
            try:
                features.append(SlotFeature.from_geojson(raw_feature))
            except ValidationError as exc:
                raise ParkmapLayoutError(f"feature {index} is malformed: {exc}") from exc
        return cls(features=tuple(features), raw=document)

    def __len__(self) -> int:
        return len(self.features)

    @property
    def is_empty(self) -> bool:
        return not self.features
