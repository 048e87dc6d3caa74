"""Client configuration for parkmap."""

from __future__ import annotations

import dataclasses
import os
from typing import Any
from urllib.parse import quote

from parkmap._constants import (
    CANVAS_HEIGHT,
    CANVAS_MARGIN,
    CANVAS_WIDTH,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    LOCATION_HOST_TEMPLATE,
    STYLE_PATH_TEMPLATE,
)
from parkmap.exceptions import ParkmapConfigError


@dataclasses.dataclass(frozen=True)
class Canvas:
    """Fixed drawing surface the layout is projected into.

    Parameters
    ----------
    width : float
        Logical width of the target surface.
    height : float
        Logical height of the target surface.
    margin : float
        Safety margin kept free on every side.
    """

    width: float = CANVAS_WIDTH
    height: float = CANVAS_HEIGHT
    margin: float = CANVAS_MARGIN

    def __post_init__(self) -> None:
        if self.margin < 0:
            raise ParkmapConfigError(f"canvas margin must be >= 0, got {self.margin}")
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ParkmapConfigError(
                f"canvas {self.width}x{self.height} leaves no drawing area inside margin {self.margin}"
            )

    @property
    def inner_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def inner_height(self) -> float:
        return self.height - 2 * self.margin


@dataclasses.dataclass(frozen=True)
class MapServiceConfig:
    """Credentials for the external tile/style service.

    The values are opaque; they are only spliced into request URLs.
    """

    region: str = ""
    map_name: str = ""
    api_key: str = ""

    @property
    def host(self) -> str:
        return LOCATION_HOST_TEMPLATE.format(region=self.region)

    @property
    def style_url(self) -> str:
        """Style descriptor URL with the API key attached."""
        if not self.region or not self.map_name:
            raise ParkmapConfigError("map service region and map name are required for a style URL")
        base = self.host + STYLE_PATH_TEMPLATE.format(map_name=self.map_name)
        return f"{base}?key={quote(self.api_key, safe='')}"


@dataclasses.dataclass(frozen=True)
class ParkmapConfig:
    """Client configuration.

    Parameters
    ----------
    layout_source : str
        Path or HTTP(S) URL of the GeoJSON layout document.
    status_url : str
        Endpoint of the live status feed. Empty disables live status.
    poll_interval : float
        Seconds between status feed polls.
    request_timeout : float
        Total timeout in seconds for each HTTP request. ``0`` disables it.
    canvas : Canvas
        Drawing surface for the schematic projection.
    map_service : MapServiceConfig
        External tile/style service credentials.
    """

    layout_source: str = "parking_slots.geojson"
    status_url: str = ""
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    canvas: Canvas = dataclasses.field(default_factory=Canvas)
    map_service: MapServiceConfig = dataclasses.field(default_factory=MapServiceConfig)

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ParkmapConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout < 0:
            raise ParkmapConfigError(f"request_timeout must be >= 0, got {self.request_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ParkmapConfig:
        """Create configuration from ``PARKMAP_*`` environment variables.

        Explicit keyword arguments override environment values.

        Returns
        -------
        ParkmapConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_MAP_SERVICE = {
            "PARKMAP_LOCATION_REGION": "region",
            "PARKMAP_LOCATION_MAP_NAME": "map_name",
            "PARKMAP_LOCATION_API_KEY": "api_key",
        }
        service_kwargs: dict[str, str] = {}
        for env_key, field_name in _ENV_MAP_SERVICE.items():
            val = env.get(env_key)
            if val is not None:
                service_kwargs[field_name] = val

        service_overrides = overrides.pop("map_service", None)
        if isinstance(service_overrides, dict):
            service_kwargs.update(service_overrides)
        elif isinstance(service_overrides, MapServiceConfig):
            service_kwargs = dataclasses.asdict(service_overrides)

        _ENV_CANVAS = {
            "PARKMAP_CANVAS_WIDTH": "width",
            "PARKMAP_CANVAS_HEIGHT": "height",
            "PARKMAP_CANVAS_MARGIN": "margin",
        }
        canvas_kwargs: dict[str, float] = {}
        for env_key, field_name in _ENV_CANVAS.items():
            val = env.get(env_key)
            if val is not None:
                canvas_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs: dict[str, Any] = {
            "map_service": MapServiceConfig(**service_kwargs),
        }
        canvas_override = overrides.pop("canvas", None)
        if isinstance(canvas_override, Canvas):
            config_kwargs["canvas"] = canvas_override
        else:
            if isinstance(canvas_override, dict):
                canvas_kwargs.update(canvas_override)
            config_kwargs["canvas"] = Canvas(**canvas_kwargs)

        layout_env = env.get("PARKMAP_LAYOUT_SOURCE")
        if layout_env is not None:
            config_kwargs["layout_source"] = layout_env
        status_env = env.get("PARKMAP_STATUS_URL")
        if status_env is not None:
            config_kwargs["status_url"] = status_env

        # numeric settings, handled separately
        interval_env = env.get("PARKMAP_POLL_INTERVAL")
        if interval_env is not None and "poll_interval" not in overrides:
            config_kwargs["poll_interval"] = _env_float("PARKMAP_POLL_INTERVAL", interval_env)
        timeout_env = env.get("PARKMAP_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("PARKMAP_REQUEST_TIMEOUT", timeout_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ParkmapConfigError(f"{name} must be a number, got {value!r}") from exc
