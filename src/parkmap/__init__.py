"""parkmap - Parking-slot occupancy schematics from GeoJSON layouts and a live status feed."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("parkmap")
except PackageNotFoundError:
    __version__ = "0+local"

from parkmap.client import ParkmapClient
from parkmap.config import Canvas, MapServiceConfig, ParkmapConfig
from parkmap.exceptions import (
    ParkmapConfigError,
    ParkmapError,
    ParkmapFeedError,
    ParkmapLayoutError,
    ParkmapTransportError,
)
from parkmap.geometry.projection import Projector, build_projector, compute_envelope
from parkmap.geometry.walker import flatten
from parkmap.ingestion.status import merge_status, parse_status_feed
from parkmap.models import (
    Envelope,
    GeometryKind,
    Layout,
    RenderShape,
    SlotFeature,
    SlotStatus,
    StatusRecord,
)
from parkmap.poller import StatusPoller
from parkmap.render.assemble import assemble, assemble_all, resolve_status
from parkmap.result import FetchResult
from parkmap.session import LotSession, RenderPhase, RenderState

__all__ = [
    "__version__",
    "Canvas",
    "Envelope",
    "FetchResult",
    "GeometryKind",
    "Layout",
    "LotSession",
    "MapServiceConfig",
    "ParkmapClient",
    "ParkmapConfig",
    "ParkmapConfigError",
    "ParkmapError",
    "ParkmapFeedError",
    "ParkmapLayoutError",
    "ParkmapTransportError",
    "Projector",
    "RenderPhase",
    "RenderShape",
    "RenderState",
    "SlotFeature",
    "SlotStatus",
    "StatusPoller",
    "StatusRecord",
    "assemble",
    "assemble_all",
    "build_projector",
    "compute_envelope",
    "flatten",
    "merge_status",
    "parse_status_feed",
    "resolve_status",
]
