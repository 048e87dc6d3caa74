"""Base model shared by every parkmap model.

Models are frozen: layout-derived values are immutable for the session and
render output is recomputed rather than mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ParkmapBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
