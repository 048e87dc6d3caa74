"""Slot status models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import field_validator

from parkmap._constants import FILL_DEFAULT, FILL_OCCUPIED, FILL_VACANT
from parkmap.ingestion.normalize import safe_str
from parkmap.models._base import ParkmapBaseModel


class SlotStatus(StrEnum):
    """Three-way classification driving slot colouring.

    Any value without a mapped member resolves to ``UNKNOWN`` instead of
    raising ``ValueError``.
    """

    OCCUPIED = "occupied"
    VACANT = "vacant"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> SlotStatus:
        return cls.UNKNOWN

    @classmethod
    def classify(cls, status: str | None) -> SlotStatus:
        """Total mapping from any status string to a classification."""
        return cls(status)

    @property
    def fill(self) -> str:
        if self is SlotStatus.OCCUPIED:
            return FILL_OCCUPIED
        if self is SlotStatus.VACANT:
            return FILL_VACANT
        return FILL_DEFAULT


class StatusRecord(ParkmapBaseModel):
    """One entry of the live status feed.

    Parameters
    ----------
    slot_id : str
        Slot identifier the record applies to.
    status : str or None
        Reported status. Not validated here; classification happens at
        render time.
    last_updated : str or None
        Feed-provided update stamp, passed through untouched.
    """

    slot_id: str
    status: str | None = None
    last_updated: str | None = None

    @field_validator("slot_id", mode="before")
    @classmethod
    def _coerce_slot_id(cls, value: object) -> object:
        text = safe_str(value)
        return text if text is not None else value

    @field_validator("status", "last_updated", mode="before")
    @classmethod
    def _coerce_optional_str(cls, value: object) -> str | None:
        return safe_str(value)
