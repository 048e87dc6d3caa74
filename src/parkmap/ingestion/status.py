"""Live status feed ingestion.

The feed is an unordered JSON array of ``{slot_id, status, last_updated?}``.
:func:`merge_status` folds it into the slot-id keyed lookup consulted at
render time; each poll builds a fresh lookup that replaces the previous one
wholesale.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from parkmap.exceptions import ParkmapFeedError
from parkmap.models.status import StatusRecord

_logger = logging.getLogger(__name__)


def parse_status_feed(payload: Any) -> list[StatusRecord]:
    """Parse a decoded feed payload into status records.

    Entries that are not objects or carry no usable ``slot_id`` are skipped.

    Raises
    ------
    ParkmapFeedError
        If *payload* is not a JSON array.
    """
    if not isinstance(payload, list):
        raise ParkmapFeedError(f"status feed must be a JSON array, got {type(payload).__name__}")

    records: list[StatusRecord] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            _logger.debug("Skipping non-object status entry at index %d", index)
            continue
        try:
            records.append(StatusRecord.model_validate(entry))
        except ValidationError:
            _logger.debug("Skipping status entry without slot_id at index %d", index)
    return records


def merge_status(records: Iterable[StatusRecord]) -> dict[str, str | None]:
    """Build the ``slot_id -> status`` lookup; later records for an id win.

    Values are not validated here.
    """
    lookup: dict[str, str | None] = {}
    for record in records:
        lookup[record.slot_id] = record.status
    return lookup
