"""Tabular dashboard: one row per slot feature."""

from __future__ import annotations

from dataclasses import dataclass

from parkmap.models.feature import Layout
from parkmap.models.status import SlotStatus
from parkmap.render.assemble import StatusLookup, resolve_status


@dataclass(frozen=True, slots=True)
class SlotRow:
    slot_id: str
    status: str

    @property
    def classification(self) -> SlotStatus:
        return SlotStatus.classify(self.status)


def dashboard_rows(layout: Layout, lookup: StatusLookup) -> list[SlotRow]:
    """Rows in layout order, with the same status precedence as the schematic."""
    return [SlotRow(slot_id=f.slot_id, status=resolve_status(f, lookup)) for f in layout.features]


def occupancy_counts(rows: list[SlotRow]) -> dict[SlotStatus, int]:
    counts = dict.fromkeys(SlotStatus, 0)
    for row in rows:
        counts[row.classification] += 1
    return counts


def format_table(rows: list[SlotRow]) -> str:
    """Plain-text two-column table."""
    header = ("Slot ID", "Status")
    width = max([len(header[0]), *(len(row.slot_id) for row in rows)])
    lines = [f"{header[0]:<{width}}  {header[1]}", f"{'-' * width}  {'-' * len(header[1])}"]
    lines.extend(f"{row.slot_id:<{width}}  {row.status}" for row in rows)
    return "\n".join(lines) + "\n"
