"""Ingestion layer.

Adapters that turn fetched layout and status-feed payloads into typed
models and the slot-id keyed status lookup.
"""

__all__: list[str] = []
