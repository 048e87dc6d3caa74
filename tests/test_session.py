from __future__ import annotations

import asyncio

import pytest

from parkmap.client import ParkmapClient
from parkmap.config import ParkmapConfig
from parkmap.exceptions import ParkmapTransportError
from parkmap.session import LotSession, RenderPhase


def _session(backend, *, status: bool = True, poll: bool = False, **kwargs) -> LotSession:
    config = ParkmapConfig(
        layout_source=backend.LAYOUT_URL,
        status_url=backend.STATUS_URL if status else "",
        poll_interval=kwargs.pop("poll_interval", 60.0),
    )
    client = ParkmapClient(config, transport=backend)
    return LotSession(config, client=client, poll=poll, **kwargs)


@pytest.mark.asyncio
async def test_ready_state_with_live_status(backend) -> None:
    backend.feeds = [[{"slot_id": "A1", "status": "occupied"}, {"slot_id": "B1", "status": "vacant"}]]

    async with _session(backend) as session:
        state = session.render()

    assert state.phase is RenderPhase.READY
    assert [(s.slot_id, s.status) for s in state.shapes] == [
        ("A1", "occupied"),
        ("A2", "vacant"),
        ("B1", "vacant"),
        ("B1", "vacant"),
    ]


@pytest.mark.asyncio
async def test_status_failure_degrades_to_fallbacks(backend) -> None:
    backend.feeds = [ParkmapTransportError("connection refused")]

    async with _session(backend) as session:
        state = session.render()

    assert state.phase is RenderPhase.READY
    assert state.status_error == "connection refused"
    assert [s.status for s in state.shapes] == ["unknown", "vacant", "unknown", "unknown"]


@pytest.mark.asyncio
async def test_layout_failure_is_error_state(backend) -> None:
    backend.layout = ParkmapTransportError("HTTP 404 from layout", status_code=404)

    async with _session(backend) as session:
        state = session.render()
        svg = session.svg()

    assert state.phase is RenderPhase.ERROR
    assert "HTTP 404" in state.error
    assert state.shapes == ()
    assert "Layout error" in svg


@pytest.mark.asyncio
async def test_empty_layout_is_loading_state(backend) -> None:
    backend.layout = {"type": "FeatureCollection", "features": []}

    async with _session(backend) as session:
        state = session.render()
        svg = session.svg()

    assert state.phase is RenderPhase.LOADING
    assert session.envelope is None
    assert session.projector is None
    assert "Loading layout" in svg


@pytest.mark.asyncio
async def test_status_swap_keeps_projector(backend) -> None:
    async with _session(backend, status=False) as session:
        projector = session.projector
        before = session.render()
        session.set_status_lookup({"A1": "occupied"})
        after = session.render()

        assert session.projector is projector

    assert before.shapes[0].status == "unknown"
    assert after.shapes[0].status == "occupied"
    assert before.shapes[0].outline == after.shapes[0].outline


@pytest.mark.asyncio
async def test_lookup_is_replaced_wholesale(backend) -> None:
    async with _session(backend, status=False) as session:
        session.set_status_lookup({"A1": "occupied", "B1": "occupied"})
        session.set_status_lookup({"B1": "vacant"})

        assert dict(session.status_lookup) == {"B1": "vacant"}
        assert session.render().shapes[0].status == "unknown"


@pytest.mark.asyncio
async def test_polling_updates_and_stops_on_exit(backend) -> None:
    backend.feeds = [
        [{"slot_id": "A1", "status": "occupied"}],
        [{"slot_id": "A1", "status": "vacant"}],
    ]
    updates: list[str] = []

    def _on_update(session: LotSession) -> None:
        state = session.render()
        if state.is_ready:
            updates.append(state.shapes[0].status)

    async with _session(backend, poll=True, poll_interval=0.01, on_update=_on_update) as session:
        assert session.is_polling
        for _ in range(200):
            if "vacant" in updates:
                break
            await asyncio.sleep(0.01)

    assert not session.is_polling
    assert "occupied" in updates
    assert updates[-1] == "vacant"
    calls = backend.calls[backend.STATUS_URL]
    await asyncio.sleep(0.05)
    assert backend.calls[backend.STATUS_URL] == calls


@pytest.mark.asyncio
async def test_failed_poll_keeps_previous_lookup(backend) -> None:
    backend.feeds = [
        [{"slot_id": "A1", "status": "occupied"}],
        ParkmapTransportError("timeout"),
    ]

    async with _session(backend, poll=True, poll_interval=0.01) as session:
        for _ in range(200):
            if backend.calls.get(backend.STATUS_URL, 0) >= 3:
                break
            await asyncio.sleep(0.01)
        state = session.render()

    assert state.status_error == "timeout"
    assert state.shapes[0].status == "occupied"


@pytest.mark.asyncio
async def test_outputs(backend) -> None:
    backend.feeds = [[{"slot_id": "A1", "status": "occupied"}]]

    async with _session(backend) as session:
        rows = session.table_rows()
        collection = session.annotated_collection()
        svg = session.svg()

    assert [(r.slot_id, r.status) for r in rows] == [
        ("A1", "occupied"),
        ("A2", "vacant"),
        ("B1", "unknown"),
        ("entrance", "unknown"),
    ]
    assert collection is not None
    assert collection["features"][0]["properties"]["status"] == "occupied"
    assert svg.count("<polygon") == 4


@pytest.mark.asyncio
async def test_failed_entry_closes_owned_http_session(monkeypatch) -> None:
    config = ParkmapConfig(layout_source="parking_slots.geojson")
    client = ParkmapClient(config)

    async def _explode(source=None):
        raise RuntimeError("layout loader crashed")

    monkeypatch.setattr(client, "load_layout", _explode)

    with pytest.raises(RuntimeError, match="layout loader crashed"):
        async with LotSession(config, client=client, poll=False):
            pass

    assert client._http_session is None


@pytest.mark.asyncio
async def test_failed_poller_start_releases_session(backend, monkeypatch) -> None:
    session = _session(backend, poll=True)

    def _fail_start(self, token=None):
        raise RuntimeError("poller refused to start")

    monkeypatch.setattr("parkmap.session.StatusPoller.start", _fail_start)

    with pytest.raises(RuntimeError):
        async with session:
            pass

    assert not session.is_polling
