from __future__ import annotations

import pytest

from parkmap.config import Canvas
from parkmap.exceptions import ParkmapConfigError
from parkmap.geometry.projection import build_projector, compute_envelope
from parkmap.models.feature import Layout, SlotFeature
from parkmap.models.render import Envelope


def _feature(coordinates: object, kind: str = "Polygon") -> SlotFeature:
    return SlotFeature.from_geojson(
        {"type": "Feature", "geometry": {"type": kind, "coordinates": coordinates}, "properties": {}}
    )


# ------------------------------------------------------------------
# compute_envelope
# ------------------------------------------------------------------


class TestComputeEnvelope:
    def test_empty_collection_is_absent(self) -> None:
        assert compute_envelope([]) is None

    def test_collection_without_positions_is_absent(self) -> None:
        features = [_feature(None), _feature([[]]), SlotFeature(slot_id="x")]
        assert compute_envelope(features) is None

    def test_contains_every_position(self, layout_document) -> None:
        layout = Layout.from_geojson(layout_document)
        envelope = compute_envelope(layout.features)

        assert envelope is not None
        assert envelope == Envelope(min_h=101.0, max_h=104.0, min_v=4.0, max_v=7.0)
        for feature in layout.features:
            assert feature.geometry is not None
            for position in feature.geometry.positions():
                assert envelope.contains(position)

    def test_includes_holes_and_non_area_geometries(self) -> None:
        features = [
            _feature([[[0, 0], [0, 1], [1, 1]], [[5, 5], [5, 6], [6, 6]]]),
            _feature([-3, 9], kind="Point"),
        ]
        envelope = compute_envelope(features)
        assert envelope == Envelope(min_h=-3.0, max_h=6.0, min_v=0.0, max_v=9.0)

    def test_single_point_layout_is_degenerate_not_absent(self) -> None:
        envelope = compute_envelope([_feature([[[2, 3]]])])
        assert envelope is not None
        assert envelope.width == 0
        assert envelope.height == 0

    def test_envelope_rejects_inverted_bounds(self) -> None:
        with pytest.raises(ValueError):
            Envelope(min_h=1.0, max_h=0.0, min_v=0.0, max_v=1.0)


# ------------------------------------------------------------------
# build_projector
# ------------------------------------------------------------------


class TestProjector:
    ENVELOPE = Envelope(min_h=0.0, max_h=10.0, min_v=0.0, max_v=5.0)

    def test_corners_map_to_inner_canvas(self) -> None:
        project = build_projector(self.ENVELOPE, Canvas(width=1200, height=520, margin=20))

        assert project((0.0, 5.0)) == pytest.approx((20.0, 20.0))
        assert project((10.0, 0.0)) == pytest.approx((1180.0, 500.0))
        assert project((5.0, 2.5)) == pytest.approx((600.0, 260.0))

    def test_default_canvas(self) -> None:
        project = build_projector(self.ENVELOPE)
        assert project.canvas == Canvas(width=1200, height=520, margin=20)

    def test_horizontal_is_monotonic_non_decreasing(self) -> None:
        project = build_projector(self.ENVELOPE)
        xs = [project((h / 4, 1.0))[0] for h in range(0, 41)]
        assert xs == sorted(xs)

    def test_vertical_is_flipped(self) -> None:
        project = build_projector(self.ENVELOPE)
        ys = [project((1.0, v / 4))[1] for v in range(0, 21)]
        assert ys == sorted(ys, reverse=True)
        # increasing latitude renders toward the top of the canvas
        assert project((1.0, 4.0))[1] < project((1.0, 1.0))[1]

    def test_degenerate_envelope_maps_to_margin(self) -> None:
        envelope = Envelope(min_h=3.0, max_h=3.0, min_v=7.0, max_v=7.0)
        project = build_projector(envelope, Canvas(width=100, height=50, margin=5))
        assert project((3.0, 7.0)) == (5.0, 5.0)

    def test_degenerate_single_axis(self) -> None:
        envelope = Envelope(min_h=0.0, max_h=10.0, min_v=7.0, max_v=7.0)
        project = build_projector(envelope, Canvas(width=100, height=50, margin=5))
        for h in (0.0, 5.0, 10.0):
            assert project((h, 7.0))[1] == 5.0
        assert project((10.0, 7.0))[0] == pytest.approx(95.0)

    def test_projector_is_reusable_and_stateless(self) -> None:
        project = build_projector(self.ENVELOPE)
        first = project((3.0, 1.0))
        project((9.0, 4.0))
        assert project((3.0, 1.0)) == first

    def test_project_ring_preserves_order(self) -> None:
        project = build_projector(self.ENVELOPE)
        ring = [(0.0, 0.0), (10.0, 0.0), (10.0, 5.0)]
        assert project.project_ring(ring) == tuple(project(p) for p in ring)

    def test_invalid_canvas_rejected(self) -> None:
        with pytest.raises(ParkmapConfigError):
            Canvas(width=30, height=30, margin=20)
