"""Tests for guideline curves and the head-space wireframe."""

from __future__ import annotations

import math
import unittest

import numpy as np
from numpy.testing import assert_allclose

from loomishead.model.features import (
    GuideName,
    build_guidelines,
    chin_connector,
    parabolic_curve,
)
from loomishead.model.geometry_primitives import LineKind
from loomishead.model.landmarks import HeadDimensions, calculate_landmarks
from loomishead.model.parameters import HeadParameters


def _positions(params: HeadParameters) -> dict[str, np.ndarray]:
    return {lm.name: lm.position.to_array() for lm in calculate_landmarks(params)}


def _guides_named(guides, name: str):
    return [g for g in guides if g.name == name]


class TestParabolicCurve(unittest.TestCase):
    def test_shape_and_profile(self) -> None:
        points = parabolic_curve(y=-20.0, base_z=90.0, width_half=50.0, curve_depth=10.0, num_segments=4)
        expected = [
            [-50.0, -20.0, 80.0],
            [-25.0, -20.0, 87.5],
            [0.0, -20.0, 90.0],
            [25.0, -20.0, 87.5],
            [50.0, -20.0, 80.0],
        ]
        assert_allclose(points, expected)

    def test_default_sampling(self) -> None:
        self.assertEqual(parabolic_curve(0.0, 1.0, 1.0, 0.1).shape, (33, 3))

    def test_zero_width_stays_finite(self) -> None:
        points = parabolic_curve(y=0.0, base_z=5.0, width_half=0.0, curve_depth=2.0, num_segments=3)
        self.assertTrue(np.all(np.isfinite(points)))
        assert_allclose(points[:, 2], 5.0)

    def test_endpoints_match_landmarks(self) -> None:
        params = HeadParameters()
        dims = HeadDimensions.from_parameters(params)
        positions = _positions(params)
        y = dims.mouth_line_y

        points = parabolic_curve(y, dims.face_curve_z(y), dims.mouth_width_half, dims.mouth_curve_depth)

        assert_allclose(points[0], positions["Mouth Left"], atol=1e-9)
        assert_allclose(points[16], positions["Mouth Center"], atol=1e-9)
        assert_allclose(points[-1], positions["Mouth Right"], atol=1e-9)


class TestChinConnector(unittest.TestCase):
    def test_runs_from_sphere_front_to_chin(self) -> None:
        params = HeadParameters(radius=100.0)
        dims = HeadDimensions.from_parameters(params)
        points = chin_connector(dims)

        self.assertEqual(points.shape, (33, 3))
        assert_allclose(points[0], [0.0, 0.0, 100.0])
        assert_allclose(points[-1], _positions(params)["Chin"])
        assert_allclose(points[:, 0], 0.0)

    def test_depth_recedes_monotonically(self) -> None:
        dims = HeadDimensions.from_parameters(HeadParameters(chin_line_curve=0.4))
        depths = chin_connector(dims)[:, 2]
        self.assertTrue(np.all(np.diff(depths) <= 0.0))


class TestBuildGuidelines(unittest.TestCase):
    def setUp(self) -> None:
        self.params = HeadParameters(radius=100.0, side_cut=0.66)
        self.dims = HeadDimensions.from_parameters(self.params)
        self.guides = build_guidelines(self.params)

    def test_all_guides_present(self) -> None:
        names = {g.name for g in self.guides}
        expected = {name for name in GuideName if name != GuideName.SILHOUETTE}
        self.assertEqual(names, expected)

    def test_rims(self) -> None:
        for name, sign in ((GuideName.RIM_LEFT, -1.0), (GuideName.RIM_RIGHT, 1.0)):
            (rim,) = _guides_named(self.guides, name)
            assert_allclose(rim.points[:, 0], sign * 66.0)
            radii = np.linalg.norm(rim.points[:, 1:], axis=1)
            assert_allclose(radii, math.sqrt(100 ** 2 - 66 ** 2))

    def test_meridian_is_great_circle(self) -> None:
        (meridian,) = _guides_named(self.guides, GuideName.MERIDIAN)
        self.assertEqual(len(meridian.points), 65)
        assert_allclose(np.linalg.norm(meridian.points, axis=1), 100.0)

    def test_bands_are_clipped_between_side_cuts(self) -> None:
        for name in (GuideName.HAIRLINE_BAND, GuideName.BROW_BAND):
            bands = _guides_named(self.guides, name)
            self.assertGreater(len(bands), 1)
            for band in bands:
                self.assertGreaterEqual(len(band.points), 2)
                self.assertTrue(np.all(np.abs(band.points[:, 0]) <= 66.0 + 1e-6))

    def test_brow_band_lies_on_sphere(self) -> None:
        for band in _guides_named(self.guides, GuideName.BROW_BAND):
            assert_allclose(band.points[:, 1], 0.0, atol=1e-9)
            # Clip crossings sit on chords; interior samples are on the sphere
            assert_allclose(np.linalg.norm(band.points[1:-1], axis=1), 100.0)
            self.assertTrue(np.all(np.linalg.norm(band.points, axis=1) <= 100.0 + 1e-9))

    def test_jaw_lines(self) -> None:
        positions = _positions(self.params)
        (jaw,) = _guides_named(self.guides, GuideName.JAW_LEFT)
        self.assertEqual(jaw.kind, LineKind.STRAIGHT)
        assert_allclose(jaw.points, [
            positions["Jaw Start Left"],
            positions["Jaw Drop Left"],
            positions["Chin Left"],
        ])

    def test_curves_are_curve_kind(self) -> None:
        for guide in self.guides:
            if guide.name not in (GuideName.JAW_LEFT, GuideName.JAW_RIGHT):
                self.assertEqual(guide.kind, LineKind.CURVE)

    def test_repeatable(self) -> None:
        again = build_guidelines(self.params)
        self.assertEqual(len(again), len(self.guides))
        for a, b in zip(self.guides, again):
            self.assertEqual(a.name, b.name)
            np.testing.assert_array_equal(a.points, b.points)


if __name__ == "__main__":
    unittest.main()
