"""End-to-end tests of the scene pipeline."""

from __future__ import annotations

import math
import unittest

import numpy as np
from matplotlib.figure import Figure

from loomishead.controller.scene import build_head_scene, build_scene_from_state, read_landmarks
from loomishead.model.features import GuideName
from loomishead.model.geometry_primitives import ProjectedLandmark, Vector
from loomishead.model.parameters import HeadParameters
from loomishead.model.state import ViewState
from loomishead.model.transform import Orientation, Pan


class TestReadLandmarks(unittest.TestCase):
    def test_crown_on_default_canvas(self) -> None:
        projected = read_landmarks(HeadParameters(radius=100.0), Orientation.identity(), Pan(0.0, 0.0), 1920, 1080)
        crown = next(p for p in projected if p.name == "Crown")
        self.assertEqual(crown, ProjectedLandmark("Crown", 960, 440, True))

    def test_pan_moves_on_screen(self) -> None:
        turned = Orientation.from_euler(0.2, 1.0, 0.0)
        still = read_landmarks(HeadParameters(), turned, Pan(), 1000, 1000)
        panned = read_landmarks(HeadParameters(), turned, Pan(30.0, 20.0), 1000, 1000)
        for a, b in zip(still, panned):
            self.assertEqual(b.x - a.x, 30)
            self.assertEqual(b.y - a.y, -20)
            self.assertEqual(a.visible, b.visible)

    def test_turned_away_face_is_hidden(self) -> None:
        half_turn = Orientation.from_axis_angle(Vector(0, 1, 0), math.pi)
        projected = {p.name: p for p in read_landmarks(HeadParameters(), half_turn, Pan(), 800, 600)}
        self.assertFalse(projected["Eye Center"].visible)
        self.assertFalse(projected["Chin"].visible)
        self.assertEqual(projected["Eye Left"].x, 800 // 2 + 50)


class TestBuildHeadScene(unittest.TestCase):
    def setUp(self) -> None:
        self.params = HeadParameters(radius=100.0)
        self.orientation = Orientation.from_euler(0.3, -0.6, 0.1)
        self.scene = build_head_scene(self.params, self.orientation, Pan(12.0, -8.0), 1280, 720)

    def test_matches_landmark_readout(self) -> None:
        expected = read_landmarks(self.params, self.orientation, Pan(12.0, -8.0), 1280, 720)
        self.assertEqual(self.scene.projected, expected)
        self.assertEqual(len(self.scene.landmarks), 20)
        self.assertEqual(len(self.scene.world_landmarks), 20)

    def test_landmark_lookup(self) -> None:
        self.assertEqual(self.scene.landmark("Crown").name, "Crown")
        with self.assertRaises(KeyError):
            self.scene.landmark("Ear")

    def test_strokes(self) -> None:
        names = {stroke.name for stroke in self.scene.strokes}
        self.assertEqual(names, set(GuideName))

    def test_curve_split_keeps_every_point(self) -> None:
        meridian = next(s for s in self.scene.strokes if s.name == GuideName.MERIDIAN)
        total = sum(len(run) for run in meridian.front) + sum(len(run) for run in meridian.back)
        self.assertEqual(total, 65)
        for run in meridian.front:
            self.assertTrue(np.all(run[:, 2] >= 0.0))
        for run in meridian.back:
            self.assertTrue(np.all(run[:, 2] < 0.0))

    def test_silhouette_is_all_front(self) -> None:
        silhouette = next(s for s in self.scene.strokes if s.name == GuideName.SILHOUETTE)
        self.assertEqual(silhouette.back, [])

    def test_straight_lines_split_at_zero(self) -> None:
        # Turned slightly left: the right jaw start and drop go behind, the
        # right chin corner stays in front
        turned = Orientation.from_axis_angle(Vector(0, 1, 0), 0.3)
        scene = build_head_scene(self.params, turned, Pan(), 800, 800)
        jaw = next(s for s in scene.strokes if s.name == GuideName.JAW_RIGHT)

        self.assertEqual(len(jaw.back), 2)
        self.assertEqual(len(jaw.front), 1)
        for run in jaw.front + jaw.back:
            self.assertEqual(len(run), 2)
        self.assertEqual(jaw.front[0][0, 2], 0.0)
        np.testing.assert_array_equal(jaw.back[-1][-1], jaw.front[0][0])

    def test_identity_jaw_is_front(self) -> None:
        scene = build_head_scene(self.params, Orientation.identity(), Pan(), 800, 800)
        jaw = next(s for s in scene.strokes if s.name == GuideName.JAW_LEFT)
        self.assertEqual(len(jaw.front), 2)
        self.assertEqual(jaw.back, [])

    def test_invalid_parameters(self) -> None:
        with self.assertRaises(ValueError):
            build_head_scene(HeadParameters(radius=0.0), Orientation.identity(), Pan())

    def test_plot(self) -> None:
        fig = Figure()
        ax = fig.add_subplot()
        returned = self.scene.plot(ax=ax)
        self.assertIs(returned, ax)
        self.assertGreater(len(ax.lines), 0)
        self.assertEqual(ax.get_ylim(), (720.0, 0.0))


class TestSceneFromState(unittest.TestCase):
    def test_uses_state_snapshot(self) -> None:
        state = ViewState()
        state.pan_by(5.0, 5.0)
        scene = build_scene_from_state(state, 1920, 1080)
        self.assertEqual(scene.landmark("Sphere Center"), ProjectedLandmark("Sphere Center", 965, 535, True))


if __name__ == "__main__":
    unittest.main()
