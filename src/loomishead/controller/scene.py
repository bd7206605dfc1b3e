"""
Scene Assembly
==============
This module runs the whole head pipeline for one evaluation.

Why is this file needed?
------------------------
1. Translation: It turns the abstract inputs (HeadParameters, Orientation,
   Pan, canvas size) into everything a renderer or an overlay consumes:
   front/back wireframe strokes and projected landmark readouts.
2. Ordering: Head-space work (landmarks, guidelines, side-band clipping)
   happens before the rigid transform; the visibility split and the
   projection happen after it.

The scene is rebuilt from scratch on every change; nothing is cached.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from loomishead.config import DEFAULT_CANVAS_SIZE, DEFAULT_CIRCLE_SEGMENTS, DEFAULT_CURVE_SEGMENTS
from loomishead.model.features import GuideName, build_guidelines
from loomishead.model.geometry_primitives import (
    Landmark, ProjectedLandmark, Guideline, LineKind, FrontBackSplit, Vector, Z_AXIS
)
from loomishead.model.geometry_utils import circle_on_plane, split_front_back, split_line
from loomishead.model.landmarks import calculate_landmarks
from loomishead.model.parameters import HeadParameters
from loomishead.model.projection import project_landmarks, project_points
from loomishead.model.transform import Orientation, Pan, transform_landmarks, transform_points

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.axes import Axes
    from loomishead.model.state import ViewState

logger = logging.getLogger(__name__)

FRONT_STYLE = {"color": "#222222", "linestyle": "-", "linewidth": 1.2}
BACK_STYLE = {"color": "#888888", "linestyle": "--", "linewidth": 0.8}


@dataclass
class Stroke:
    """One guideline in world space, split into camera-facing and hidden runs."""
    name: str
    front: list[npt.NDArray[np.float64]] = field(default_factory=list)
    back: list[npt.NDArray[np.float64]] = field(default_factory=list)


@dataclass
class HeadScene:
    """Return object of one pipeline evaluation."""
    canvas_width: int
    canvas_height: int
    landmarks: list[Landmark]
    world_landmarks: list[Landmark]
    projected: list[ProjectedLandmark]
    strokes: list[Stroke]

    def landmark(self, name: str) -> ProjectedLandmark:
        for projected in self.projected:
            if projected.name == name:
                return projected
        raise KeyError(f"No landmark named '{name}'")

    def plot(self, ax: Optional[Axes] = None, show_labels: bool = True) -> Axes:
        """
        Draw a static preview on canvas coordinates.
        Front runs are solid, hidden runs dashed, landmarks in their colours.
        """
        if ax is None:
            _, ax = plt.subplots()

        ax.set_aspect('equal')
        ax.set_xlim(0, self.canvas_width)
        ax.set_ylim(self.canvas_height, 0)  # canvas Y grows downwards

        for stroke in self.strokes:
            for run in stroke.back:
                xy = project_points(run, self.canvas_width, self.canvas_height)
                ax.plot(xy[:, 0], xy[:, 1], **BACK_STYLE)
            for run in stroke.front:
                xy = project_points(run, self.canvas_width, self.canvas_height)
                ax.plot(xy[:, 0], xy[:, 1], **FRONT_STYLE)

        colors = {lm.name: lm.color or "black" for lm in self.landmarks}
        for projected in self.projected:
            ax.scatter(
                projected.x, projected.y,
                s=16, color=colors[projected.name],
                alpha=1.0 if projected.visible else 0.4,
                zorder=3,
            )
            if show_labels:
                ax.annotate(projected.name, (projected.x, projected.y), fontsize=6,
                            xytext=(3, 3), textcoords="offset points")
        return ax


def split_guideline(guide: Guideline, world_points: npt.NDArray[np.float64]) -> FrontBackSplit:
    """Front/back split of a transformed guideline according to its kind."""
    if guide.kind == LineKind.STRAIGHT:
        split = FrontBackSplit()
        for p0, p1 in zip(world_points[:-1], world_points[1:]):
            split.extend(split_line(p0, p1))
        return split
    return split_front_back(world_points)


def build_head_scene(
    params: HeadParameters,
    orientation: Orientation,
    pan: Pan,
    canvas_width: int = DEFAULT_CANVAS_SIZE[0],
    canvas_height: int = DEFAULT_CANVAS_SIZE[1],
    circle_segments: int = DEFAULT_CIRCLE_SEGMENTS,
    curve_segments: int = DEFAULT_CURVE_SEGMENTS,
) -> HeadScene:
    """
    Evaluate the head for the given proportions, orientation and pan.
    """
    params.validate()

    landmarks = calculate_landmarks(params)
    world_landmarks = transform_landmarks(landmarks, orientation, pan)
    projected = project_landmarks(world_landmarks, canvas_width, canvas_height)

    # The sphere outline is the same circle for every orientation, so it is
    # built directly on the screen plane
    outline = circle_on_plane(Vector(pan.x, pan.y, 0.0), Z_AXIS, params.radius, circle_segments)
    strokes: dict[str, Stroke] = {
        GuideName.SILHOUETTE: Stroke(name=GuideName.SILHOUETTE, front=[outline]),
    }

    for guide in build_guidelines(params, circle_segments, curve_segments):
        world_points = transform_points(guide.points, orientation, pan)
        split = split_guideline(guide, world_points)
        stroke = strokes.setdefault(guide.name, Stroke(name=guide.name))
        stroke.front.extend(split.front)
        stroke.back.extend(split.back)

    logger.debug(f"Built head scene: {len(projected)} landmarks, {len(strokes)} strokes.")

    return HeadScene(
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        landmarks=landmarks,
        world_landmarks=world_landmarks,
        projected=projected,
        strokes=list(strokes.values()),
    )


def build_scene_from_state(
    state: ViewState,
    canvas_width: int = DEFAULT_CANVAS_SIZE[0],
    canvas_height: int = DEFAULT_CANVAS_SIZE[1],
) -> HeadScene:
    """Evaluate the head for the current snapshot of a ViewState."""
    return build_head_scene(state.parameters, state.orientation, state.pan, canvas_width, canvas_height)


def read_landmarks(
    params: HeadParameters,
    orientation: Orientation,
    pan: Pan,
    canvas_width: int,
    canvas_height: int,
) -> list[ProjectedLandmark]:
    """Landmark readout only: head model -> rigid transform -> projection."""
    world_landmarks = transform_landmarks(calculate_landmarks(params), orientation, pan)
    return project_landmarks(world_landmarks, canvas_width, canvas_height)
