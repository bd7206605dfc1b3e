"""
Orthographic projection onto the canvas.

The camera sits far out on +Z looking at the origin with one world unit per
canvas pixel. World origin maps to the canvas center; canvas Y grows
downwards while world Y grows upwards.
"""
from __future__ import annotations

import math
from typing import Iterable, TYPE_CHECKING

import numpy as np

from loomishead.model.geometry_primitives import Landmark, ProjectedLandmark

if TYPE_CHECKING:
    import numpy.typing as npt


def _check_canvas(canvas_width: float, canvas_height: float) -> None:
    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError(f"Canvas size must be positive, got {canvas_width}x{canvas_height}.")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def project_landmarks(
    landmarks: Iterable[Landmark],
    canvas_width: int,
    canvas_height: int
) -> list[ProjectedLandmark]:
    """
    Project world-space landmarks to integer canvas coordinates.

    A landmark is visible when it faces the camera (z >= 0).
    """
    _check_canvas(canvas_width, canvas_height)
    half_w = canvas_width / 2
    half_h = canvas_height / 2

    projected = []
    for landmark in landmarks:
        pos = landmark.position
        projected.append(ProjectedLandmark(
            name=landmark.name,
            x=_round_half_up(half_w + pos.x),
            y=_round_half_up(half_h - pos.y),
            visible=pos.z >= 0,
        ))
    return projected


def project_points(
    points: npt.ArrayLike,
    canvas_width: int,
    canvas_height: int
) -> npt.NDArray[np.float64]:
    """
    Project world-space points to (unrounded) canvas coordinates.

    Returns:
        Array of shape (N, 2) with canvas (x, y) per point.
    """
    _check_canvas(canvas_width, canvas_height)
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    return np.column_stack((canvas_width / 2 + pts[:, 0], canvas_height / 2 - pts[:, 1]))
