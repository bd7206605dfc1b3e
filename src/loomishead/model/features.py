"""
Guideline curves of the Loomis head (the rendered wireframe).

Everything here is in head space: sphere center at the origin, Y up, the
face looking down +Z. Landmarks sit on these curves, see `landmarks.py`.
"""
from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

import numpy as np

from loomishead.config import DEFAULT_CIRCLE_SEGMENTS, DEFAULT_CURVE_SEGMENTS
from loomishead.model.geometry_primitives import Vector, Guideline, LineKind, ORIGIN, X_AXIS, Y_AXIS
from loomishead.model.geometry_utils import circle_on_plane, clip_to_side_band, calculate_rim_radius
from loomishead.model.landmarks import HeadDimensions, calculate_landmarks, LandmarkName
from loomishead.model.parameters import HeadParameters

if TYPE_CHECKING:
    import numpy.typing as npt


class GuideName(StrEnum):
    SILHOUETTE = "Silhouette"
    MERIDIAN = "Meridian"
    RIM_LEFT = "Rim Left"
    RIM_RIGHT = "Rim Right"
    HAIRLINE_BAND = "Hairline Band"
    BROW_BAND = "Brow Band"
    EYE_LINE = "Eye Line"
    NOSE_LINE = "Nose Line"
    MOUTH_LINE = "Mouth Line"
    CHIN_LINE = "Chin Line"
    CHIN_CONNECTOR = "Chin Connector"
    JAW_LEFT = "Jaw Left"
    JAW_RIGHT = "Jaw Right"


def parabolic_curve(
    y: float,
    base_z: float,
    width_half: float,
    curve_depth: float,
    num_segments: int = DEFAULT_CURVE_SEGMENTS
) -> npt.NDArray[np.float64]:
    """
    Horizontal feature line across the face.

    The line runs from x = -width_half to x = +width_half at height `y` and
    bows back along a parabola, z = base_z - curve_depth * (x / width_half)^2,
    so its ends sit `curve_depth` behind its center.

    Returns:
        Array of shape (num_segments + 1, 3).
    """
    xs = np.linspace(-width_half, width_half, num_segments + 1)
    if width_half > 0:
        ratio = xs / width_half
    else:
        ratio = np.zeros_like(xs)

    zs = base_z - curve_depth * ratio * ratio
    ys = np.full_like(xs, y)
    return np.column_stack((xs, ys, zs))


def chin_connector(
    dims: HeadDimensions,
    num_segments: int = DEFAULT_CURVE_SEGMENTS
) -> npt.NDArray[np.float64]:
    """
    Center line of the face from the sphere front (0, 0, R) down to the chin.
    Depth follows the same eased blend as the feature landmarks.
    """
    ys = np.linspace(0.0, dims.chin_y, num_segments + 1)
    zs = np.array([dims.face_curve_z(float(y)) for y in ys])
    # The blend ends exactly at the chin point
    zs[-1] = dims.chin_z
    xs = np.zeros_like(ys)
    return np.column_stack((xs, ys, zs))


def latitude_circle(
    dims: HeadDimensions,
    y_ratio: float,
    segments: int = DEFAULT_CIRCLE_SEGMENTS
) -> npt.NDArray[np.float64]:
    """Horizontal circle on the sphere surface at height y_ratio * R."""
    y = y_ratio * dims.radius
    return circle_on_plane(
        center=Vector(0.0, y, 0.0),
        normal=Y_AXIS,
        radius=calculate_rim_radius(dims.radius, y),
        segments=segments,
    )


def build_guidelines(
    params: HeadParameters,
    circle_segments: int = DEFAULT_CIRCLE_SEGMENTS,
    curve_segments: int = DEFAULT_CURVE_SEGMENTS
) -> list[Guideline]:
    """
    Generate the head-space wireframe of the head.

    Band circles (hairline, brow) are clipped to the face between the side
    cuts, so one circle may yield several guidelines sharing its name.
    """
    dims = HeadDimensions.from_parameters(params)
    r = dims.radius

    guides = [
        Guideline(GuideName.MERIDIAN, circle_on_plane(ORIGIN, X_AXIS, r, circle_segments)),
        Guideline(
            GuideName.RIM_LEFT,
            circle_on_plane(Vector(-dims.cut_distance, 0.0, 0.0), X_AXIS, dims.rim_radius, circle_segments)
        ),
        Guideline(
            GuideName.RIM_RIGHT,
            circle_on_plane(Vector(dims.cut_distance, 0.0, 0.0), X_AXIS, dims.rim_radius, circle_segments)
        ),
    ]

    for name, y_ratio in ((GuideName.HAIRLINE_BAND, params.hairline_pos), (GuideName.BROW_BAND, params.brow_pos)):
        band = latitude_circle(dims, y_ratio, circle_segments)
        for segment in clip_to_side_band(band, abs(dims.cut_distance)):
            guides.append(Guideline(name, segment))

    feature_lines = (
        (GuideName.EYE_LINE, dims.eye_line_y, dims.eye_width_half, dims.eye_curve_depth),
        (GuideName.NOSE_LINE, dims.nose_line_y, dims.nose_width_half, dims.nose_curve_depth),
        (GuideName.MOUTH_LINE, dims.mouth_line_y, dims.mouth_width_half, dims.mouth_curve_depth),
    )
    for name, y, width_half, depth in feature_lines:
        points = parabolic_curve(y, dims.face_curve_z(y), width_half, depth, curve_segments)
        guides.append(Guideline(name, points))

    guides.append(Guideline(
        GuideName.CHIN_LINE,
        parabolic_curve(dims.chin_y, dims.chin_z, dims.chin_width_half, dims.chin_curve_height, curve_segments)
    ))
    guides.append(Guideline(GuideName.CHIN_CONNECTOR, chin_connector(dims, curve_segments)))

    # Jaw: rim bottom -> jaw drop -> chin corner, on each side
    positions = {lm.name: lm.position.to_array() for lm in calculate_landmarks(params)}
    guides.append(Guideline(
        GuideName.JAW_LEFT,
        np.array([
            positions[LandmarkName.JAW_START_LEFT],
            positions[LandmarkName.JAW_DROP_LEFT],
            positions[LandmarkName.CHIN_LEFT],
        ]),
        LineKind.STRAIGHT,
    ))
    guides.append(Guideline(
        GuideName.JAW_RIGHT,
        np.array([
            positions[LandmarkName.JAW_START_RIGHT],
            positions[LandmarkName.JAW_DROP_RIGHT],
            positions[LandmarkName.CHIN_RIGHT],
        ]),
        LineKind.STRAIGHT,
    ))

    return guides
