"""Named landmark points of the Loomis head, in head space (before rotation)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
import math
from typing import Iterable, Optional

from loomishead.model.geometry_primitives import Vector, Landmark
from loomishead.model.geometry_utils import calculate_rim_radius
from loomishead.model.parameters import HeadParameters

logger = logging.getLogger(__name__)


class LandmarkName(StrEnum):
    """Display names of the landmarks, in evaluation order."""
    SPHERE_CENTER = "Sphere Center"
    CROWN = "Crown"
    HAIRLINE = "Hairline"
    BROW = "Brow"
    EYE_CENTER = "Eye Center"
    EYE_LEFT = "Eye Left"
    EYE_RIGHT = "Eye Right"
    NOSE_CENTER = "Nose Center"
    NOSE_LEFT = "Nose Left"
    NOSE_RIGHT = "Nose Right"
    MOUTH_CENTER = "Mouth Center"
    MOUTH_LEFT = "Mouth Left"
    MOUTH_RIGHT = "Mouth Right"
    CHIN = "Chin"
    CHIN_LEFT = "Chin Left"
    CHIN_RIGHT = "Chin Right"
    JAW_START_LEFT = "Jaw Start Left"
    JAW_START_RIGHT = "Jaw Start Right"
    JAW_DROP_LEFT = "Jaw Drop Left"
    JAW_DROP_RIGHT = "Jaw Drop Right"


class LandmarkColor(StrEnum):
    CENTER = "#ff00ff"
    CROWN = "#4ecdc4"
    HAIRLINE = "#ffd93d"
    FEATURE = "#ff6b6b"
    JAW = "#45b7d1"


@dataclass(frozen=True)
class HeadDimensions:
    """
    Absolute dimensions derived from HeadParameters.

    Heights are measured along Y from the sphere center, depths along Z
    (towards the viewer), half-widths along X.
    """
    radius: float
    chin_y: float
    chin_z: float

    eye_line_y: float
    nose_line_y: float
    mouth_line_y: float

    eye_width_half: float
    nose_width_half: float
    mouth_width_half: float
    chin_width_half: float

    eye_curve_depth: float
    nose_curve_depth: float
    mouth_curve_depth: float
    chin_curve_height: float

    cut_distance: float
    rim_radius: float
    jaw_drop_distance: float
    jaw_width_distance: float

    @classmethod
    def from_parameters(cls, params: HeadParameters) -> HeadDimensions:
        params.validate()
        r = params.radius

        cut_distance = params.side_cut * r
        if abs(cut_distance) > r:
            logger.debug(f"Side cut {params.side_cut} misses the sphere, rim radius clamped to 0.")

        return cls(
            radius=r,
            chin_y=-r - params.chin_pos * r,
            chin_z=r - params.chin_line_curve * r,
            eye_line_y=params.eye_line_pos * r,
            nose_line_y=params.nose_pos * r,
            mouth_line_y=params.mouth_pos * r,
            eye_width_half=params.eye_width * r,
            nose_width_half=params.nose_width * r,
            mouth_width_half=params.mouth_width * r,
            chin_width_half=params.chin_width * r,
            eye_curve_depth=params.eye_curve * r,
            nose_curve_depth=params.nose_curve * r,
            mouth_curve_depth=params.mouth_curve * r,
            chin_curve_height=params.chin_curve * r,
            cut_distance=cut_distance,
            rim_radius=calculate_rim_radius(r, cut_distance),
            jaw_drop_distance=params.jaw_drop * r,
            jaw_width_distance=params.jaw_width * r,
        )

    def face_curve_z(self, y: float) -> float:
        return get_face_curve_z(y, self.radius, self.chin_y, self.chin_z)

    def sphere_front(self, y_ratio: float) -> Vector:
        """Point on the front of the sphere (x = 0, z >= 0) at height y_ratio * R."""
        y = y_ratio * self.radius
        r_squared = self.radius * self.radius - y * y
        z = math.sqrt(r_squared) if r_squared > 0 else 0.0
        return Vector(0.0, y, z)


def get_face_curve_z(y: float, radius: float, chin_y: float, chin_z: float) -> float:
    """
    Depth of the face surface at height `y`.

    At or above the equator features sit on the front of the sphere. Below
    it the face recedes from the sphere front towards the chin depth, with a
    quadratic ease-in so most of the curvature is near the chin.
    """
    if y >= 0:
        return radius
    if chin_y >= 0:
        # Chin at or above the equator: everything below is at chin depth
        return chin_z

    t = y / chin_y  # 0 at equator, 1 at chin
    t_eased = t * t
    return radius + t_eased * (chin_z - radius)


def calculate_landmarks(params: HeadParameters) -> list[Landmark]:
    """Calculate 3D landmark positions in head space (before rotation)."""
    dims = HeadDimensions.from_parameters(params)
    r = dims.radius

    def feature_row(
        center_name: LandmarkName,
        left_name: LandmarkName,
        right_name: LandmarkName,
        y: float,
        z: float,
        width_half: float,
        curve_depth: float,
        color: str,
    ) -> list[Landmark]:
        # Line ends curve back from the center by `curve_depth`
        return [
            Landmark(center_name, Vector(0.0, y, z), color),
            Landmark(left_name, Vector(-width_half, y, z - curve_depth), color),
            Landmark(right_name, Vector(width_half, y, z - curve_depth), color),
        ]

    landmarks = [
        Landmark(LandmarkName.SPHERE_CENTER, Vector(0.0, 0.0, 0.0), LandmarkColor.CENTER),
        Landmark(LandmarkName.CROWN, Vector(0.0, r, 0.0), LandmarkColor.CROWN),
        Landmark(LandmarkName.HAIRLINE, dims.sphere_front(params.hairline_pos), LandmarkColor.HAIRLINE),
        Landmark(LandmarkName.BROW, dims.sphere_front(params.brow_pos), LandmarkColor.HAIRLINE),
    ]

    landmarks.extend(feature_row(
        LandmarkName.EYE_CENTER, LandmarkName.EYE_LEFT, LandmarkName.EYE_RIGHT,
        dims.eye_line_y, dims.face_curve_z(dims.eye_line_y),
        dims.eye_width_half, dims.eye_curve_depth, LandmarkColor.FEATURE,
    ))
    landmarks.extend(feature_row(
        LandmarkName.NOSE_CENTER, LandmarkName.NOSE_LEFT, LandmarkName.NOSE_RIGHT,
        dims.nose_line_y, dims.face_curve_z(dims.nose_line_y),
        dims.nose_width_half, dims.nose_curve_depth, LandmarkColor.FEATURE,
    ))
    landmarks.extend(feature_row(
        LandmarkName.MOUTH_CENTER, LandmarkName.MOUTH_LEFT, LandmarkName.MOUTH_RIGHT,
        dims.mouth_line_y, dims.face_curve_z(dims.mouth_line_y),
        dims.mouth_width_half, dims.mouth_curve_depth, LandmarkColor.FEATURE,
    ))
    landmarks.extend(feature_row(
        LandmarkName.CHIN, LandmarkName.CHIN_LEFT, LandmarkName.CHIN_RIGHT,
        dims.chin_y, dims.chin_z,
        dims.chin_width_half, dims.chin_curve_height, LandmarkColor.JAW,
    ))

    # Jaw starts at the bottom of the side rims, then drops down
    jaw_drop_y = -dims.rim_radius - dims.jaw_drop_distance
    landmarks.extend([
        Landmark(LandmarkName.JAW_START_LEFT, Vector(-dims.cut_distance, -dims.rim_radius, 0.0), LandmarkColor.JAW),
        Landmark(LandmarkName.JAW_START_RIGHT, Vector(dims.cut_distance, -dims.rim_radius, 0.0), LandmarkColor.JAW),
        Landmark(LandmarkName.JAW_DROP_LEFT, Vector(-dims.jaw_width_distance, jaw_drop_y, 0.0), LandmarkColor.JAW),
        Landmark(LandmarkName.JAW_DROP_RIGHT, Vector(dims.jaw_width_distance, jaw_drop_y, 0.0), LandmarkColor.JAW),
    ])

    return landmarks


def find_landmark(landmarks: Iterable[Landmark], name: str) -> Optional[Landmark]:
    """Return the landmark called `name`, or None."""
    for landmark in landmarks:
        if landmark.name == name:
            return landmark
    return None
