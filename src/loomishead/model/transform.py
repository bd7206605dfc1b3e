"""
Rigid transform from head space to world (camera) space.

The head is first rotated about its sphere center, then panned in the
screen plane. Panning after rotating keeps a drag moving the head along the
screen X/Y regardless of how it is turned.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, TYPE_CHECKING

import numpy as np
from scipy.spatial.transform import Rotation

from loomishead.model.geometry_primitives import Vector, Landmark

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Orientation:
    """
    Unit quaternion (x, y, z, w), scalar last.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def identity(cls) -> Orientation:
        return cls()

    @classmethod
    def from_rotation(cls, rotation: Rotation) -> Orientation:
        x, y, z, w = rotation.as_quat()
        return cls(float(x), float(y), float(z), float(w))

    @classmethod
    def from_axis_angle(cls, axis: Vector, angle: float) -> Orientation:
        """Rotation by `angle` radians about `axis` (normalized here)."""
        return cls.from_rotation(Rotation.from_rotvec(axis.normalize().to_array() * angle))

    @classmethod
    def from_euler(cls, x: float, y: float, z: float) -> Orientation:
        """Intrinsic X, then Y, then Z rotation, angles in radians."""
        return cls.from_rotation(Rotation.from_euler("XYZ", [x, y, z]))

    def as_rotation(self) -> Rotation:
        return Rotation.from_quat([self.x, self.y, self.z, self.w])

    def premultiply(self, other: Orientation) -> Orientation:
        """Apply `other` after this rotation (a world-space increment)."""
        return Orientation.from_rotation(other.as_rotation() * self.as_rotation())

    def multiply(self, other: Orientation) -> Orientation:
        """Apply `other` before this rotation (a head-space increment)."""
        return Orientation.from_rotation(self.as_rotation() * other.as_rotation())

    def inverse(self) -> Orientation:
        return Orientation.from_rotation(self.as_rotation().inv())

    def apply(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Rotate points; always returns an (N, 3) array."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(pts) == 0:
            return pts.copy()
        return np.atleast_2d(self.as_rotation().apply(pts))


@dataclass(frozen=True)
class Pan:
    """Screen-plane offset in pixels."""
    x: float = 0.0
    y: float = 0.0

    def moved(self, dx: float, dy: float) -> Pan:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, 0.0], dtype=np.float64)


def rotate_points(points: npt.ArrayLike, rotation: Orientation) -> npt.NDArray[np.float64]:
    """Apply a rotation to an (N, 3) array of points."""
    return rotation.apply(points)


def transform_points(
    points: npt.ArrayLike,
    rotation: Orientation,
    pan: Pan
) -> npt.NDArray[np.float64]:
    """Rotate in head space, then translate by the pan in world space."""
    return rotate_points(points, rotation) + pan.to_array()


def transform_landmarks(
    landmarks: Iterable[Landmark],
    rotation: Orientation,
    pan: Pan
) -> list[Landmark]:
    """Transform landmarks from head space to world space using rotation and pan."""
    landmarks = list(landmarks)
    if not landmarks:
        return []

    positions = np.array([lm.position.to_array() for lm in landmarks])
    moved = transform_points(positions, rotation, pan)
    return [
        replace(lm, position=Vector.from_array(p))
        for lm, p in zip(landmarks, moved)
    ]
