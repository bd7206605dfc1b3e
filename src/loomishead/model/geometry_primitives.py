"""
Geometric Primitives for the head model and its wireframe.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional, Sequence, TYPE_CHECKING
import math

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Vector:
    """
    A vector (or position) in 3D space.
    """
    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_array(cls, values: Sequence[float]) -> Vector:
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> Vector:
        if scalar == 0.0: raise ZeroDivisionError
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self) -> Vector:
        mag = self.magnitude
        if mag == 0.0: return Vector(0.0, 0.0, 0.0)
        return self / mag

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def lerp(self, other: Vector, t: float) -> Vector:
        """Linear interpolation towards `other` (t=0 -> self, t=1 -> other)."""
        return self + (other - self) * t

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


X_AXIS = Vector(1.0, 0.0, 0.0)
Y_AXIS = Vector(0.0, 1.0, 0.0)
Z_AXIS = Vector(0.0, 0.0, 1.0)
ORIGIN = Vector(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Landmark:
    """A named point of the head scaffold."""
    name: str
    position: Vector
    color: Optional[str] = None


@dataclass(frozen=True)
class ProjectedLandmark:
    """A landmark mapped onto the canvas, in integer pixels."""
    name: str
    x: int
    y: int
    visible: bool  # True if the point faces the camera


class LineKind(StrEnum):
    """How the points of a guideline are connected."""
    CURVE = "curve"
    STRAIGHT = "straight"


@dataclass(frozen=True, eq=False)
class Guideline:
    """
    A named wireframe polyline.

    `points` is an (N, 3) array. CURVE guidelines are dense samples of a
    smooth curve, STRAIGHT guidelines are a few corners joined by lines.
    """
    name: str
    points: npt.NDArray[np.float64]
    kind: LineKind = LineKind.CURVE


@dataclass
class FrontBackSplit:
    """Runs of a polyline facing the camera (front) and facing away (back)."""
    front: list[npt.NDArray[np.float64]] = field(default_factory=list)
    back: list[npt.NDArray[np.float64]] = field(default_factory=list)

    def extend(self, other: FrontBackSplit) -> None:
        self.front.extend(other.front)
        self.back.extend(other.back)
