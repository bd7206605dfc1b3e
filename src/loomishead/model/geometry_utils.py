from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from math import sqrt
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

from loomishead.config import CLIP_EPSILON, DEFAULT_CIRCLE_SEGMENTS
from loomishead.model.geometry_primitives import Vector, FrontBackSplit, X_AXIS, Y_AXIS, Z_AXIS


def basis_from_normal(n: Vector) -> tuple[Vector, Vector]:
    """
    Create an orthonormal basis (u, v) of the plane perpendicular to `n`.

    The helper axis is the standard axis least aligned with `n`, so the cross
    product below never degenerates. Ties resolve to X, then Y, then Z.

    Args:
        n: Unit normal of the plane.

    Returns:
        Tuple (u, v) of unit vectors with u, v and n mutually orthogonal.
    """
    abs_x = abs(n.x)
    abs_y = abs(n.y)
    abs_z = abs(n.z)

    if abs_x <= abs_y and abs_x <= abs_z:
        axis = X_AXIS
    elif abs_y <= abs_z:
        axis = Y_AXIS
    else:
        axis = Z_AXIS

    u = n.cross(axis).normalize()
    v = n.cross(u)
    return u, v


def circle_on_plane(
    center: Vector,
    normal: Vector,
    radius: float,
    segments: int = DEFAULT_CIRCLE_SEGMENTS
) -> npt.NDArray[np.float64]:
    """
    Discretize a circle lying on an arbitrary plane into a closed polyline.

    Args:
        center: Center of the circle.
        normal: Normal of the plane the circle lies in (need not be unit length).
        radius: Radius of the circle. Negative values are clamped to 0.
        segments: Number of segments; the polyline has `segments + 1` points.

    Returns:
        An array of shape (segments + 1, 3). The last point repeats the first.
    """
    if segments < 1:
        raise ValueError(f"segments must be >= 1, got {segments}.")

    u, v = basis_from_normal(normal.normalize())
    radius = max(0.0, radius)

    theta = np.arange(segments + 1) / segments * 2.0 * np.pi
    cos_t = (np.cos(theta) * radius)[:, np.newaxis]
    sin_t = (np.sin(theta) * radius)[:, np.newaxis]

    return center.to_array() + cos_t * u.to_array() + sin_t * v.to_array()


def calculate_rim_radius(sphere_radius: float, cut_distance: float) -> float:
    """
    Radius of the circle exposed by slicing a sphere at `cut_distance` from
    its center: sqrt(R^2 - d^2), clamped to 0 when the cut misses the sphere.
    """
    r_squared = sphere_radius * sphere_radius - cut_distance * cut_distance
    return sqrt(max(0.0, r_squared))


def split_front_back(points: npt.ArrayLike) -> FrontBackSplit:
    """
    Split a polyline into continuous runs facing the camera (z >= 0) and
    facing away (z < 0).

    No vertex is inserted where the polyline crosses z = 0; neighbouring runs
    simply end and start at consecutive samples.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    split = FrontBackSplit()
    if len(pts) == 0:
        return split

    is_front = pts[:, 2] >= 0.0
    start = 0
    for i in range(1, len(pts) + 1):
        if i == len(pts) or is_front[i] != is_front[start]:
            run = pts[start:i].copy()
            if is_front[start]:
                split.front.append(run)
            else:
                split.back.append(run)
            start = i

    return split


def split_line(p0: npt.ArrayLike, p1: npt.ArrayLike) -> FrontBackSplit:
    """
    Split a single straight segment at the z = 0 plane.

    Unlike `split_front_back`, the crossing point is interpolated and shared
    by both halves, so the dashed and solid parts meet exactly.
    """
    a = np.asarray(p0, dtype=np.float64)
    b = np.asarray(p1, dtype=np.float64)
    split = FrontBackSplit()

    a_front = a[2] >= 0.0
    b_front = b[2] >= 0.0

    if a_front and b_front:
        split.front.append(np.array([a, b]))
        return split
    if not a_front and not b_front:
        split.back.append(np.array([a, b]))
        return split

    # Opposite sides, so a.z != b.z
    t = a[2] / (a[2] - b[2])
    crossing = a + (b - a) * t
    crossing[2] = 0.0

    if a_front:
        split.front.append(np.array([a, crossing]))
        split.back.append(np.array([crossing, b]))
    else:
        split.back.append(np.array([a, crossing]))
        split.front.append(np.array([crossing, b]))
    return split


def _intersect_x(
    p0: npt.NDArray[np.float64],
    p1: npt.NDArray[np.float64],
    boundary: float,
    eps: float = CLIP_EPSILON
) -> Optional[npt.NDArray[np.float64]]:
    """
    Point where the segment p0 -> p1 crosses the plane x = boundary.
    Returns None if the segment does not reach the plane or is near-vertical.
    """
    dx = p1[0] - p0[0]
    if abs(dx) < eps:
        return None

    t = (boundary - p0[0]) / dx
    if 0.0 <= t <= 1.0:
        return p0 + (p1 - p0) * t
    return None


def clip_to_side_band(
    points: npt.ArrayLike,
    d: float,
    eps: float = CLIP_EPSILON
) -> list[npt.NDArray[np.float64]]:
    """
    Clip an open polyline to the band |x| <= d.

    Parts outside the band are removed and exact crossing points are inserted
    where the polyline enters or leaves it.

    Args:
        points: Polyline of shape (N, 3). Consecutive points form edges; the
            last point is not joined back to the first.
        d: Half-width of the band (>= 0).
        eps: Tolerance of the inside test and of the near-vertical edge test.

    Returns:
        List of segments (each an (M, 3) array with M >= 2) in traversal order.

    Notes:
        - Edges with |dx| < eps have no computable crossing. When such an
          edge enters or leaves the band it contributes no boundary point.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    segments: list[npt.NDArray[np.float64]] = []
    if len(pts) < 2:
        return segments

    def is_inside(p: npt.NDArray[np.float64]) -> bool:
        return abs(p[0]) <= d + eps

    current: list[npt.NDArray[np.float64]] = []
    if is_inside(pts[0]):
        current.append(pts[0].copy())

    for prev, curr in zip(pts[:-1], pts[1:]):
        prev_inside = is_inside(prev)
        curr_inside = is_inside(curr)

        if prev_inside and curr_inside:
            current.append(curr.copy())

        elif prev_inside and not curr_inside:
            # Leaving the band: close the segment at the boundary it overshot
            boundary = d if curr[0] > d else -d
            crossing = _intersect_x(prev, curr, boundary, eps)
            if crossing is not None:
                current.append(crossing)
            if len(current) >= 2:
                segments.append(np.array(current))
            current = []

        elif not prev_inside and curr_inside:
            # Entering the band: start a new segment at the boundary
            boundary = d if prev[0] > d else -d
            crossing = _intersect_x(prev, curr, boundary, eps)
            if crossing is not None:
                current = [crossing, curr.copy()]
            else:
                current = [curr.copy()]

        elif (prev[0] < -d and curr[0] > d) or (prev[0] > d and curr[0] < -d):
            # Both outside on opposite sides: the edge spans the whole band
            left = _intersect_x(prev, curr, -d, eps)
            right = _intersect_x(prev, curr, d, eps)
            if left is not None and right is not None:
                if prev[0] < curr[0]:
                    segments.append(np.array([left, right]))
                else:
                    segments.append(np.array([right, left]))

    if len(current) >= 2:
        segments.append(np.array(current))

    return segments
