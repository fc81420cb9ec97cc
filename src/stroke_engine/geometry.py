"""Geometry primitives shared by every stage of the matcher.

Trajectories travel through the engine as ``float64`` arrays of shape (N, 2).
``as_points`` is the single conversion point from whatever the capture layer
hands over (Point objects, (x, y) pairs, {"x", "y"} mappings or arrays).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import numpy as np

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class Point:
    """A single 2D sample in screen or normalized space."""
    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Vector:
    """Displacement between two points."""
    dx: float
    dy: float
    angle: float  # radians in (-pi, pi], 0 for zero-length vectors
    distance: float


ZERO_VECTOR = Vector(0.0, 0.0, 0.0, 0.0)


def _coords(p: Any) -> tuple[float, float]:
    if isinstance(p, Point):
        return p.x, p.y
    if isinstance(p, dict):
        return float(p["x"]), float(p["y"])
    if hasattr(p, "x") and hasattr(p, "y"):
        return float(p.x), float(p.y)
    x, y = p
    return float(x), float(y)


def as_points(points: Optional[Iterable[Any]]) -> np.ndarray:
    """Convert a trajectory into a fresh (N, 2) float64 array.

    ``None`` and empty input both yield an empty (0, 2) array. The result
    never shares memory with the input.
    """
    if points is None:
        return np.empty((0, 2), dtype=np.float64)

    if isinstance(points, np.ndarray):
        if points.size == 0:
            return np.empty((0, 2), dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"Expected an (N, 2) array, got shape {points.shape}")
        return np.array(points, dtype=np.float64, copy=True)

    coords = [_coords(p) for p in points]
    if not coords:
        return np.empty((0, 2), dtype=np.float64)
    return np.array(coords, dtype=np.float64)


def get_distance(p1, p2) -> float:
    """Euclidean distance, 0 when either point is missing."""
    if p1 is None or p2 is None:
        return 0.0
    return math.hypot(float(p2[0]) - float(p1[0]), float(p2[1]) - float(p1[1]))


def get_vector(start, end) -> Vector:
    """Vector from ``start`` to ``end``; zero vector when either is missing."""
    if start is None or end is None:
        return ZERO_VECTOR
    dx = float(end[0]) - float(start[0])
    dy = float(end[1]) - float(start[1])
    distance = math.hypot(dx, dy)
    if distance > 0:
        angle = math.atan2(dy, dx)
        if angle == -math.pi:
            angle = math.pi
    else:
        angle = 0.0
    return Vector(dx, dy, angle, distance)


def angle_difference(a: float, b: float) -> float:
    """Signed difference ``b - a`` wrapped into (-pi, pi].

    Python's ``%`` is floored, so the intermediate is already in [0, 2*pi);
    only the lower boundary needs folding onto +pi.
    """
    diff = (b - a + math.pi) % TWO_PI - math.pi
    if diff <= -math.pi:
        diff += TWO_PI
    return diff


def path_length(points: np.ndarray) -> float:
    """Total polyline length."""
    if len(points) < 2:
        return 0.0
    return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))


def centroid(points: np.ndarray) -> np.ndarray:
    """Arithmetic mean of all points (origin for an empty trajectory)."""
    if len(points) == 0:
        return np.zeros(2, dtype=np.float64)
    return points.mean(axis=0)


def point_to_segment_distance(point, seg_start, seg_end) -> float:
    """Distance from ``point`` to the segment [seg_start, seg_end].

    The projection parameter is clamped to [0, 1], so points beyond the
    segment's span measure to the nearest endpoint.
    """
    px, py = float(point[0]), float(point[1])
    ax, ay = float(seg_start[0]), float(seg_start[1])
    cx = float(seg_end[0]) - ax
    cy = float(seg_end[1]) - ay

    len_sq = cx * cx + cy * cy
    if len_sq == 0:
        return math.hypot(px - ax, py - ay)

    t = ((px - ax) * cx + (py - ay) * cy) / len_sq
    t = min(1.0, max(0.0, t))
    return math.hypot(px - (ax + t * cx), py - (ay + t * cy))
