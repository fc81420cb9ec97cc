"""Caller-owned point buffer for a stroke being captured.

Usage:
    stroke = StrokeBuffer()
    # In the pointer-move handler:
    stroke.add_point((event.x, event.y))
    # On release:
    best = library.recognize(stroke.points)
    stroke.clear()
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from stroke_engine.geometry import Point, as_points
from stroke_engine.simplify import simplify_trajectory


class StrokeBuffer:
    """Ordered, growable list of samples for one in-progress stroke.

    Each capture session owns its own buffer; ``points`` hands out an
    independent snapshot so matching never sees later mutations.
    """

    def __init__(self, points=None):
        self._points: list[Point] = [Point(float(x), float(y)) for x, y in as_points(points)]

    def add_point(self, point):
        """Append a sample (Point, (x, y) pair or {"x", "y"} mapping)."""
        x, y = as_points([point])[0]
        self._points.append(Point(float(x), float(y)))

    def pop_point(self) -> Optional[Point]:
        """Remove and return the most recent sample, None when empty."""
        if not self._points:
            return None
        return self._points.pop()

    def clear(self):
        self._points = []

    @property
    def points(self) -> np.ndarray:
        """Snapshot of the stroke as a fresh (N, 2) array."""
        return as_points(self._points)

    @property
    def is_empty(self) -> bool:
        return not self._points

    def simplified(self, tolerance: float = 10.0) -> np.ndarray:
        """Douglas-Peucker pruned snapshot of the stroke."""
        return simplify_trajectory(self._points, tolerance)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(list(self._points))
