"""Douglas-Peucker curve simplification for raw pointer strokes."""

from __future__ import annotations

import numpy as np

from stroke_engine.geometry import as_points, point_to_segment_distance


def _douglas_peucker(points: np.ndarray, tolerance: float) -> np.ndarray:
    if len(points) <= 2:
        return points.copy()

    keep = np.zeros(len(points), dtype=bool)
    keep[0] = keep[-1] = True

    # Pending (start, end) index ranges; a loop instead of recursion so long
    # strokes cannot exhaust the interpreter stack
    stack = [(0, len(points) - 1)]
    while stack:
        start, end = stack.pop()
        first, last = points[start], points[end]
        max_distance = 0.0
        max_index = start

        # Strict comparison keeps the lowest index on ties
        for i in range(start + 1, end):
            d = point_to_segment_distance(points[i], first, last)
            if d > max_distance:
                max_distance = d
                max_index = i

        if max_distance <= tolerance or max_index == start:
            continue

        keep[max_index] = True
        stack.append((max_index, end))
        stack.append((start, max_index))

    return points[keep]


def simplify_trajectory(points, tolerance: float = 10.0) -> np.ndarray:
    """Reduce a stroke to a sparser polyline within ``tolerance``.

    Args:
        points: Ordered trajectory (anything ``as_points`` accepts).
        tolerance: Maximum allowed perpendicular deviation, in input units.

    Returns:
        A new (M, 2) array, an order-preserving subsequence of the input that
        always keeps the first and last point. Inputs with two or fewer points
        come back unchanged.
    """
    return _douglas_peucker(as_points(points), tolerance)
