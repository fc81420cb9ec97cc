"""Shape comparison of normalized key-point polylines.

Three signals, weighted into one score:
- path: DTW over the flattened (x, y, x, y, ...) coordinate stream
- direction: cosine similarity of 8-bin heading histograms
- angle: fraction of key points whose outgoing heading agrees
"""

from __future__ import annotations

import math

import numpy as np

from stroke_engine.dtw import dtw_similarity
from stroke_engine.geometry import TWO_PI, angle_difference, as_points, get_vector

PATH_WEIGHT = 0.5
DIRECTION_WEIGHT = 0.3
ANGLE_WEIGHT = 0.2

HISTOGRAM_BINS = 8


def direction_histogram(points) -> np.ndarray:
    """Segment headings binned into 8 sectors of pi/4, normalized by segment count."""
    pts = as_points(points)
    bins = np.zeros(HISTOGRAM_BINS, dtype=np.float64)
    if len(pts) < 2:
        return bins

    deltas = np.diff(pts, axis=0)
    angles = np.arctan2(deltas[:, 1], deltas[:, 0]) % TWO_PI
    # % guards the rare float rounding of 2*pi - eps up to the last edge
    idx = np.floor(angles / (TWO_PI / HISTOGRAM_BINS)).astype(int) % HISTOGRAM_BINS
    bins += np.bincount(idx, minlength=HISTOGRAM_BINS)
    return bins / len(deltas)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine of the angle between two vectors, 0 if either has zero norm."""
    norm = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    if norm <= 0:
        return 0.0
    return float(np.dot(a, b)) / norm


def compare_key_point_angles(points1, points2, threshold: float) -> float:
    """Fraction of index-aligned outgoing headings within ``threshold``.

    Divided by the longer sequence, so an unmatched tail counts as misses.
    """
    p1, p2 = as_points(points1), as_points(points2)
    longest = max(len(p1), len(p2))
    if longest == 0:
        return 0.0

    matches = 0
    for i in range(min(len(p1), len(p2))):
        v1 = get_vector(p1[i], p1[min(i + 1, len(p1) - 1)])
        v2 = get_vector(p2[i], p2[min(i + 1, len(p2) - 1)])
        if abs(angle_difference(v1.angle, v2.angle)) <= threshold:
            matches += 1

    return matches / longest


def _coordinate_similarity(a: float, b: float) -> float:
    return math.exp(-abs(a - b))


def compare_shapes(points1, points2, angle_threshold: float) -> float:
    """Weighted shape score of two normalized polylines (1 = same shape)."""
    p1, p2 = as_points(points1), as_points(points2)

    path_similarity = dtw_similarity(p1.ravel(), p2.ravel(), _coordinate_similarity)
    direction_similarity = cosine_similarity(direction_histogram(p1), direction_histogram(p2))
    angle_similarity = compare_key_point_angles(p1, p2, angle_threshold)

    return (
        PATH_WEIGHT * path_similarity
        + DIRECTION_WEIGHT * direction_similarity
        + ANGLE_WEIGHT * angle_similarity
    )
