"""Adaptive key-point detection.

Walks a stroke and keeps the samples where the heading has turned far
enough (accumulated since the last key point, so gentle curves register too)
or where a long straight run has built up. A second distance-based pass then
drops key points that crowd each other relative to the gesture's scale.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields
from typing import Optional

import numpy as np

from stroke_engine.geometry import (
    angle_difference,
    as_points,
    get_distance,
    get_vector,
    path_length,
)

logger = logging.getLogger("stroke_engine.keypoints")

# Floor for the minimum segment length on near-point strokes
MIN_SEGMENT_EPSILON = 0.001


@dataclass
class KeyPointOptions:
    """Tunables for key-point detection."""
    min_angle_change: float = math.pi / 9  # radians
    min_segment_ratio: float = 0.15  # fraction of total path length

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> KeyPointOptions:
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown key-point options: %s", ", ".join(unknown))
        return cls(**{k: float(v) for k, v in data.items() if k in known})


def simplify_key_points(points, min_dist: float) -> np.ndarray:
    """Drop key points that sit too close to their predecessor.

    The pruning distance is ``min_dist`` scaled by a dynamic factor
    ``min(0.6, 0.3 * avg_spacing / min_dist)``. Each interior point is tested
    against the previous point of the *input* list, in a single pass.
    """
    pts = as_points(points)
    if len(pts) <= 2 or min_dist <= 0:
        return pts

    avg_spacing = path_length(pts) / (len(pts) - 1)
    dynamic_factor = min(0.6, 0.3 * (avg_spacing / min_dist))
    threshold = min_dist * dynamic_factor

    last = len(pts) - 1
    keep = [
        i == 0 or i == last or get_distance(pts[i], pts[i - 1]) >= threshold
        for i in range(len(pts))
    ]
    return pts[np.array(keep, dtype=bool)]


def extract_key_points(points, options: Optional[KeyPointOptions] = None) -> np.ndarray:
    """Reduce a stroke to its turn points and long-run anchors.

    Args:
        points: Ordered trajectory.
        options: Detection tunables; defaults when omitted.

    Returns:
        (K, 2) array starting with the first and ending with the last input
        point. Empty for fewer than two points.
    """
    opts = options or KeyPointOptions()
    pts = as_points(points)

    if len(pts) < 2:
        return np.empty((0, 2), dtype=np.float64)
    if len(pts) == 2:
        return pts

    min_segment_length = max(path_length(pts) * opts.min_segment_ratio, MIN_SEGMENT_EPSILON)

    key_points = [pts[0]]
    last_vector = get_vector(pts[0], pts[1])
    accumulated_angle = 0.0

    for i in range(2, len(pts)):
        current = get_vector(pts[i - 1], pts[i])
        accumulated_angle += abs(angle_difference(last_vector.angle, current.angle))
        segment_length = get_distance(key_points[-1], pts[i])

        if accumulated_angle > opts.min_angle_change or segment_length > min_segment_length:
            key_points.append(pts[i - 1])
            last_vector = current
            accumulated_angle = 0.0

    key_points.append(pts[-1])
    return simplify_key_points(np.array(key_points, dtype=np.float64), min_segment_length)
