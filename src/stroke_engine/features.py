"""Trajectory normalization and feature extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from stroke_engine.geometry import (
    angle_difference,
    as_points,
    centroid,
    get_vector,
    path_length,
)
from stroke_engine.keypoints import KeyPointOptions, extract_key_points

# Below this path length the stroke is treated as a dot and left unscaled
MIN_SCALE_LENGTH = 0.001


def normalize_trajectory(points) -> np.ndarray:
    """Center on the centroid and scale so the path length is ~1.

    Invariant to uniform translation and positive scaling of the input.
    Returns an empty array for fewer than two points.
    """
    pts = as_points(points)
    if len(pts) < 2:
        return np.empty((0, 2), dtype=np.float64)

    total = path_length(pts)
    scale = 1.0 / total if total > MIN_SCALE_LENGTH else 1.0
    return (pts - centroid(pts)) * scale


def _empty() -> np.ndarray:
    return np.empty((0, 2), dtype=np.float64)


@dataclass
class TrajectoryFeatures:
    """Features derived from one stroke for a single match call."""
    direction_sequence: list[float] = field(default_factory=list)  # segment headings
    relative_angles: list[float] = field(default_factory=list)  # signed turns
    normalized_points: np.ndarray = field(default_factory=_empty)
    key_points: np.ndarray = field(default_factory=_empty)
    turn_count: int = 0


def extract_features(points, key_point_options: Optional[KeyPointOptions] = None) -> TrajectoryFeatures:
    """Compute direction, turn and shape features of a stroke.

    Two-point strokes skip key-point detection: the single heading is the
    whole direction sequence. Longer strokes are reduced to key points,
    normalized, and walked segment by segment.
    """
    opts = key_point_options or KeyPointOptions()
    pts = as_points(points)

    if len(pts) < 2:
        return TrajectoryFeatures()

    if len(pts) == 2:
        return TrajectoryFeatures(
            direction_sequence=[get_vector(pts[0], pts[1]).angle],
            normalized_points=normalize_trajectory(pts),
            key_points=pts,
        )

    key_points = extract_key_points(pts, opts)
    normalized = normalize_trajectory(key_points)

    directions: list[float] = []
    relative_angles: list[float] = []
    turn_count = 0

    for i in range(1, len(normalized)):
        heading = get_vector(normalized[i - 1], normalized[i]).angle
        if directions:
            turn = angle_difference(directions[-1], heading)
            relative_angles.append(turn)
            if abs(turn) >= opts.min_angle_change:
                turn_count += 1
        directions.append(heading)

    return TrajectoryFeatures(
        direction_sequence=directions,
        relative_angles=relative_angles,
        normalized_points=normalized,
        key_points=key_points,
        turn_count=turn_count,
    )
