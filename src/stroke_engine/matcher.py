"""Top-level stroke matching.

Usage:
    result = match_trajectories(drawn, reference)
    if result.is_matched:
        print(f"Matched (similarity={result.similarity:.2f})")

    # Tighter verdict, everything else default:
    result = match_trajectories(drawn, reference, MatchOptions(min_similarity=0.85))
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional, Union

from stroke_engine.dtw import dtw_similarity
from stroke_engine.features import extract_features
from stroke_engine.geometry import angle_difference, as_points, get_vector
from stroke_engine.keypoints import KeyPointOptions
from stroke_engine.shape import compare_shapes

logger = logging.getLogger("stroke_engine.matcher")

DIRECTION_WEIGHT = 0.4
RELATIVE_ANGLE_WEIGHT = 0.3
SHAPE_WEIGHT = 0.3


@dataclass
class MatchOptions:
    """Thresholds and weights for one match call."""
    angle_threshold: float = math.pi / 4  # radians
    length_tolerance: float = 0.3  # reserved, not part of the score
    min_similarity: float = 0.75
    turn_count_penalty: float = 0.1
    key_point_options: KeyPointOptions = field(default_factory=KeyPointOptions)

    def merged(self, **overrides: Any) -> MatchOptions:
        """Copy with the given fields replaced."""
        return replace(self, **overrides)

    def validate(self) -> MatchOptions:
        """Raise ValueError on values the scoring formula cannot use."""
        if self.angle_threshold <= 0:
            raise ValueError(f"angle_threshold must be positive, got {self.angle_threshold}")
        if not 0.0 <= self.min_similarity <= 1.0:
            raise ValueError(f"min_similarity must be in [0, 1], got {self.min_similarity}")
        if self.turn_count_penalty < 0:
            raise ValueError(f"turn_count_penalty must be >= 0, got {self.turn_count_penalty}")
        if self.length_tolerance < 0:
            raise ValueError(f"length_tolerance must be >= 0, got {self.length_tolerance}")
        kp = self.key_point_options
        if kp.min_angle_change <= 0:
            raise ValueError(f"min_angle_change must be positive, got {kp.min_angle_change}")
        if kp.min_segment_ratio < 0:
            raise ValueError(f"min_segment_ratio must be >= 0, got {kp.min_segment_ratio}")
        return self

    def to_dict(self) -> dict:
        return {
            "angle_threshold": self.angle_threshold,
            "length_tolerance": self.length_tolerance,
            "min_similarity": self.min_similarity,
            "turn_count_penalty": self.turn_count_penalty,
            "key_point_options": self.key_point_options.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> MatchOptions:
        """Build options from a partial dict, defaults filling the gaps."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown match options: %s", ", ".join(unknown))

        kwargs = {k: float(v) for k, v in data.items() if k in known and k != "key_point_options"}
        kp = data.get("key_point_options")
        if isinstance(kp, KeyPointOptions):
            kwargs["key_point_options"] = kp
        elif kp is not None:
            kwargs["key_point_options"] = KeyPointOptions.from_dict(kp)
        return cls(**kwargs)


@dataclass(frozen=True)
class MatchResult:
    """Verdict for one pair of strokes."""
    is_matched: bool
    similarity: float  # 0-1, higher = closer


NO_MATCH = MatchResult(is_matched=False, similarity=0.0)


def _resolve_options(options: Union[MatchOptions, dict, None]) -> MatchOptions:
    if options is None:
        return MatchOptions()
    if not isinstance(options, MatchOptions):
        options = MatchOptions.from_dict(options)
    return options.validate()


def match_trajectories(
    t1,
    t2,
    options: Union[MatchOptions, dict, None] = None,
) -> MatchResult:
    """Compare two strokes and decide whether they are the same gesture.

    Args:
        t1, t2: Ordered trajectories (anything ``as_points`` accepts, or None).
        options: ``MatchOptions`` or a partial dict merged over the defaults.

    Returns:
        MatchResult with similarity clamped to [0, 1]. Missing strokes or
        strokes with fewer than two points never match.

    Raises:
        ValueError: If the options fail ``MatchOptions.validate``, e.g. a
            non-positive ``angle_threshold``.
    """
    opts = _resolve_options(options)

    if t1 is None or t2 is None:
        return NO_MATCH
    p1, p2 = as_points(t1), as_points(t2)
    if len(p1) < 2 or len(p2) < 2:
        return NO_MATCH

    threshold = opts.angle_threshold

    # Two straight segments: heading is all there is to compare
    if len(p1) == 2 and len(p2) == 2:
        v1 = get_vector(p1[0], p1[1])
        v2 = get_vector(p2[0], p2[1])
        similarity = math.exp(-abs(angle_difference(v1.angle, v2.angle)) / threshold)
        return MatchResult(is_matched=similarity >= opts.min_similarity, similarity=similarity)

    f1 = extract_features(p1, opts.key_point_options)
    f2 = extract_features(p2, opts.key_point_options)

    turn_penalty = math.exp(-abs(f1.turn_count - f2.turn_count) * opts.turn_count_penalty)

    direction_similarity = dtw_similarity(
        f1.direction_sequence,
        f2.direction_sequence,
        lambda a, b: math.exp(-abs(angle_difference(a, b)) / threshold),
    )

    # Relative turns get half the angular tolerance of headings
    angle_similarity = dtw_similarity(
        f1.relative_angles,
        f2.relative_angles,
        lambda a, b: math.exp(-abs(a - b) / (threshold * 0.5)),
    )

    shape_similarity = compare_shapes(f1.normalized_points, f2.normalized_points, threshold)

    base = (
        DIRECTION_WEIGHT * direction_similarity
        + RELATIVE_ANGLE_WEIGHT * angle_similarity
        + SHAPE_WEIGHT * shape_similarity
    )
    similarity = max(0.0, min(1.0, base * turn_penalty))

    logger.debug(
        "direction=%.3f angle=%.3f shape=%.3f turns=%d/%d -> %.3f",
        direction_similarity, angle_similarity, shape_similarity,
        f1.turn_count, f2.turn_count, similarity,
    )

    return MatchResult(is_matched=similarity >= opts.min_similarity, similarity=similarity)
