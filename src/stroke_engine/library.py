"""Library of reference gestures and best-match recognition.

Usage:
    library = GestureLibrary.with_defaults()
    best = library.recognize(stroke.points)
    if best:
        print(f"Gesture: {best.name} (similarity={best.similarity:.2f})")

    # Custom reference stroke:
    library.register(GestureTemplate(name="zigzag", points=recorded_points))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from stroke_engine.geometry import as_points
from stroke_engine.matcher import MatchOptions, match_trajectories
from stroke_engine.simplify import simplify_trajectory

logger = logging.getLogger("stroke_engine.library")

# Unit headings in screen coordinates (y grows downward)
DIRECTIONS: dict[str, tuple[float, float]] = {
    "Up": (0.0, -1.0),
    "Down": (0.0, 1.0),
    "Left": (-1.0, 0.0),
    "Right": (1.0, 0.0),
}

DIRECTION_STROKES: dict[str, tuple[str, ...]] = {
    "Up": ("Up",),
    "Down": ("Down",),
    "Left": ("Left",),
    "Right": ("Right",),
    "UpDown": ("Up", "Down"),
    "UpLeft": ("Up", "Left"),
    "UpRight": ("Up", "Right"),
    "DownUp": ("Down", "Up"),
    "DownLeft": ("Down", "Left"),
    "DownRight": ("Down", "Right"),
    "LeftRight": ("Left", "Right"),
    "LeftUp": ("Left", "Up"),
    "LeftDown": ("Left", "Down"),
    "RightLeft": ("Right", "Left"),
    "RightUp": ("Right", "Up"),
    "RightDown": ("Right", "Down"),
}


def direction_stroke(directions, arm_length: float = 100.0, steps: int = 16) -> np.ndarray:
    """Densely sampled polyline following named ``directions`` from the origin."""
    vertices = [np.zeros(2, dtype=np.float64)]
    for name in directions:
        vertices.append(vertices[-1] + arm_length * np.asarray(DIRECTIONS[name], dtype=np.float64))

    samples = []
    for start, end in zip(vertices[:-1], vertices[1:]):
        t = np.arange(steps, dtype=np.float64)[:, None] / steps
        samples.append(start + t * (end - start))
    samples.append(vertices[-1][None, :])
    return np.concatenate(samples)


@dataclass
class GestureTemplate:
    """A named reference stroke."""
    name: str
    points: np.ndarray  # shape (N, 2)
    min_similarity: Optional[float] = None  # overrides the library threshold
    description: str = ""

    def __post_init__(self):
        self.points = as_points(self.points)


@dataclass(frozen=True)
class GestureMatch:
    """Outcome of comparing a stroke with one template."""
    name: str
    similarity: float
    is_matched: bool


class GestureLibrary:
    """Registry of reference gestures.

    A stroke is matched against every template; the best positive verdict
    wins. With ``simplify_tolerance`` set, both the stroke and each template
    are Douglas-Peucker pruned before matching; templates once, at
    registration.
    """

    def __init__(
        self,
        options: Optional[MatchOptions] = None,
        simplify_tolerance: Optional[float] = None,
    ):
        self.options = options or MatchOptions()
        self._simplify_tolerance = simplify_tolerance
        self._templates: dict[str, GestureTemplate] = {}
        self._prepared: dict[str, np.ndarray] = {}

    @property
    def simplify_tolerance(self) -> Optional[float]:
        return self._simplify_tolerance

    def register(self, template: GestureTemplate):
        """Add a template, replacing any existing one with the same name."""
        if template.name in self._templates:
            logger.warning("Gesture '%s' already registered, replacing", template.name)
        self._templates[template.name] = template
        self._prepared[template.name] = self._prepare(template.points)
        logger.info("Registered gesture: %s (%d points)", template.name, len(template.points))

    def unregister(self, name: str) -> bool:
        """Remove a template. Returns False if it was not registered."""
        self._prepared.pop(name, None)
        return self._templates.pop(name, None) is not None

    def get(self, name: str) -> Optional[GestureTemplate]:
        return self._templates.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._templates.keys())

    def _prepare(self, points) -> np.ndarray:
        if self._simplify_tolerance is None:
            return as_points(points)
        return simplify_trajectory(points, self._simplify_tolerance)

    def match_all(self, points) -> list[GestureMatch]:
        """Score a stroke against every template, best first."""
        stroke = self._prepare(points)
        results = []
        for template in self._templates.values():
            opts = self.options
            if template.min_similarity is not None:
                opts = opts.merged(min_similarity=template.min_similarity)
            result = match_trajectories(stroke, self._prepared[template.name], opts)
            results.append(GestureMatch(
                name=template.name,
                similarity=result.similarity,
                is_matched=result.is_matched,
            ))

        results.sort(key=lambda m: m.similarity, reverse=True)
        return results

    def recognize(self, points) -> Optional[GestureMatch]:
        """Best matching gesture for a finished stroke, or None."""
        for candidate in self.match_all(points):
            if candidate.is_matched:
                logger.debug("Recognized %s (similarity=%.3f)", candidate.name, candidate.similarity)
                return candidate
        return None

    @classmethod
    def with_defaults(cls, **kwargs) -> GestureLibrary:
        """Create a library with the built-in direction strokes."""
        library = cls(**kwargs)
        for name, directions in DIRECTION_STROKES.items():
            library.register(GestureTemplate(
                name=name,
                points=direction_stroke(directions),
                description=" then ".join(d.lower() for d in directions),
            ))
        return library

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[GestureTemplate]:
        return iter(list(self._templates.values()))

    def __contains__(self, name: str) -> bool:
        return name in self._templates
