"""YAML configuration for match options.

Example ``matching.yml``:

    match:
      angle_threshold: 0.7854
      min_similarity: 0.8
      key_point_options:
        min_angle_change: 0.3491

The ``match:`` wrapper is optional; a bare mapping of options works too.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from stroke_engine.matcher import MatchOptions

logger = logging.getLogger("stroke_engine.config")


def load_options(path: str | Path) -> MatchOptions:
    """Load and validate match options from a YAML file.

    Missing fields take their defaults. Raises ValueError for invalid values.
    """
    with open(path) as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(config).__name__}")

    section = config.get("match", config)
    if not isinstance(section, dict):
        raise ValueError(f"Expected 'match' to be a mapping in {path}")

    options = MatchOptions.from_dict(section).validate()
    logger.debug("Loaded match options from %s", path)
    return options


def save_options(options: MatchOptions, path: str | Path):
    """Write match options to a YAML file under a ``match:`` key."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump({"match": options.to_dict()}, f, default_flow_style=False, sort_keys=False)
