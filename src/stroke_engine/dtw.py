"""Dynamic Time Warping over scalar feature sequences."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

SimilarityFn = Callable[[float, float], float]


def dtw_similarity(
    seq1: Sequence[float],
    seq2: Sequence[float],
    similarity_fn: SimilarityFn,
) -> float:
    """Align two sequences and return a similarity score.

    Uses O(N*M) DP where each cell costs ``1 - similarity_fn(a, b)`` and
    advances by insertion, deletion or match. The accumulated cost is
    normalized by the longer sequence, so identical sequences score 1.

    Two empty sequences score 1, exactly one empty sequence scores 0. The
    score is not clamped: a ``similarity_fn`` outside [0, 1] can push it out
    of range and callers clamp where they need to.
    """
    m, n = len(seq1), len(seq2)
    if m == 0 or n == 0:
        return 1.0 if m == n else 0.0

    cost = np.full((m + 1, n + 1), float("inf"), dtype=np.float64)
    cost[0, 0] = 0.0

    for i in range(1, m + 1):
        a = float(seq1[i - 1])
        for j in range(1, n + 1):
            d = 1.0 - similarity_fn(a, float(seq2[j - 1]))
            cost[i, j] = d + min(cost[i - 1, j], cost[i, j - 1], cost[i - 1, j - 1])

    return float(1.0 - cost[m, n] / max(m, n))
