"""Summary statistics over the similarity scores of one layout call."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .buckets import clamp_similarity
from .model import DistributionStats

FALLBACK_STATS = DistributionStats(mean=0.5, std_dev=0.2, min=0.0, max=1.0)


def analyze_distribution(similarities: Iterable[object]) -> DistributionStats:
    """Return mean, population standard deviation, min and max of ``similarities``.

    An empty input yields :data:`FALLBACK_STATS` so callers always receive
    usable numbers.
    """

    values = np.fromiter((clamp_similarity(s) for s in similarities), dtype=float)
    if values.size == 0:
        return FALLBACK_STATS
    return DistributionStats(
        mean=float(values.mean()),
        std_dev=float(values.std(ddof=0)),
        min=float(values.min()),
        max=float(values.max()),
    )


__all__ = ["FALLBACK_STATS", "analyze_distribution"]
