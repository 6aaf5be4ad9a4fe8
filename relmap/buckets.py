"""Similarity tiers used to pick a coarse radial band."""

from __future__ import annotations

import enum
import logging
import math
from typing import Tuple

logger = logging.getLogger(__name__)

Thresholds = Tuple[float, float, float]

DEFAULT_THRESHOLDS: Thresholds = (0.72, 0.60, 0.40)


class Bucket(enum.Enum):
    """Ordered similarity tiers, closest to the focus first."""

    CLOSEST = "closest"
    NEAR = "near"
    FAR = "far"
    FARTHEST = "farthest"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def ordered(cls) -> Tuple["Bucket", ...]:
        return _ORDER


_ORDER: Tuple[Bucket, ...] = (Bucket.CLOSEST, Bucket.NEAR, Bucket.FAR, Bucket.FARTHEST)

_LABELS = {
    Bucket.CLOSEST: "Excellent",
    Bucket.NEAR: "Good",
    Bucket.FAR: "Fair",
    Bucket.FARTHEST: "Poor",
}


def clamp_similarity(value: object) -> float:
    """Coerce ``value`` into ``[0, 1]``; NaN and non-numeric input map to ``0.0``."""

    try:
        score = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.debug("Non-numeric similarity %r treated as 0.0", value)
        return 0.0
    if math.isnan(score):
        logger.debug("NaN similarity treated as 0.0")
        return 0.0
    if score < 0.0 or score > 1.0:
        logger.debug("Similarity %s clamped into [0, 1]", score)
    return max(0.0, min(1.0, score))


def classify(score: object, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> Bucket:
    """Map a similarity score onto its bucket. Lower bounds are inclusive."""

    s = clamp_similarity(score)
    tau1, tau2, tau3 = thresholds
    if s >= tau1:
        return Bucket.CLOSEST
    if s >= tau2:
        return Bucket.NEAR
    if s >= tau3:
        return Bucket.FAR
    return Bucket.FARTHEST


def similarity_range(bucket: Bucket, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> Tuple[float, float]:
    """Return the ``(lo, hi)`` similarity sub-range owned by ``bucket``."""

    tau1, tau2, tau3 = thresholds
    bounds = {
        Bucket.CLOSEST: (tau1, 1.0),
        Bucket.NEAR: (tau2, tau1),
        Bucket.FAR: (tau3, tau2),
        Bucket.FARTHEST: (0.0, tau3),
    }
    return bounds[bucket]


__all__ = [
    "Bucket",
    "DEFAULT_THRESHOLDS",
    "Thresholds",
    "classify",
    "clamp_similarity",
    "similarity_range",
]
