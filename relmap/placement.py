"""Initial orbit radius and angle for a single entity."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .buckets import Bucket, clamp_similarity, similarity_range
from .model import RadiusBand
from .options import LayoutOptions


def _centered(rng: Optional[np.random.Generator]) -> float:
    # Uniform sample in [-0.5, 0.5).
    if rng is None:
        return 0.0
    return float(rng.random()) - 0.5


def node_size(similarity: float, options: LayoutOptions) -> float:
    """Rendered diameter of a node; more similar entities are drawn larger."""

    s = clamp_similarity(similarity)
    return options.node_base_size + options.node_size_boost * s ** options.node_size_exponent


def radius_in_bucket(
    score: float,
    bucket: Bucket,
    index: int,
    total: int,
    band: RadiusBand,
    options: LayoutOptions,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """Map a score to an orbit radius inside ``band``.

    Higher scores within the bucket sit near the inner edge; the easing curve
    bunches them there. Three offsets fan out entities with equal scores: an
    index term, a term hashed from the score itself and a bounded jitter drawn
    from ``rng``. The jitter terms vanish when ``options.jitter`` is zero or no
    generator is given. Offsets that overshoot an edge fold back into the band,
    so ties at a bucket threshold still fan out instead of stacking on one ring.
    """

    s = clamp_similarity(score)
    lo, hi = similarity_range(bucket, options.thresholds)
    t = min(1.0, max(0.0, (s - lo) / (hi - lo))) if hi > lo else 0.0

    eased = 1.0 - t ** options.easing_exponent
    width = band.width
    base = band.min + width * eased

    index_offset = (index % options.index_modulus) * width * options.index_step
    hash_offset = ((s * 1000.0) % 1.0) * width * options.hash_fraction

    jitter_offset = 0.0
    density_offset = 0.0
    if options.jitter > 0.0 and rng is not None:
        jitter_offset = _centered(rng) * width * options.jitter_fraction * options.jitter
        if total > options.density_threshold:
            density_offset = _centered(rng) * width * options.density_fraction * options.jitter

    return band.fold(base + index_offset + hash_offset + jitter_offset + density_offset)


def assign_angle(
    index: int,
    total: int,
    options: LayoutOptions,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """Spread a bucket's entities evenly around the circle with a small jitter."""

    total = max(1, total)
    angle = (index / total) * 2.0 * math.pi
    if options.jitter > 0.0 and rng is not None:
        angle += _centered(rng) * options.angle_jitter * options.jitter
    return angle


__all__ = ["assign_angle", "node_size", "radius_in_bucket"]
