"""Per-bucket orbit bands derived from the similarity distribution."""

from __future__ import annotations

import logging
import math
from typing import Dict, Mapping, Tuple

from .buckets import Bucket
from .model import DistributionStats, RadiusBand
from .options import LayoutOptions

logger = logging.getLogger(__name__)

Bands = Dict[Bucket, RadiusBand]


def spread_factor(stats: DistributionStats, options: LayoutOptions) -> float:
    """Concentrated distributions (low std-dev) get wider bands."""

    return max(options.spread_floor, options.spread_base - stats.std_dev)


def scale_factor(stats: DistributionStats, options: LayoutOptions) -> float:
    """Low-mean distributions push the whole layout outward."""

    return options.low_mean_scale if stats.mean < options.low_mean_cutoff else options.default_scale


def _separate_bands(bands: Bands, gap: float) -> Bands:
    # Cap each max below the next band's min; a band may collapse onto its min.
    order = Bucket.ordered()
    separated: Bands = {}
    for idx, bucket in enumerate(order):
        band = bands[bucket]
        upper = band.max
        if idx + 1 < len(order):
            ceiling = bands[order[idx + 1]].min - gap
            if upper > ceiling:
                logger.debug(
                    "Capping %s band max %.2f at %.2f to keep tiers apart", bucket.value, upper, ceiling
                )
                upper = ceiling
        separated[bucket] = RadiusBand(band.min, max(band.min, upper))
    return separated


def compute_radius_bands(stats: DistributionStats, options: LayoutOptions) -> Bands:
    """Scale the base bands by the distribution and keep them ordered and disjoint."""

    spread = spread_factor(stats, options)
    scale = scale_factor(stats, options)
    scaled: Bands = {}
    for bucket in Bucket.ordered():
        lo, hi = options.base_bands[bucket]
        scaled[bucket] = RadiusBand(lo * scale, hi * scale * spread)
    bands = _separate_bands(scaled, options.band_gap)
    logger.debug(
        "Radius bands (spread=%.3f scale=%.3f): %s",
        spread,
        scale,
        {b.value: (round(band.min, 2), round(band.max, 2)) for b, band in bands.items()},
    )
    return bands


def _required_annulus_area(count: int, node_radius: float, options: LayoutOptions) -> float:
    footprint = node_radius + options.padding / 2.0
    return count * math.pi * footprint * footprint / options.packing_density


def expand_bands_for_crowding(
    bands: Mapping[Bucket, RadiusBand],
    demand: Mapping[Bucket, Tuple[int, float]],
    options: LayoutOptions,
) -> Bands:
    """Grow crowded bands outward so their annulus can hold every node.

    ``demand`` maps a bucket to ``(count, largest node radius)``. Whenever a
    band is enlarged, every band outside it moves out by the same amount, so
    gaps and ordering are untouched.
    """

    expanded: Bands = {}
    shift = 0.0
    for bucket in Bucket.ordered():
        band = bands[bucket]
        lo = band.min + shift
        hi = band.max + shift
        count, node_radius = demand.get(bucket, (0, 0.0))
        if count > 0:
            needed = _required_annulus_area(count, node_radius, options)
            available = math.pi * (hi * hi - lo * lo)
            if available < needed:
                new_hi = math.sqrt(needed / math.pi + lo * lo)
                logger.info(
                    "Expanding crowded %s band (%d node(s)) from %.1f to %.1f px",
                    bucket.value,
                    count,
                    hi,
                    new_hi,
                )
                shift += new_hi - hi
                hi = new_hi
        expanded[bucket] = RadiusBand(lo, hi)
    return expanded


__all__ = [
    "Bands",
    "compute_radius_bands",
    "expand_bands_for_crowding",
    "scale_factor",
    "spread_factor",
]
