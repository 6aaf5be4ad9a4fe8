"""Relation-map layout façade wiring buckets, bands, placement and relaxation."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .bands import compute_radius_bands, expand_bands_for_crowding
from .buckets import Bucket, clamp_similarity, classify
from .collision import OrbitNode, resolve_collisions
from .logging_utils import apply_debug_logging
from .model import FocusEntity, LayoutResult, PositionedEntity, RelatedEntity
from .options import LayoutOptions
from .placement import assign_angle, node_size, radius_in_bucket
from .prng import DEFAULT_SEED, seeded_rng
from .stats import analyze_distribution

logger = logging.getLogger(__name__)

EntityLike = Union[RelatedEntity, Mapping[str, Any]]


def _coerce_entity(entity: EntityLike) -> RelatedEntity:
    if isinstance(entity, RelatedEntity):
        return entity
    if isinstance(entity, Mapping):
        return RelatedEntity.from_mapping(entity)
    raise TypeError(f"unsupported related entity type: {type(entity).__name__}")


def _focus_label(focus: object) -> str:
    if isinstance(focus, FocusEntity):
        return focus.id
    if isinstance(focus, Mapping):
        return str(focus.get("id", focus.get("article_id", "<focus>")))
    if focus is None:
        return "<focus>"
    return str(focus)


def _bucket_demand(
    buckets: List[Bucket], node_radii: List[float]
) -> Dict[Bucket, Tuple[int, float]]:
    demand: Dict[Bucket, Tuple[int, float]] = {}
    for bucket, r in zip(buckets, node_radii):
        count, largest = demand.get(bucket, (0, 0.0))
        demand[bucket] = (count + 1, max(largest, r))
    return demand


def layout_relation_map(
    focus: object,
    related: Iterable[EntityLike],
    options: Optional[LayoutOptions] = None,
    *,
    seed: str = DEFAULT_SEED,
) -> LayoutResult:
    """Place every related entity around ``focus``.

    Positions are returned in input order, in a coordinate space centred on
    the focus at ``(0, 0)``. The same entities, options and ``seed`` always
    produce the same layout unless ``options.randomize`` is set.
    """

    options = options if options is not None else LayoutOptions()
    options.validate()
    entities = [_coerce_entity(entity) for entity in related]
    focus_id = _focus_label(focus)

    if not entities:
        logger.info("No related entities for %s; returning an empty layout", focus_id)
        return LayoutResult(positions=[], seed=seed)

    scores = [clamp_similarity(entity.similarity) for entity in entities]
    stats = analyze_distribution(scores)
    bands = compute_radius_bands(stats, options)

    buckets = [classify(score, options.thresholds) for score in scores]
    counts = Counter(buckets)
    sizes = [node_size(score, options) for score in scores]
    if options.crowding:
        bands = expand_bands_for_crowding(bands, _bucket_demand(buckets, [s / 2.0 for s in sizes]), options)

    logger.info(
        "Laying out %d related entit%s around %s (mean=%.3f std=%.3f buckets=%s)",
        len(entities),
        "y" if len(entities) == 1 else "ies",
        focus_id,
        stats.mean,
        stats.std_dev,
        {bucket.value: counts.get(bucket, 0) for bucket in Bucket.ordered()},
    )

    seen: Counter = Counter()
    nodes: List[OrbitNode] = []
    for entity, score, bucket, size in zip(entities, scores, buckets, sizes):
        index = seen[bucket]
        seen[bucket] += 1
        total = max(1, counts[bucket])
        band = bands[bucket]
        rng = seeded_rng(seed, entity.id, randomize=options.randomize)
        orbit = radius_in_bucket(score, bucket, index, total, band, options, rng)
        angle = assign_angle(index, total, options, rng)
        nodes.append(OrbitNode.polar(entity.id, size / 2.0, orbit, band.min, band.max, angle))

    report = resolve_collisions(nodes, options, seed)

    positions = [
        PositionedEntity(
            id=node.id,
            x=node.x,
            y=node.y,
            angle=node.angle,
            radius=node.orbit,
            bucket=bucket,
            similarity=score,
            size=size,
        )
        for node, bucket, score, size in zip(nodes, buckets, scores, sizes)
    ]
    extent = max(node.orbit + node.r for node in nodes)

    return LayoutResult(
        positions=positions,
        bands=bands,
        stats=stats,
        iterations=report.iterations,
        converged=report.converged,
        residual_overlaps=report.residual_overlaps,
        extent=extent,
        seed=seed,
    )


def layout_positions(
    focus: object,
    related: Iterable[EntityLike],
    options: Optional[LayoutOptions] = None,
    *,
    seed: str = DEFAULT_SEED,
) -> List[PositionedEntity]:
    """Shortcut returning only the positioned entities."""

    return layout_relation_map(focus, related, options, seed=seed).positions


apply_debug_logging(globals(), logger=logger, skip={"_focus_label"})


__all__ = ["EntityLike", "layout_positions", "layout_relation_map"]
