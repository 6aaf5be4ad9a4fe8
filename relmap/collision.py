"""Pairwise overlap relaxation constrained to each node's orbit band."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from scipy.spatial import cKDTree
from scipy.spatial.distance import pdist

from .logging_utils import apply_debug_logging
from .options import LayoutOptions
from .prng import DEFAULT_SEED, seeded_rng

logger = logging.getLogger(__name__)

_CONTACT_EPS = 1e-9


@dataclass
class OrbitNode:
    """Mutable working state of one entity during relaxation."""

    id: str
    r: float  # circle radius (rendered size / 2)
    orbit: float  # distance from the focus
    orbit_min: float
    orbit_max: float
    angle: float
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def polar(cls, id: str, r: float, orbit: float, orbit_min: float, orbit_max: float, angle: float) -> "OrbitNode":
        return cls(
            id=id,
            r=r,
            orbit=orbit,
            orbit_min=orbit_min,
            orbit_max=orbit_max,
            angle=angle,
            x=math.cos(angle) * orbit,
            y=math.sin(angle) * orbit,
        )

    def reproject(self) -> None:
        """Clamp the node back onto its own orbit band."""

        angle = math.atan2(self.y, self.x)
        orbit = max(self.orbit_min, min(self.orbit_max, math.hypot(self.x, self.y)))
        self.angle = angle
        self.orbit = orbit
        self.x = math.cos(angle) * orbit
        self.y = math.sin(angle) * orbit


@dataclass
class CollisionReport:
    iterations: int
    converged: bool
    residual_overlaps: int


def _nudge_coincident(a: OrbitNode, b: OrbitNode, seed: str, randomize: bool) -> None:
    u = float(seeded_rng(seed, a.id, b.id, randomize=randomize).random())
    bump = 0.5 + u * 0.5
    b.x += bump
    b.y -= bump
    b.reproject()
    if b.x == a.x and b.y == a.y:
        # The bump was purely radial on a single-ring band; slide along the ring.
        b.angle += bump / max(b.orbit, 1.0)
        b.x = math.cos(b.angle) * b.orbit
        b.y = math.sin(b.angle) * b.orbit


def _separate_pair(a: OrbitNode, b: OrbitNode, padding: float, seed: str, randomize: bool) -> bool:
    dx = b.x - a.x
    dy = b.y - a.y
    dist = math.hypot(dx, dy)
    nudged = dist == 0.0
    if nudged:
        _nudge_coincident(a, b, seed, randomize)
        dx = b.x - a.x
        dy = b.y - a.y
        dist = math.hypot(dx, dy)
        if dist == 0.0:
            return True

    min_dist = a.r + b.r + padding
    if dist >= min_dist - _CONTACT_EPS:
        return nudged

    overlap = (min_dist - dist) / 2.0
    ux = dx / dist
    uy = dy / dist
    a.x -= ux * overlap
    a.y -= uy * overlap
    b.x += ux * overlap
    b.y += uy * overlap
    a.reproject()
    b.reproject()
    return True


def _candidate_pairs(nodes: Sequence[OrbitNode], padding: float) -> np.ndarray:
    """Index pairs close enough to collide during the coming pass, in ``(i, j)`` order.

    The search radius is twice the widest contact distance, which covers the
    drift of a single pass; pairs missed mid-pass are picked up on the next one.
    """

    centers = np.array([(n.x, n.y) for n in nodes], dtype=float)
    # Extra pixel covers the coincident-centre nudge.
    reach = 2.0 * (2.0 * max(n.r for n in nodes) + padding) + 1.0
    pairs = cKDTree(centers).query_pairs(reach, output_type="ndarray")
    if len(pairs) == 0:
        return pairs
    return pairs[np.lexsort((pairs[:, 1], pairs[:, 0]))]


def count_overlaps(nodes: Sequence[OrbitNode], tol: float = 1e-6) -> int:
    """Number of pairs whose circles intersect (padding not included)."""

    if len(nodes) < 2:
        return 0
    centers = np.array([(n.x, n.y) for n in nodes], dtype=float)
    radii = np.array([n.r for n in nodes], dtype=float)
    distances = pdist(centers)
    i, j = np.triu_indices(len(nodes), k=1)
    return int(np.count_nonzero(distances < radii[i] + radii[j] - tol))


def min_center_distance(points: Sequence[Sequence[float]]) -> float:
    """Smallest distance between any two of ``points``; ``inf`` for fewer than two."""

    if len(points) < 2:
        return math.inf
    return float(pdist(np.asarray(points, dtype=float)).min())


def resolve_collisions(
    nodes: List[OrbitNode],
    options: LayoutOptions,
    seed: str = DEFAULT_SEED,
) -> CollisionReport:
    """Relax ``nodes`` in place until no pair overlaps or the iteration cap is hit.

    A node may slide anywhere within its ``[orbit_min, orbit_max]`` band but never
    leaves it. Each pass only visits pairs that a k-d tree query finds near each
    other, so large inputs do not pay for every pair. Dense inputs can keep some
    residual overlap once the cap is reached; that is reported, not raised.
    """

    iterations = 0
    converged = len(nodes) < 2
    if not converged:
        for _ in range(options.max_iterations):
            iterations += 1
            moved = False
            for i, j in _candidate_pairs(nodes, options.padding):
                if _separate_pair(nodes[i], nodes[j], options.padding, seed, options.randomize):
                    moved = True
            if not moved:
                converged = True
                break

    residual = count_overlaps(nodes)
    if converged:
        logger.info("Collision relaxation settled after %d pass(es)", iterations)
    else:
        logger.warning(
            "Collision relaxation hit the %d-pass cap with %d overlapping pair(s) among %d node(s)",
            options.max_iterations,
            residual,
            len(nodes),
        )
    return CollisionReport(iterations=iterations, converged=converged, residual_overlaps=residual)


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "_candidate_pairs",
        "_nudge_coincident",
        "_separate_pair",
        "OrbitNode.reproject",
        "OrbitNode.polar",
    },
)


__all__ = [
    "CollisionReport",
    "OrbitNode",
    "count_overlaps",
    "min_center_distance",
    "resolve_collisions",
]
