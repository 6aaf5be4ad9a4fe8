from .buckets import Bucket, DEFAULT_THRESHOLDS, classify, clamp_similarity, similarity_range
from .stats import FALLBACK_STATS, analyze_distribution
from .bands import compute_radius_bands, expand_bands_for_crowding
from .placement import assign_angle, node_size, radius_in_bucket
from .collision import CollisionReport, OrbitNode, count_overlaps, min_center_distance, resolve_collisions
from .engine import layout_positions, layout_relation_map
from .model import (
    DistributionStats,
    FocusEntity,
    LayoutResult,
    PositionedEntity,
    RadiusBand,
    RelatedEntity,
)
from .options import LayoutConfigError, LayoutOptions, get_preset, preset_names
from .prng import DEFAULT_SEED, seeded_rng
from .matches import (
    MatchEntry,
    MatchFileError,
    OsdMatch,
    filter_matches,
    find_entry,
    load_match_entries,
    to_related_entities,
)

__all__ = [
    'Bucket',
    'DEFAULT_THRESHOLDS',
    'classify',
    'clamp_similarity',
    'similarity_range',
    'FALLBACK_STATS',
    'analyze_distribution',
    'compute_radius_bands',
    'expand_bands_for_crowding',
    'assign_angle',
    'node_size',
    'radius_in_bucket',
    'CollisionReport',
    'OrbitNode',
    'count_overlaps',
    'min_center_distance',
    'resolve_collisions',
    'layout_positions',
    'layout_relation_map',
    'DistributionStats',
    'FocusEntity',
    'LayoutResult',
    'PositionedEntity',
    'RadiusBand',
    'RelatedEntity',
    'LayoutConfigError',
    'LayoutOptions',
    'get_preset',
    'preset_names',
    'DEFAULT_SEED',
    'seeded_rng',
    'MatchEntry',
    'MatchFileError',
    'OsdMatch',
    'filter_matches',
    'find_entry',
    'load_match_entries',
    'to_related_entities',
]
