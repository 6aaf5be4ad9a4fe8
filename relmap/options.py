"""Layout configuration and named presets."""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .buckets import DEFAULT_THRESHOLDS, Bucket, Thresholds

BandSpec = Tuple[float, float]


class LayoutConfigError(ValueError):
    """Raised when layout options are inconsistent."""


def _default_base_bands() -> Dict[Bucket, BandSpec]:
    return {
        Bucket.CLOSEST: (80.0, 140.0),
        Bucket.NEAR: (160.0, 230.0),
        Bucket.FAR: (560.0, 740.0),
        Bucket.FARTHEST: (875.0, 1060.0),
    }


@dataclass
class LayoutOptions:
    """Configuration knobs for the relation-map layout engine."""

    thresholds: Thresholds = DEFAULT_THRESHOLDS
    base_bands: Dict[Bucket, BandSpec] = field(default_factory=_default_base_bands)
    band_gap: float = 8.0
    spread_base: float = 1.8
    spread_floor: float = 1.2
    low_mean_cutoff: float = 0.5
    low_mean_scale: float = 1.4
    default_scale: float = 1.1
    easing_exponent: float = 2.0
    index_modulus: int = 11
    index_step: float = 1.0 / 18.0
    hash_fraction: float = 1.0 / 12.0
    jitter_fraction: float = 0.35
    density_fraction: float = 0.25
    density_threshold: int = 4
    jitter: float = 1.0
    angle_jitter: float = 1.2
    node_base_size: float = 58.0
    node_size_boost: float = 68.0
    node_size_exponent: float = 0.85
    padding: float = 6.0
    max_iterations: int = 140
    crowding: bool = True
    packing_density: float = 0.35
    randomize: bool = False

    def validate(self) -> "LayoutOptions":
        """Raise :class:`LayoutConfigError` when the options cannot produce a sane layout."""

        if len(self.thresholds) != 3:
            raise LayoutConfigError(f"expected 3 thresholds, got {len(self.thresholds)}")
        tau1, tau2, tau3 = self.thresholds
        if not (1.0 >= tau1 > tau2 > tau3 > 0.0):
            raise LayoutConfigError(
                f"thresholds must be strictly descending within (0, 1]: {self.thresholds}"
            )

        missing = [b.value for b in Bucket.ordered() if b not in self.base_bands]
        if missing:
            raise LayoutConfigError(f"base bands missing for bucket(s): {', '.join(missing)}")
        previous_max = None
        for bucket in Bucket.ordered():
            lo, hi = self.base_bands[bucket]
            if lo < 0.0 or hi < lo:
                raise LayoutConfigError(f"invalid base band for {bucket.value}: ({lo}, {hi})")
            if previous_max is not None and lo <= previous_max:
                raise LayoutConfigError(
                    f"base band for {bucket.value} overlaps the previous band ({lo} <= {previous_max})"
                )
            previous_max = hi

        for name in ("band_gap", "padding", "jitter", "angle_jitter", "node_base_size", "node_size_boost"):
            if getattr(self, name) < 0.0:
                raise LayoutConfigError(f"{name} must be non-negative")
        if self.max_iterations < 0:
            raise LayoutConfigError("max_iterations must be non-negative")
        if self.index_modulus < 1:
            raise LayoutConfigError("index_modulus must be at least 1")
        if self.easing_exponent <= 0.0:
            raise LayoutConfigError("easing_exponent must be positive")
        if self.spread_floor <= 0.0 or self.low_mean_scale <= 0.0 or self.default_scale <= 0.0:
            raise LayoutConfigError("spread and scale factors must be positive")
        if not (0.0 < self.packing_density <= 1.0):
            raise LayoutConfigError("packing_density must be in (0, 1]")
        return self


_PRESETS: Dict[str, LayoutOptions] = {
    "default": LayoutOptions(),
    # Earlier relation-map iteration: stricter tiers, narrower index fan-out.
    "legacy": LayoutOptions(
        thresholds=(0.75, 0.65, 0.40),
        base_bands={
            Bucket.CLOSEST: (90.0, 150.0),
            Bucket.NEAR: (180.0, 260.0),
            Bucket.FAR: (520.0, 700.0),
            Bucket.FARTHEST: (820.0, 1000.0),
        },
        index_modulus=7,
        index_step=1.0 / 12.0,
        easing_exponent=1.6,
        max_iterations=100,
    ),
}


def preset_names() -> Tuple[str, ...]:
    return tuple(sorted(_PRESETS))


def get_preset(name: str = "default", **overrides: Any) -> LayoutOptions:
    """Return a validated copy of the named preset with ``overrides`` applied."""

    try:
        base = _PRESETS[name]
    except KeyError as exc:
        raise LayoutConfigError(
            f"unknown preset {name!r} (expected one of {', '.join(preset_names())})"
        ) from exc
    options = copy.deepcopy(base)
    if overrides:
        options = dataclasses.replace(options, **overrides)
    return options.validate()


__all__ = [
    "BandSpec",
    "LayoutConfigError",
    "LayoutOptions",
    "get_preset",
    "preset_names",
]
