"""String-keyed pseudo-random generators."""

from __future__ import annotations

import numpy as np

DEFAULT_SEED = "relation-map"

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def fnv1a_32(key: str) -> int:
    """32-bit FNV-1a hash of the code points of ``key``."""

    h = _FNV_OFFSET
    for ch in key:
        h ^= ord(ch) & 0xFFFFFFFF
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return h


def seeded_rng(seed: str, *parts: object, randomize: bool = False) -> np.random.Generator:
    """Return a generator keyed by ``seed`` and ``parts``.

    The same key always yields the same stream. ``randomize`` opts into an
    unseeded generator for callers that accept a different layout per call.
    """

    if randomize:
        return np.random.default_rng()
    key = ":".join([seed, *(str(p) for p in parts)])
    return np.random.default_rng(fnv1a_32(key))


__all__ = ["DEFAULT_SEED", "fnv1a_32", "seeded_rng"]
