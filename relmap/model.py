"""Core records shared across the layout pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .buckets import Bucket

EntityId = str


@dataclass(frozen=True)
class FocusEntity:
    """Anchor of a relation map. Only its identity is carried through."""

    id: EntityId
    title: Optional[str] = None


@dataclass(frozen=True)
class RelatedEntity:
    """One item to place around the focus."""

    id: EntityId
    similarity: float
    title: Optional[str] = None
    confidence: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RelatedEntity":
        """Build an entity from a plain mapping (``osd_id`` is accepted for ``id``)."""

        entity_id = data.get("id", data.get("osd_id"))
        if entity_id is None or entity_id == "":
            raise ValueError(f"related entity is missing an id: {dict(data)!r}")
        return cls(
            id=str(entity_id),
            similarity=data.get("similarity"),  # type: ignore[arg-type]
            title=data.get("title"),
            confidence=data.get("confidence"),
            method=data.get("method"),
            url=data.get("url"),
        )


@dataclass(frozen=True)
class DistributionStats:
    mean: float
    std_dev: float
    min: float
    max: float


@dataclass(frozen=True)
class RadiusBand:
    """Closed ``[min, max]`` interval of orbit radii, in pixels."""

    min: float
    max: float

    @property
    def width(self) -> float:
        return self.max - self.min

    def clamp(self, value: float) -> float:
        return max(self.min, min(self.max, value))

    def fold(self, value: float) -> float:
        """Reflect ``value`` back inside the band instead of pinning it to an edge."""

        width = self.width
        if width <= 0.0:
            return self.min
        if value > self.max:
            value = self.max - (value - self.max) % width
        elif value < self.min:
            value = self.min + (self.min - value) % width
        return self.clamp(value)

    def contains(self, value: float, tol: float = 1e-9) -> bool:
        return self.min - tol <= value <= self.max + tol


@dataclass
class PositionedEntity:
    id: EntityId
    x: float
    y: float
    angle: float
    radius: float
    bucket: "Bucket"
    similarity: float
    size: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "angle": self.angle,
            "radius": self.radius,
            "bucket": self.bucket.value,
            "similarity": self.similarity,
            "size": self.size,
        }


@dataclass
class LayoutResult:
    """Positions plus the intermediate data a renderer or test may inspect."""

    positions: List[PositionedEntity]
    bands: Dict["Bucket", RadiusBand] = field(default_factory=dict)
    stats: Optional[DistributionStats] = None
    iterations: int = 0
    converged: bool = True
    residual_overlaps: int = 0
    extent: float = 0.0
    seed: Optional[str] = None

    def __len__(self) -> int:
        return len(self.positions)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "iterations": self.iterations,
            "converged": self.converged,
            "residual_overlaps": self.residual_overlaps,
            "extent": self.extent,
            "bands": {bucket.value: [band.min, band.max] for bucket, band in self.bands.items()},
            "positions": [pos.as_dict() for pos in self.positions],
        }


__all__ = [
    "EntityId",
    "FocusEntity",
    "RelatedEntity",
    "DistributionStats",
    "RadiusBand",
    "PositionedEntity",
    "LayoutResult",
]
