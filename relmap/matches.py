"""Reading article-to-OSD match records into layout inputs."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from .buckets import clamp_similarity
from .model import FocusEntity, RelatedEntity

logger = logging.getLogger(__name__)


class MatchFileError(ValueError):
    """Raised when a match file does not have the expected structure."""


@dataclass
class OsdMatch:
    osd_id: str
    title: str
    similarity: float
    confidence: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None

    def to_entity(self) -> RelatedEntity:
        return RelatedEntity(
            id=self.osd_id,
            similarity=self.similarity,
            title=self.title,
            confidence=self.confidence,
            method=self.method,
            url=self.url,
        )


@dataclass
class MatchEntry:
    """All OSD matches found for one article."""

    article_id: str
    article_title: str
    total_osds_compared: int = 0
    matches_found: int = 0
    osd_matches: List[OsdMatch] = field(default_factory=list)

    @property
    def focus(self) -> FocusEntity:
        return FocusEntity(id=self.article_id, title=self.article_title)


def _parse_match(raw: Any, where: str) -> OsdMatch:
    if not isinstance(raw, dict):
        raise MatchFileError(f"{where}: expected an object, got {type(raw).__name__}")
    osd_id = raw.get("osd_id")
    if not isinstance(osd_id, str) or not osd_id:
        raise MatchFileError(f"{where}: missing osd_id")
    return OsdMatch(
        osd_id=osd_id,
        title=str(raw.get("title") or ""),
        similarity=clamp_similarity(raw.get("similarity", 0.0)),
        confidence=raw.get("confidence"),
        method=raw.get("method"),
        url=raw.get("url"),
    )


def parse_match_entry(raw: Any, where: str = "entry") -> MatchEntry:
    if not isinstance(raw, dict):
        raise MatchFileError(f"{where}: expected an object, got {type(raw).__name__}")
    article_id = raw.get("article_id")
    if not isinstance(article_id, str) or not article_id:
        raise MatchFileError(f"{where}: missing article_id")
    raw_matches = raw.get("osd_matches") or []
    if not isinstance(raw_matches, list):
        raise MatchFileError(f"{where}: osd_matches must be a list")
    matches = [_parse_match(m, f"{where}.osd_matches[{i}]") for i, m in enumerate(raw_matches)]
    return MatchEntry(
        article_id=article_id,
        article_title=str(raw.get("article_title") or ""),
        total_osds_compared=int(raw.get("total_osds_compared") or 0),
        matches_found=int(raw.get("matches_found", len(matches)) or 0),
        osd_matches=matches,
    )


def load_match_entries(path: Union[str, Path]) -> List[MatchEntry]:
    """Load the ``all_matches`` JSON array stored at ``path``."""

    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MatchFileError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(data, list):
        raise MatchFileError(f"{path}: expected a JSON array of match entries")
    entries = [parse_match_entry(raw, f"{path}[{i}]") for i, raw in enumerate(data)]
    logger.info("Loaded %d match entr%s from %s", len(entries), "y" if len(entries) == 1 else "ies", path)
    return entries


def find_entry(entries: Iterable[MatchEntry], article_id: str) -> Optional[MatchEntry]:
    for entry in entries:
        if entry.article_id == article_id:
            return entry
    return None


def filter_matches(matches: Iterable[OsdMatch], threshold: float = 0.0, limit: int = 0) -> List[OsdMatch]:
    """Keep matches at or above ``threshold``, most similar first.

    Without a threshold the input order is kept. ``limit`` of zero means no limit.
    """

    kept = list(matches)
    if threshold > 0.0:
        kept = [m for m in kept if m.similarity >= threshold]
        kept.sort(key=lambda m: m.similarity, reverse=True)
    if limit > 0:
        kept = kept[:limit]
    return kept


def to_related_entities(matches: Iterable[OsdMatch]) -> List[RelatedEntity]:
    return [match.to_entity() for match in matches]


__all__ = [
    "MatchEntry",
    "MatchFileError",
    "OsdMatch",
    "filter_matches",
    "find_entry",
    "load_match_entries",
    "parse_match_entry",
    "to_related_entities",
]
