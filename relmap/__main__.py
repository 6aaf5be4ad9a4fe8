import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from relmap import (
    Bucket,
    LayoutConfigError,
    MatchFileError,
    filter_matches,
    find_entry,
    get_preset,
    layout_relation_map,
    load_match_entries,
    preset_names,
    to_related_entities,
)
from relmap.prng import DEFAULT_SEED

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out the relation map of one article")
    parser.add_argument("path", help="Path to the all_matches JSON file")
    parser.add_argument("--article-id", required=True, help="Article placed at the centre of the map")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--seed",
        default=DEFAULT_SEED,
        help=f"Seed for the deterministic jitter (default: {DEFAULT_SEED})",
    )
    parser.add_argument(
        "--preset",
        choices=preset_names(),
        default="default",
        help="Layout constants preset (default: default)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=0.0,
        help="Drop matches below this similarity and sort the rest (default: keep all)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=0,
        help="Keep at most this many matches (default: no limit)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        help="Override the collision relaxation pass cap",
    )
    parser.add_argument(
        "--no-jitter",
        action="store_true",
        help="Disable every pseudo-random offset",
    )
    parser.add_argument(
        "--output",
        help="Write the layout as JSON to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    overrides = {}
    if args.max_iterations is not None:
        overrides["max_iterations"] = args.max_iterations
    if args.no_jitter:
        overrides["jitter"] = 0.0
    try:
        options = get_preset(args.preset, **overrides)
        entries = load_match_entries(args.path)
    except (LayoutConfigError, MatchFileError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1)

    entry = find_entry(entries, args.article_id)
    if entry is None:
        logger.error("Article %s not found in %s", args.article_id, args.path)
        raise SystemExit(1)

    matches = filter_matches(entry.osd_matches, threshold=args.threshold, limit=args.limit)
    logger.info("Using %d of %d match(es) for %s", len(matches), len(entry.osd_matches), entry.article_id)
    result = layout_relation_map(entry.focus, to_related_entities(matches), options, seed=args.seed)

    print(f"Article: {entry.article_id} {entry.article_title}".rstrip())
    print(f"Seed: {result.seed}")
    print(f"Relaxation: iterations={result.iterations} converged={result.converged} "
          f"residual_overlaps={result.residual_overlaps}")
    print("Bands:")
    for bucket in Bucket.ordered():
        band = result.bands.get(bucket)
        if band is not None:
            print(f"  {bucket.value} ({bucket.label}): {band.min:.1f} - {band.max:.1f}")
    print("Positions:")
    for pos in result.positions:
        print(
            f"  {pos.id}: ({pos.x:.2f}, {pos.y:.2f}) r={pos.radius:.2f} "
            f"angle={pos.angle:.4f} sim={pos.similarity:.3f} [{pos.bucket.value}]"
        )

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing layout to %s", output_path)
        output_path.write_text(json.dumps(result.as_dict(), indent=2), encoding="utf-8")
        print(f"Layout written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
