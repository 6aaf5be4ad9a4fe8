"""Example pipeline: place the OSD matches of one article around it."""

from relmap import FocusEntity, RelatedEntity, get_preset, layout_relation_map

MATCHES = [
    ("OSD-48", 0.91),
    ("OSD-104", 0.78),
    ("OSD-242", 0.74),
    ("OSD-87", 0.69),
    ("OSD-379", 0.63),
    ("OSD-120", 0.55),
    ("OSD-511", 0.47),
    ("OSD-13", 0.36),
    ("OSD-605", 0.21),
]


def main() -> None:
    focus = FocusEntity(id="PMC3630201", title="Microgravity induces pelvic bone loss")
    related = [RelatedEntity(id=osd_id, similarity=score) for osd_id, score in MATCHES]

    result = layout_relation_map(focus, related, get_preset("default"), seed="example")

    print(f"Focus: {focus.id} ({focus.title})")
    print(f"Relaxation: {result.iterations} pass(es), converged={result.converged}")
    for bucket, band in result.bands.items():
        print(f"  {bucket.label:<9} {band.min:7.1f} - {band.max:7.1f} px")
    for pos in result.positions:
        print(f"{pos.id:>8}: sim={pos.similarity:.2f} r={pos.radius:7.2f} ({pos.x:8.2f}, {pos.y:8.2f})")


if __name__ == "__main__":
    main()
