import math

import pytest

from relmap import (
    Bucket,
    FocusEntity,
    LayoutOptions,
    RelatedEntity,
    classify,
    layout_positions,
    layout_relation_map,
    min_center_distance,
)

FOCUS = FocusEntity(id="GLDS-1", title="Spaceflight transcriptomics")


def _entities(similarities, prefix="OSD"):
    return [RelatedEntity(id=f"{prefix}-{i}", similarity=s) for i, s in enumerate(similarities)]


def _pairwise_min_gap(positions):
    gap = math.inf
    for i, a in enumerate(positions):
        for b in positions[i + 1:]:
            dist = math.hypot(a.x - b.x, a.y - b.y)
            gap = min(gap, dist - (a.size + b.size) / 2)
    return gap


def test_empty_input_returns_empty_layout():
    result = layout_relation_map(FOCUS, [])

    assert result.positions == []
    assert len(result) == 0
    assert layout_positions(FOCUS, []) == []


def test_single_entity_gets_finite_position():
    positions = layout_positions(FOCUS, _entities([0.5]))

    assert len(positions) == 1
    assert math.isfinite(positions[0].x)
    assert math.isfinite(positions[0].y)
    assert positions[0].id == "OSD-0"


def test_four_buckets_scenario_is_strictly_ordered():
    similarities = [0.9, 0.68, 0.45, 0.1]
    result = layout_relation_map(FOCUS, _entities(similarities), seed="test")
    positions = result.positions

    assert [p.bucket for p in positions] == list(Bucket.ordered())
    assert {classify(s) for s in similarities} == set(Bucket.ordered())
    assert positions[0].radius < positions[1].radius < positions[2].radius < positions[3].radius
    for pos in positions:
        assert result.bands[pos.bucket].contains(pos.radius)


def test_identical_scores_do_not_collapse():
    positions = layout_positions(FOCUS, _entities([0.8] * 20), seed="test")
    avg_radius = sum(p.size / 2 for p in positions) / len(positions)

    assert {p.bucket for p in positions} == {Bucket.CLOSEST}
    assert min_center_distance([(p.x, p.y) for p in positions]) >= 2 * avg_radius - 1e-6


def test_layout_is_deterministic_for_fixed_seed():
    entities = _entities([0.91, 0.77, 0.74, 0.66, 0.61, 0.52, 0.44, 0.33, 0.21, 0.05])

    first = layout_relation_map(FOCUS, entities, seed="test")
    second = layout_relation_map(FOCUS, entities, seed="test")

    assert [p.as_dict() for p in first.positions] == [p.as_dict() for p in second.positions]
    assert first.iterations == second.iterations


def test_different_seed_changes_jitter():
    entities = _entities([0.8, 0.8, 0.8, 0.5, 0.5])

    a = layout_positions(FOCUS, entities, seed="alpha")
    b = layout_positions(FOCUS, entities, seed="beta")

    assert [(p.x, p.y) for p in a] != [(p.x, p.y) for p in b]


def test_zero_jitter_ignores_seed():
    entities = _entities([0.9, 0.7, 0.5, 0.3])
    options = LayoutOptions(jitter=0.0)

    a = layout_positions(FOCUS, entities, options, seed="alpha")
    b = layout_positions(FOCUS, entities, options, seed="beta")

    assert [p.as_dict() for p in a] == [p.as_dict() for p in b]


def test_order_and_ids_are_preserved():
    entities = _entities([0.1, 0.95, 0.5, 0.62, 0.3, 0.8])
    positions = layout_positions(FOCUS, entities)

    assert len(positions) == len(entities)
    assert [p.id for p in positions] == [e.id for e in entities]


def test_cross_bucket_monotonicity():
    similarities = [0.99, 0.93, 0.81, 0.73, 0.71, 0.66, 0.6, 0.58, 0.47, 0.4, 0.39, 0.25, 0.12, 0.0]
    positions = layout_positions(FOCUS, _entities(similarities), seed="mono")

    for a in positions:
        for b in positions:
            if a.similarity > b.similarity and a.bucket is not b.bucket:
                assert a.radius < b.radius


def test_typical_layout_has_no_overlap():
    similarities = [0.05 + 0.9 * i / 29 for i in range(30)]
    result = layout_relation_map(FOCUS, _entities(similarities), seed="test")

    assert result.residual_overlaps == 0
    assert _pairwise_min_gap(result.positions) >= -1e-6


def test_no_two_positions_coincide():
    positions = layout_positions(FOCUS, _entities([0.5] * 12), LayoutOptions(jitter=0.0))

    assert min_center_distance([(p.x, p.y) for p in positions]) > 0.0


def test_mappings_and_invalid_similarities_are_accepted():
    related = [
        {"osd_id": "OSD-48", "similarity": 1.3},
        {"id": "OSD-9", "similarity": -0.2},
        {"id": "OSD-10", "similarity": float("nan")},
        {"id": "OSD-11", "similarity": None},
    ]

    positions = layout_positions("GLDS-1", related)

    assert [p.id for p in positions] == ["OSD-48", "OSD-9", "OSD-10", "OSD-11"]
    assert positions[0].similarity == 1.0
    assert positions[0].bucket is Bucket.CLOSEST
    assert all(p.bucket is Bucket.FARTHEST for p in positions[1:])


def test_missing_id_is_rejected():
    with pytest.raises(ValueError):
        layout_positions(FOCUS, [{"similarity": 0.5}])


def test_many_entities_terminate_within_cap():
    options = LayoutOptions(max_iterations=3)
    result = layout_relation_map(FOCUS, _entities([0.75] * 150), options)

    assert len(result.positions) == 150
    assert result.iterations <= 3
    assert all(math.isfinite(p.x) and math.isfinite(p.y) for p in result.positions)


def test_result_serialises_to_plain_data():
    result = layout_relation_map(FOCUS, _entities([0.8, 0.3]), seed="test")
    data = result.as_dict()

    assert data["seed"] == "test"
    assert set(data["bands"]) == {b.value for b in Bucket.ordered()}
    assert [p["id"] for p in data["positions"]] == ["OSD-0", "OSD-1"]
    assert data["extent"] >= max(p["radius"] for p in data["positions"])


@pytest.mark.parametrize("score", [0.72, 0.60, 0.40])
def test_fifty_ties_at_a_threshold_do_not_overlap(score):
    result = layout_relation_map(FOCUS, _entities([score] * 50), seed="test")
    band = result.bands[classify(score)]
    on_outer_edge = [p for p in result.positions if abs(p.radius - band.max) < 1e-6]

    assert result.residual_overlaps == 0
    assert _pairwise_min_gap(result.positions) >= -1e-6
    assert len(on_outer_edge) < len(result.positions) // 2
    assert all(band.contains(p.radius) for p in result.positions)


def test_fifty_spread_scores_do_not_overlap():
    similarities = [0.02 * i for i in range(50)]
    result = layout_relation_map(FOCUS, _entities(similarities), seed="test")

    assert result.residual_overlaps == 0
    assert _pairwise_min_gap(result.positions) >= -1e-6
