import math

import pytest

from relmap.buckets import Bucket, DEFAULT_THRESHOLDS, clamp_similarity, classify, similarity_range


@pytest.mark.parametrize(
    "score, expected",
    [
        (0.72, Bucket.CLOSEST),
        (0.60, Bucket.NEAR),
        (0.40, Bucket.FAR),
    ],
)
def test_threshold_belongs_to_higher_bucket(score, expected):
    assert classify(score) is expected


@pytest.mark.parametrize(
    "score, expected",
    [
        (1.0, Bucket.CLOSEST),
        (0.7199, Bucket.NEAR),
        (0.5999, Bucket.FAR),
        (0.3999, Bucket.FARTHEST),
        (0.0, Bucket.FARTHEST),
    ],
)
def test_classify_just_below_thresholds(score, expected):
    assert classify(score) is expected


@pytest.mark.parametrize(
    "score, expected",
    [(1.7, Bucket.CLOSEST), (-0.3, Bucket.FARTHEST), (math.nan, Bucket.FARTHEST), ("abc", Bucket.FARTHEST), (None, Bucket.FARTHEST)],
)
def test_classify_clamps_invalid_scores(score, expected):
    assert classify(score) is expected


def test_classify_honours_custom_thresholds():
    legacy = (0.75, 0.65, 0.40)
    assert classify(0.73) is Bucket.CLOSEST
    assert classify(0.73, legacy) is Bucket.NEAR
    assert classify(0.62, legacy) is Bucket.FAR


def test_clamp_similarity():
    assert clamp_similarity(0.5) == 0.5
    assert clamp_similarity(2) == 1.0
    assert clamp_similarity(-1) == 0.0
    assert clamp_similarity("0.25") == 0.25
    assert clamp_similarity(float("nan")) == 0.0


def test_similarity_ranges_partition_unit_interval():
    ranges = [similarity_range(b, DEFAULT_THRESHOLDS) for b in reversed(Bucket.ordered())]
    assert ranges[0][0] == 0.0
    assert ranges[-1][1] == 1.0
    for (lo_a, hi_a), (lo_b, hi_b) in zip(ranges, ranges[1:]):
        assert lo_a < hi_a
        assert hi_a == lo_b


def test_bucket_order_and_labels():
    ordered = Bucket.ordered()
    assert [b.rank for b in ordered] == [0, 1, 2, 3]
    assert ordered[0] is Bucket.CLOSEST
    assert ordered[-1] is Bucket.FARTHEST
    assert Bucket.CLOSEST.label == "Excellent"
    assert Bucket.FARTHEST.label == "Poor"
