import pytest

from relmap.buckets import Bucket
from relmap.options import LayoutConfigError, LayoutOptions, get_preset, preset_names


def test_presets_are_valid_independent_copies():
    assert set(preset_names()) == {"default", "legacy"}

    first = get_preset("default")
    first.base_bands[Bucket.CLOSEST] = (1.0, 2.0)
    second = get_preset("default")

    assert second.base_bands[Bucket.CLOSEST] == (80.0, 140.0)
    assert get_preset("legacy").thresholds == (0.75, 0.65, 0.40)


def test_get_preset_applies_overrides():
    options = get_preset("legacy", jitter=0.0, padding=2.5)

    assert options.jitter == 0.0
    assert options.padding == 2.5
    assert options.max_iterations == 100


def test_unknown_preset():
    with pytest.raises(LayoutConfigError) as exc:
        get_preset("fancy")

    assert "unknown preset" in str(exc.value)


@pytest.mark.parametrize(
    "changes, message_part",
    [
        ({"thresholds": (0.4, 0.6, 0.72)}, "strictly descending"),
        ({"thresholds": (0.8, 0.6)}, "expected 3 thresholds"),
        ({"padding": -1.0}, "padding"),
        ({"jitter": -0.1}, "jitter"),
        ({"max_iterations": -1}, "max_iterations"),
        ({"easing_exponent": 0.0}, "easing_exponent"),
        ({"packing_density": 0.0}, "packing_density"),
        ({"index_modulus": 0}, "index_modulus"),
    ],
)
def test_invalid_options_are_rejected(changes, message_part):
    with pytest.raises(LayoutConfigError) as exc:
        LayoutOptions(**changes).validate()

    assert message_part in str(exc.value)


def test_overlapping_base_bands_are_rejected():
    bands = {
        Bucket.CLOSEST: (80.0, 200.0),
        Bucket.NEAR: (160.0, 230.0),
        Bucket.FAR: (560.0, 740.0),
        Bucket.FARTHEST: (875.0, 1060.0),
    }

    with pytest.raises(LayoutConfigError) as exc:
        LayoutOptions(base_bands=bands).validate()

    assert "overlaps" in str(exc.value)


def test_missing_base_band_is_rejected():
    with pytest.raises(LayoutConfigError) as exc:
        LayoutOptions(base_bands={Bucket.CLOSEST: (10.0, 20.0)}).validate()

    assert "missing" in str(exc.value)
