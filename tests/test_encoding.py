import math

import pytest

from rideviz.core.encoding import (
    DEFAULT_BOUNDS,
    HIGH_ANCHOR,
    LOW_ANCHOR,
    MAX_RADIUS,
    MIN_RADIUS,
    RidershipBounds,
    bounds_from_values,
    encode,
    hex_to_rgb,
    interpolate_color,
    rgb_to_hex,
)

BOUNDS = RidershipBounds(lower_cutoff=19.95, upper_cutoff=1122.02)


def test_lower_cutoff_is_minimum():
    enc = encode(19.95, BOUNDS)
    assert enc.t == 0.0
    assert enc.radius == MIN_RADIUS
    assert enc.color == hex_to_rgb(LOW_ANCHOR)


def test_upper_cutoff_is_maximum():
    enc = encode(1122.02, BOUNDS)
    assert enc.t == 1.0
    assert enc.radius == MAX_RADIUS
    assert enc.color == hex_to_rgb(HIGH_ANCHOR)


def test_geometric_midpoint_is_half_way():
    enc = encode(149.54, BOUNDS)
    assert enc.t == pytest.approx(0.5, abs=0.01)
    assert enc.radius == pytest.approx((MIN_RADIUS + MAX_RADIUS) / 2, abs=0.05)


def test_flat_below_and_above_cutoffs():
    assert encode(3, BOUNDS) == encode(19.95, BOUNDS)
    assert encode(0, BOUNDS) == encode(19.95, BOUNDS)
    assert encode(50000, BOUNDS) == encode(1122.02, BOUNDS)


def test_monotonic_between_cutoffs():
    lo, hi = math.log(BOUNDS.lower_cutoff), math.log(BOUNDS.upper_cutoff)
    values = [math.exp(lo + (hi - lo) * k / 40) for k in range(41)]
    encs = [encode(v, BOUNDS) for v in values]

    for a, b in zip(encs, encs[1:]):
        assert a.radius <= b.radius
        assert a.brightness <= b.brightness
        assert a.color[0] <= b.color[0]  # 231 -> 255
        assert a.color[1] >= b.color[1]  # 231 -> 0
        assert a.color[2] >= b.color[2]  # 231 -> 10


def test_channels_are_ints_in_range():
    for v in (1, 20, 100, 500, 1000, 5000):
        for c in encode(v, BOUNDS).color:
            assert isinstance(c, int)
            assert 0 <= c <= 255


def test_negative_counts_as_zero_and_nan_rejected():
    assert encode(-5, BOUNDS) == encode(0, BOUNDS)
    with pytest.raises(ValueError):
        encode(float("nan"), BOUNDS)


def test_degenerate_cutoffs_return_low_end():
    b = RidershipBounds(lower_cutoff=100, upper_cutoff=100)
    for v in (10, 100, 1000):
        enc = encode(v, b)
        assert enc.t == 0.0
        assert enc.radius == MIN_RADIUS


def test_invalid_bounds():
    with pytest.raises(ValueError):
        RidershipBounds(lower_cutoff=0, upper_cutoff=10)
    with pytest.raises(ValueError):
        RidershipBounds(lower_cutoff=10, upper_cutoff=5)


def test_glow_fades_to_rim():
    enc = encode(1122.02, BOUNDS)
    offsets = [off for off, _ in enc.fill]
    assert offsets == [0.0, 0.5, 1.0]
    assert enc.fill[0][1] == "rgba(255, 0, 10, 1)"
    assert enc.fill[2][1] == "rgba(255, 0, 10, 0.01)"
    assert enc.stroke.color == "#FF000A"


def test_interpolate_color():
    assert interpolate_color("#000000", "#FFFFFF", 0.0) == (0, 0, 0)
    assert interpolate_color("#000000", "#FFFFFF", 1.0) == (255, 255, 255)
    assert interpolate_color((0, 0, 0), (200, 100, 0), 0.5) == (100, 50, 0)
    # factor is clamped
    assert interpolate_color("#000000", "#FFFFFF", 3.0) == (255, 255, 255)
    assert interpolate_color("#000000", "#FFFFFF", -1.0) == (0, 0, 0)


def test_hex_helpers():
    assert hex_to_rgb("#FF000A") == (255, 0, 10)
    assert rgb_to_hex((231, 231, 231)) == "#E7E7E7"
    with pytest.raises(ValueError):
        hex_to_rgb("#FFF")


def test_bounds_from_values():
    b = bounds_from_values(range(1, 101), lower_q=0.25, upper_q=0.75)
    assert b.lower_cutoff == pytest.approx(25.75)
    assert b.upper_cutoff == pytest.approx(75.25)


def test_bounds_from_values_falls_back_without_positive_data():
    assert bounds_from_values([]) == DEFAULT_BOUNDS
    assert bounds_from_values([0, -1, float("nan")]) == DEFAULT_BOUNDS
    with pytest.raises(ValueError):
        bounds_from_values([1, 2, 3], lower_q=0.9, upper_q=0.1)
