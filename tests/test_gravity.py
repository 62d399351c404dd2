import pytest

from blockfall.utils import fall_interval


def test_level_one_falls_once_per_second():
    assert fall_interval(1) == 1.0


def test_fall_interval_formula():
    assert fall_interval(2) == pytest.approx(0.793)
    assert fall_interval(3) == pytest.approx(0.786 ** 2)
    assert fall_interval(10) == pytest.approx(0.737 ** 9)


def test_gravity_speed_increases_with_level():
    intervals = [fall_interval(level) for level in range(1, 16)]
    assert all(a > b for a, b in zip(intervals, intervals[1:]))


def test_level_below_one_rejected():
    with pytest.raises(ValueError):
        fall_interval(0)
