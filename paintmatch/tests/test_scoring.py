from __future__ import annotations

import numpy as np
import pytest

from paintmatch.src.color_matching.scoring import (
    cie76_percentage,
    quality_band,
    rgb_percentage,
)


@pytest.mark.parametrize(
    ("distance", "expected"),
    [(0.0, 100.0), (2.0, 98.0), (5.0, 95.0), (10.0, 90.0), (100.0, 0.0), (250.0, 0.0)],
)
def test_cie76_percentage_breakpoints(distance, expected):
    assert cie76_percentage(distance) == pytest.approx(expected)


def test_cie76_percentage_is_exactly_100_at_zero():
    assert cie76_percentage(0.0) == 100.0


def test_percentages_are_monotonic_and_bounded():
    distances = np.linspace(0.0, 600.0, 1201)

    for scores in (cie76_percentage(distances), rgb_percentage(distances)):
        assert np.all(np.diff(scores) <= 0.0)
        assert scores.min() >= 0.0
        assert scores.max() <= 100.0


def test_rgb_percentage_reaches_zero_at_max_distance():
    assert rgb_percentage(0.0) == 100.0
    assert rgb_percentage(441.67) == pytest.approx(0.0)


@pytest.mark.parametrize(
    ("distance", "band"),
    [
        (0.0, "imperceptible"),
        (1.99, "imperceptible"),
        (2.0, "excellent"),
        (4.99, "excellent"),
        (5.0, "good"),
        (9.99, "good"),
        (10.0, "fair"),
        (75.0, "fair"),
    ],
)
def test_quality_bands(distance, band):
    assert quality_band(distance) == band
