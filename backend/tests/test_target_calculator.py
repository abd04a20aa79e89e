import math

import pytest

from modules.target_calculator import (
    calculate_targets,
    gain_percent,
    get_tick_size,
    proximity_percent,
)


@pytest.mark.parametrize(
    "price,expected",
    [(50, 1), (199, 1), (200, 2), (499, 2), (500, 5), (1999, 5), (2000, 10), (4999, 10), (5000, 25), (9500, 25)],
)
def test_tick_size_follows_idx_price_fractions(price, expected):
    assert get_tick_size(price) == expected


def test_calculate_targets_reference_case():
    # avg 100 -> tick 1, 20 levels between 90 and 110, (200 + 400) / 20 = 30 lots per level
    result = calculate_targets(100, 900, 110, 90, 200, 400, 100)

    assert result.tick_size == 1
    assert result.board_levels == 20
    assert result.average_queue_per_level == 30
    assert result.base_markup == 5
    assert result.pressure_levels == 30
    assert result.target_realistic == 120
    assert result.target_max == 135
    assert result.proximity_percent_realistic == 0.0
    assert result.proximity_percent_max == 0.0


def test_proximity_reaches_100_at_target():
    result = calculate_targets(100, 900, 110, 90, 200, 400, 120)

    assert result.proximity_percent_realistic == 100.0
    assert result.proximity_percent_max == 57.1


def test_proximity_is_monotone_in_last_price():
    values = [
        calculate_targets(1000, 5000, 1100, 950, 3000, 4500, price).proximity_percent_realistic
        for price in (0, 500, 900, 1000, 1050, 1100, 1500)
    ]
    assert values == sorted(values)
    assert values[3] == 0.0


def test_empty_book_falls_back_to_markup_only():
    result = calculate_targets(1000, 5000, 0, 0, 0, 0, 1025)

    assert result.board_levels == 0
    assert result.average_queue_per_level == 0
    assert result.pressure_levels == 0
    assert result.target_realistic == 1050
    assert result.target_max == 1050
    assert result.proximity_percent_realistic == 50.0


def test_inverted_book_does_not_produce_negative_levels():
    result = calculate_targets(1000, 5000, 950, 1000, 100, 100, 1000)
    assert result.board_levels == 0
    assert result.pressure_levels == 0


@pytest.mark.parametrize(
    "args",
    [
        (0, 0, 0, 0, 0, 0, 0),
        (0, 1000, 100, 100, 0, 0, 50),
        (100, 0, 0, 0, 0, 0, 0),
        (0, 0, 0, 0, 0, 0, 100),
        (100, 10 ** 12, 101, 100, 0.0001, 0, 100),
        (float("nan"), 100, 110, 90, 10, 10, 100),
        (100, float("inf"), 110, 90, 10, 10, 100),
    ],
)
def test_never_returns_nan_or_infinity(args):
    result = calculate_targets(*args)
    for value in (
        result.target_realistic,
        result.target_max,
        result.proximity_percent_realistic,
        result.proximity_percent_max,
    ):
        assert math.isfinite(value)


def test_proximity_zero_when_target_equals_average():
    assert proximity_percent(150, 0, 0) == 0.0


def test_gain_percent():
    assert gain_percent(120, 100) == 20.0
    assert gain_percent(100, 120) == -16.7
    assert gain_percent(120, 0) == 0.0
    assert gain_percent(120, -5) == 0.0
