from __future__ import annotations

import pytest

from drawdown.core.errors import InvalidInput
from drawdown.core.life_expectancy import (
    LIFE_EXPECTANCY,
    Gender,
    chance_of_100,
    lookup,
    lookup_for_age,
    nearest_anchor,
)


def test_exact_anchor():
    assert lookup(1990, "female") == 86.79
    assert lookup(1990, Gender.MALE) == 83.15


def test_nearest_anchor_wins():
    assert lookup(1988, "female") == 86.79  # 1990 is 2 away, 1985 is 3
    assert lookup(1987, "female") == 86.27


def test_years_outside_table_use_the_edge_anchors():
    assert lookup(1900, "male") == 71.14
    assert lookup(2050, "female") == 90.31


def test_equidistant_birth_year_picks_earlier_anchor():
    assert nearest_anchor(1987.5) == 1985


def test_lookup_for_age_uses_birth_year():
    assert lookup_for_age(55, "male", current_year=2025) == 80.14


def test_unknown_gender_is_invalid():
    with pytest.raises(InvalidInput):
        lookup(1990, "other")


def test_table_is_read_only():
    with pytest.raises(TypeError):
        LIFE_EXPECTANCY[2025] = {Gender.MALE: 88.0, Gender.FEMALE: 91.0}


@pytest.mark.parametrize(
    "age, expected",
    [
        (45, "1 in 5"),
        (55, "1 in 7"),
        (65, "1 in 10"),
        (69, "1 in 13"),  # 12.5 rounds up
        (84, "1 in 200"),
    ],
)
def test_chance_of_100(age, expected):
    assert chance_of_100(age) == expected


@pytest.mark.parametrize("age", [85, 90, 110])
def test_chance_of_100_without_estimate(age):
    assert chance_of_100(age) == "N/A"
