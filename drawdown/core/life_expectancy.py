"""Period life expectancy at birth, looked up by nearest birth-year anchor."""

from __future__ import annotations

import logging
import math
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from drawdown.core.errors import DegenerateComputation, InvalidInput

logger = logging.getLogger(__name__)


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


# birth year -> years expected at birth
LIFE_EXPECTANCY: Mapping[int, Mapping[Gender, float]] = MappingProxyType(
    {
        year: MappingProxyType({Gender.MALE: male, Gender.FEMALE: female})
        for year, male, female in (
            (1940, 71.14, 76.85),
            (1945, 72.75, 77.85),
            (1950, 76.20, 80.85),
            (1955, 77.54, 81.94),
            (1960, 78.45, 82.85),
            (1965, 79.15, 83.45),
            (1970, 80.14, 84.20),
            (1975, 80.94, 84.93),
            (1980, 81.58, 85.55),
            (1985, 82.42, 86.27),
            (1990, 83.15, 86.79),
            (1995, 84.20, 87.62),
            (2000, 85.17, 88.42),
            (2005, 85.96, 88.75),
            (2010, 86.57, 89.08),
            (2015, 86.90, 89.86),
            (2020, 87.24, 90.31),
        )
    }
)

NOT_AVAILABLE = "N/A"


def _as_gender(gender: Union[Gender, str]) -> Gender:
    try:
        return Gender(gender)
    except ValueError:
        raise InvalidInput([f"unknown gender {gender!r}"]) from None


def nearest_anchor(birth_year: int) -> int:
    # min() keeps the first of equally close anchors, so ties go to the earlier year
    return min(sorted(LIFE_EXPECTANCY), key=lambda anchor: abs(anchor - birth_year))


def lookup(birth_year: int, gender: Union[Gender, str]) -> float:
    return LIFE_EXPECTANCY[nearest_anchor(birth_year)][_as_gender(gender)]


def lookup_for_age(current_age: int, gender: Union[Gender, str], current_year: int) -> float:
    return lookup(current_year - current_age, gender)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def one_in(current_age: int) -> int:
    """
    Rough odds of reaching 100, as the N in "1 in N".

    Starts at 15% at age 55 and drops half a point per year after that,
    reaching zero at 85. Raises DegenerateComputation once the chance is gone.
    """
    base_chance = max(0.0, 15 - (current_age - 55) * 0.5)
    if base_chance <= 0:
        raise DegenerateComputation(f"no chance estimate for age {current_age}")
    return _round_half_up(100 / base_chance)


def chance_of_100(current_age: int) -> str:
    try:
        return f"1 in {one_in(current_age)}"
    except DegenerateComputation as exc:
        logger.warning("%s, reporting %s", exc, NOT_AVAILABLE)
        return NOT_AVAILABLE


__all__ = [
    "Gender",
    "LIFE_EXPECTANCY",
    "NOT_AVAILABLE",
    "nearest_anchor",
    "lookup",
    "lookup_for_age",
    "one_in",
    "chance_of_100",
]
