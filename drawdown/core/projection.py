from __future__ import annotations

import logging
import math
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from drawdown.config import (
    DEFAULT_STATE_PENSION_WEEKLY,
    FUND_CHARGE,
    GOOD_GROWTH_RATE,
    INFLATION_RATE,
    MAX_ANNUAL_RATE,
    MAX_CHOSEN_GROWTH_RATE,
    MAX_HORIZON_YEARS,
    MIN_ANNUAL_RATE,
    MIN_CHOSEN_GROWTH_RATE,
    POOR_GROWTH_RATE,
    PRE_RETIREMENT_GROWTH_RATE,
    STATE_PENSION_AGE,
    WEEKS_PER_YEAR,
)
from drawdown.core.errors import InvalidInput

logger = logging.getLogger(__name__)


# -----------------------------
# Inputs and outputs
# -----------------------------


class Scenario(str, Enum):
    POOR = "poor"
    CHOSEN = "chosen"
    GOOD = "good"


class StatePension(BaseModel):
    model_config = ConfigDict(frozen=True)

    weekly_amount: float = DEFAULT_STATE_PENSION_WEEKLY
    start_age: int = STATE_PENSION_AGE
    enabled: bool = False

    @property
    def annual_amount(self) -> float:
        return self.weekly_amount * WEEKS_PER_YEAR


class ProjectionInput(BaseModel):
    """
    Everything the drawdown loop needs:
      - initial_fund: pot at year 0 (after tax-free cash, after pre-retirement growth)
      - annual_withdrawal: gross income drawn per year, before adjustments
      - horizon_years: number of years projected (year 0 is included, so horizon + 1 rows)
      - growth_rates: scenario name -> fractional annual growth (may be negative)
      - annual_charge_rate: fee dragged off every scenario
    """

    model_config = ConfigDict(frozen=True)

    initial_fund: float
    annual_withdrawal: float
    horizon_years: int
    start_age: int
    growth_rates: Mapping[str, float]
    annual_charge_rate: float = FUND_CHARGE

    inflation_rate: float = INFLATION_RATE
    apply_inflation: bool = False
    state_pension: StatePension = Field(default_factory=StatePension)

    @field_validator("growth_rates", mode="after")
    @classmethod
    def _freeze_rates(cls, rates: Mapping[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(rates))

    @field_serializer("growth_rates")
    def _dump_rates(self, rates: Mapping[str, float]) -> Dict[str, float]:
        return dict(rates)

    def age_at(self, year_index: int) -> int:
        return self.start_age + year_index


class ProjectionPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year_index: int
    age: int
    fund_value_by_scenario: Dict[str, float]


class Outcome(BaseModel):
    """Last age a scenario still has money, and how much is left at that age."""

    model_config = ConfigDict(frozen=True)

    age: int
    final_amount: float


# -----------------------------
# Withdrawal schedule
# -----------------------------


def _adjusted_income(
    income: float,
    age: int,
    years_passed: int,
    *,
    apply_inflation: bool,
    inflation_rate: float,
    state_pension: StatePension,
    periods_per_year: int,
) -> float:
    if apply_inflation:
        income *= (1 + inflation_rate) ** years_passed

    if not state_pension.enabled or age < state_pension.start_age:
        return income

    # state pension covers part of the income, so less comes out of the pot
    return max(0.0, income - state_pension.annual_amount / periods_per_year)


def effective_withdrawal(inp: ProjectionInput, year_index: int) -> float:
    """Amount taken out of the fund in ``year_index`` after inflation and state pension."""
    return _adjusted_income(
        inp.annual_withdrawal,
        inp.age_at(year_index),
        year_index,
        apply_inflation=inp.apply_inflation,
        inflation_rate=inp.inflation_rate,
        state_pension=inp.state_pension,
        periods_per_year=1,
    )


def monthly_income_at_age(
    monthly_income: float,
    age: int,
    years_passed: int = 0,
    *,
    apply_inflation: bool = False,
    inflation_rate: float = INFLATION_RATE,
    state_pension: StatePension = StatePension(),
) -> float:
    """Monthly amount drawn from the pot at ``age``. Display only, never fed back into a projection."""
    return _adjusted_income(
        monthly_income,
        age,
        years_passed,
        apply_inflation=apply_inflation,
        inflation_rate=inflation_rate,
        state_pension=state_pension,
        periods_per_year=12,
    )


# -----------------------------
# Projection
# -----------------------------


def _rate_errors(name: str, rate: float) -> List[str]:
    if not math.isfinite(rate) or not MIN_ANNUAL_RATE <= rate <= MAX_ANNUAL_RATE:
        return [f"{name} must be between {MIN_ANNUAL_RATE:g} and {MAX_ANNUAL_RATE:g}"]
    return []


def validate_input(inp: ProjectionInput) -> None:
    """
    Reject anything the loop cannot turn into finite numbers.

    With rates inside [MIN_ANNUAL_RATE, MAX_ANNUAL_RATE] and at most
    MAX_HORIZON_YEARS years, the compounded factors are at most 2 ** 120, so
    the only remaining overflow comes from huge starting amounts. Those are
    caught by bounding the largest balance and withdrawal the loop can reach.
    """
    errors: List[str] = []
    if inp.horizon_years < 0:
        errors.append("horizon_years must not be negative")
    if inp.horizon_years > MAX_HORIZON_YEARS:
        errors.append(f"horizon_years must not exceed {MAX_HORIZON_YEARS}")
    if not math.isfinite(inp.initial_fund):
        errors.append("initial_fund must be a finite number")
    elif inp.initial_fund < 0:
        errors.append("initial_fund must not be negative")
    if not math.isfinite(inp.annual_withdrawal):
        errors.append("annual_withdrawal must be a finite number")
    elif inp.annual_withdrawal < 0:
        errors.append("annual_withdrawal must not be negative")
    if not inp.growth_rates:
        errors.append("at least one growth rate is required")

    errors.extend(_rate_errors("annual_charge_rate", inp.annual_charge_rate))
    errors.extend(_rate_errors("inflation_rate", inp.inflation_rate))
    for name, rate in inp.growth_rates.items():
        errors.extend(_rate_errors(f"growth rate {name!r}", rate))

    if errors:
        raise InvalidInput(errors)

    growth = max(1.0, *(1 + rate - inp.annual_charge_rate for rate in inp.growth_rates.values()))
    inflation = max(1.0, 1 + inp.inflation_rate) if inp.apply_inflation else 1.0
    peak_balance = inp.initial_fund * growth ** inp.horizon_years
    peak_withdrawal = inp.annual_withdrawal * inflation ** inp.horizon_years
    if not math.isfinite(peak_balance) or not math.isfinite(peak_withdrawal):
        raise InvalidInput(["projection would overflow; reduce the fund, withdrawal or horizon"])


def simulate_scenario(inp: ProjectionInput, growth_rate: float) -> List[float]:
    """
    Fund balance for a single scenario, one value per year (year 0 first).

    Order of operations (per year):
      1) Record the balance at the START of the year.
      2) Take out this year's effective withdrawal.
      3) Apply growth net of the annual charge to what is left.

    The balance is floored at zero after every update, so a depleted fund
    stays at exactly zero rather than drifting further negative.
    """
    factor = 1 + growth_rate - inp.annual_charge_rate
    balance = float(inp.initial_fund)

    balances: List[float] = []
    for year_index in range(inp.horizon_years + 1):
        balances.append(max(0.0, balance))
        balance = max(0.0, (balance - effective_withdrawal(inp, year_index)) * factor)

    return balances


def project(inp: ProjectionInput) -> List[ProjectionPoint]:
    """
    Run every scenario in ``inp.growth_rates`` independently and combine them
    into one chronological list of ProjectionPoint rows.
    """
    validate_input(inp)

    series = {name: simulate_scenario(inp, rate) for name, rate in inp.growth_rates.items()}

    points = [
        ProjectionPoint(
            year_index=year_index,
            age=inp.age_at(year_index),
            fund_value_by_scenario={name: values[year_index] for name, values in series.items()},
        )
        for year_index in range(inp.horizon_years + 1)
    ]
    logger.debug(
        "projected %d years from age %d across scenarios %s",
        inp.horizon_years,
        inp.start_age,
        list(series),
    )
    return points


def depletion_point(points: Sequence[ProjectionPoint], scenario: str, start_age: int) -> Outcome:
    """
    Last point where ``scenario`` still has a positive balance.
    A scenario with no positive balance at all reports ``start_age`` and 0.
    """
    for point in reversed(points):
        value = point.fund_value_by_scenario[scenario]
        if value > 0:
            return Outcome(age=point.age, final_amount=value)
    return Outcome(age=start_age, final_amount=0.0)


# -----------------------------
# Input preparation helpers
# -----------------------------


def scenario_rates(chosen_rate: float) -> Dict[str, float]:
    """The three named growth scenarios; only the chosen one is user-selectable."""
    if not MIN_CHOSEN_GROWTH_RATE <= chosen_rate <= MAX_CHOSEN_GROWTH_RATE:
        raise InvalidInput(
            [
                f"chosen growth rate must be between {MIN_CHOSEN_GROWTH_RATE:.0%}"
                f" and {MAX_CHOSEN_GROWTH_RATE:.0%}"
            ]
        )
    return {
        Scenario.POOR.value: POOR_GROWTH_RATE,
        Scenario.CHOSEN.value: chosen_rate,
        Scenario.GOOD.value: GOOD_GROWTH_RATE,
    }


def grow_to_retirement(
    fund: float,
    current_age: int,
    retirement_age: int,
    rate: float = PRE_RETIREMENT_GROWTH_RATE,
) -> float:
    """Compound ``fund`` annually from ``current_age`` up to ``retirement_age``."""
    return fund * (1 + rate) ** (retirement_age - current_age)


__all__ = [
    "Scenario",
    "StatePension",
    "ProjectionInput",
    "ProjectionPoint",
    "Outcome",
    "effective_withdrawal",
    "monthly_income_at_age",
    "validate_input",
    "simulate_scenario",
    "project",
    "depletion_point",
    "scenario_rates",
    "grow_to_retirement",
]
