from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from drawdown.config import (
    DEFAULT_CHOSEN_GROWTH_RATE,
    DEFAULT_STATE_PENSION_WEEKLY,
    INFLATION_RATE,
    MAX_TAX_FREE_CASH_PCT,
    PROJECTION_END_AGE,
    STATE_PENSION_AGE,
)
from drawdown.core.errors import InvalidInput
from drawdown.core.life_expectancy import Gender, chance_of_100, lookup_for_age
from drawdown.core.projection import (
    Outcome,
    ProjectionInput,
    ProjectionPoint,
    StatePension,
    depletion_point,
    grow_to_retirement,
    monthly_income_at_age,
    project,
    scenario_rates,
)

logger = logging.getLogger(__name__)


class CalculatorInputs(BaseModel):
    """What the user enters before the first forecast is shown."""

    model_config = ConfigDict(frozen=True)

    current_age: int
    retirement_age: int
    pension_fund: float
    monthly_income: float
    tax_free_cash_pct: float = 0.0
    gender: Gender = Gender.MALE


class DrawdownOptions(BaseModel):
    """Knobs the user can turn on the results screen."""

    model_config = ConfigDict(frozen=True)

    chosen_growth_rate: float = DEFAULT_CHOSEN_GROWTH_RATE
    apply_inflation: bool = False
    include_state_pension: bool = False
    state_pension_weekly: float = DEFAULT_STATE_PENSION_WEEKLY

    @property
    def state_pension(self) -> StatePension:
        return StatePension(
            weekly_amount=self.state_pension_weekly,
            start_age=STATE_PENSION_AGE,
            enabled=self.include_state_pension,
        )


class DrawdownSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    retirement_age: int
    fund_at_retirement: float
    tax_free_cash_amount: float
    remaining_fund: float
    life_expectancy: float
    chance_of_100: str
    projections: List[ProjectionPoint]
    outcomes: Dict[str, Outcome]
    current_monthly_income: float
    state_pension_age_monthly_income: float


def validate_inputs(inputs: CalculatorInputs, options: DrawdownOptions) -> None:
    errors: List[str] = []
    if inputs.retirement_age <= inputs.current_age:
        errors.append("retirement_age must be greater than current_age")
    if inputs.retirement_age > PROJECTION_END_AGE:
        errors.append(f"retirement_age must not exceed {PROJECTION_END_AGE}")
    if inputs.pension_fund < 0:
        errors.append("pension_fund must not be negative")
    if inputs.monthly_income < 0:
        errors.append("monthly_income must not be negative")
    if not 0 <= inputs.tax_free_cash_pct <= MAX_TAX_FREE_CASH_PCT:
        errors.append(f"tax_free_cash_pct must be between 0 and {MAX_TAX_FREE_CASH_PCT:g}")
    if options.state_pension_weekly < 0:
        errors.append("state_pension_weekly must not be negative")
    if errors:
        raise InvalidInput(errors)


def split_tax_free_cash(fund: float, tax_free_cash_pct: float) -> tuple[float, float]:
    """Return (tax_free_cash, remaining_fund)."""
    tax_free_cash = fund * tax_free_cash_pct / 100
    return tax_free_cash, fund - tax_free_cash


def run_calculator(
    inputs: CalculatorInputs,
    options: Optional[DrawdownOptions] = None,
    current_year: Optional[int] = None,
) -> DrawdownSummary:
    """
    Full drawdown forecast, end to end.

    Steps:
      1) Grow today's pot to retirement at the fixed pre-retirement rate.
      2) Take the tax-free cash off the top.
      3) Project what is left from retirement age to 100 under the
         poor / chosen / good scenarios.
      4) Annotate with life expectancy, odds of reaching 100 and the
         age each scenario runs dry.
    """
    options = options or DrawdownOptions()
    validate_inputs(inputs, options)
    current_year = current_year or datetime.now().year

    fund_at_retirement = grow_to_retirement(
        inputs.pension_fund, inputs.current_age, inputs.retirement_age
    )
    tax_free_cash, remaining_fund = split_tax_free_cash(fund_at_retirement, inputs.tax_free_cash_pct)

    projection_input = ProjectionInput(
        initial_fund=remaining_fund,
        annual_withdrawal=inputs.monthly_income * 12,
        horizon_years=PROJECTION_END_AGE - inputs.retirement_age,
        start_age=inputs.retirement_age,
        growth_rates=scenario_rates(options.chosen_growth_rate),
        inflation_rate=INFLATION_RATE,
        apply_inflation=options.apply_inflation,
        state_pension=options.state_pension,
    )
    points = project(projection_input)

    outcomes = {
        name: depletion_point(points, name, inputs.retirement_age)
        for name in projection_input.growth_rates
    }

    income_kwargs = dict(
        apply_inflation=options.apply_inflation,
        inflation_rate=INFLATION_RATE,
        state_pension=options.state_pension,
    )
    current_monthly = monthly_income_at_age(inputs.monthly_income, inputs.retirement_age, **income_kwargs)
    # retiring after state pension age means no years of inflation to add
    state_pension_monthly = monthly_income_at_age(
        inputs.monthly_income,
        STATE_PENSION_AGE,
        max(0, STATE_PENSION_AGE - inputs.retirement_age),
        **income_kwargs,
    )

    logger.info(
        "drawdown forecast: retire at %d with %.2f after %.2f tax-free cash",
        inputs.retirement_age,
        remaining_fund,
        tax_free_cash,
    )

    return DrawdownSummary(
        retirement_age=inputs.retirement_age,
        fund_at_retirement=fund_at_retirement,
        tax_free_cash_amount=tax_free_cash,
        remaining_fund=remaining_fund,
        life_expectancy=lookup_for_age(inputs.current_age, inputs.gender, current_year),
        chance_of_100=chance_of_100(inputs.current_age),
        projections=points,
        outcomes=outcomes,
        current_monthly_income=current_monthly,
        state_pension_age_monthly_income=state_pension_monthly,
    )


__all__ = [
    "CalculatorInputs",
    "DrawdownOptions",
    "DrawdownSummary",
    "validate_inputs",
    "split_tax_free_cash",
    "run_calculator",
]
