from __future__ import annotations

from math import isclose

import pytest

from drawdown.core.calculator import (
    CalculatorInputs,
    DrawdownOptions,
    run_calculator,
    split_tax_free_cash,
)
from drawdown.core.errors import InvalidInput


def make_inputs(**overrides) -> CalculatorInputs:
    fields = dict(
        current_age=55,
        retirement_age=60,
        pension_fund=100000.0,
        monthly_income=500.0,
        tax_free_cash_pct=25.0,
        gender="male",
    )
    fields.update(overrides)
    return CalculatorInputs(**fields)


def test_split_tax_free_cash():
    cash, remaining = split_tax_free_cash(200000.0, 25.0)

    assert cash == 50000.0
    assert remaining == 150000.0


def test_summary_grows_fund_then_takes_tax_free_cash():
    summary = run_calculator(make_inputs(), current_year=2025)

    assert isclose(summary.fund_at_retirement, 127628.15625)
    assert isclose(summary.tax_free_cash_amount, 31907.0390625)
    assert isclose(summary.remaining_fund, 95721.1171875)


def test_projection_runs_from_retirement_to_100():
    summary = run_calculator(make_inputs(), current_year=2025)

    assert len(summary.projections) == 41
    assert summary.projections[0].age == 60
    assert summary.projections[-1].age == 100
    first = summary.projections[0].fund_value_by_scenario
    assert set(first) == {"poor", "chosen", "good"}
    assert all(isclose(value, summary.remaining_fund) for value in first.values())


def test_summary_annotations():
    summary = run_calculator(make_inputs(gender="female"), current_year=2025)

    assert summary.life_expectancy == 84.20  # born 1970
    assert summary.chance_of_100 == "1 in 7"
    assert summary.current_monthly_income == 500.0


def test_outcomes_are_ordered_by_scenario_strength():
    summary = run_calculator(make_inputs(monthly_income=900.0), current_year=2025)
    outcomes = summary.outcomes

    assert outcomes["poor"].age <= outcomes["chosen"].age <= outcomes["good"].age


def test_state_pension_extends_the_chosen_scenario():
    inputs = make_inputs(monthly_income=900.0)
    without = run_calculator(inputs, current_year=2025)
    with_pension = run_calculator(
        inputs,
        DrawdownOptions(include_state_pension=True),
        current_year=2025,
    )

    assert with_pension.outcomes["chosen"].age >= without.outcomes["chosen"].age
    assert with_pension.state_pension_age_monthly_income < without.state_pension_age_monthly_income


def test_state_pension_age_income_includes_inflation_since_retirement():
    summary = run_calculator(
        make_inputs(),
        DrawdownOptions(apply_inflation=True),
        current_year=2025,
    )

    assert isclose(summary.state_pension_age_monthly_income, 500.0 * 1.02 ** 7)


@pytest.mark.parametrize(
    "overrides",
    [
        {"retirement_age": 55},
        {"retirement_age": 50},
        {"pension_fund": -1.0},
        {"tax_free_cash_pct": 30.0},
        {"current_age": 100, "retirement_age": 101},
    ],
)
def test_invalid_inputs_fail_before_projection(overrides):
    with pytest.raises(InvalidInput):
        run_calculator(make_inputs(**overrides), current_year=2025)


def test_chosen_growth_rate_out_of_range():
    with pytest.raises(InvalidInput):
        run_calculator(make_inputs(), DrawdownOptions(chosen_growth_rate=0.2), current_year=2025)
