from __future__ import annotations

from math import isclose

from drawdown.core.projection import (
    ProjectionInput,
    StatePension,
    effective_withdrawal,
    grow_to_retirement,
    monthly_income_at_age,
)


def make_input(**overrides) -> ProjectionInput:
    fields = dict(
        initial_fund=100000.0,
        annual_withdrawal=10000.0,
        horizon_years=10,
        start_age=65,
        growth_rates={"chosen": 0.05},
    )
    fields.update(overrides)
    return ProjectionInput(**fields)


def test_flat_withdrawal_without_adjustments():
    inp = make_input()

    assert [effective_withdrawal(inp, i) for i in range(3)] == [10000.0, 10000.0, 10000.0]


def test_inflation_compounds_from_year_zero():
    inp = make_input(apply_inflation=True, inflation_rate=0.02)

    assert effective_withdrawal(inp, 0) == 10000.0
    assert isclose(effective_withdrawal(inp, 1), 10200.0)
    assert isclose(effective_withdrawal(inp, 2), 10404.0)


def test_state_pension_offsets_withdrawal_from_start_age():
    inp = make_input(state_pension=StatePension(weekly_amount=100.0, start_age=67, enabled=True))

    assert effective_withdrawal(inp, 1) == 10000.0  # age 66
    assert isclose(effective_withdrawal(inp, 2), 4800.0)  # age 67
    assert isclose(effective_withdrawal(inp, 5), 4800.0)


def test_disabled_state_pension_is_ignored():
    inp = make_input(state_pension=StatePension(weekly_amount=100.0, start_age=67, enabled=False))

    assert effective_withdrawal(inp, 5) == 10000.0


def test_state_pension_larger_than_income_floors_at_zero():
    inp = make_input(
        annual_withdrawal=4000.0,
        state_pension=StatePension(weekly_amount=100.0, start_age=65, enabled=True),
    )

    assert effective_withdrawal(inp, 0) == 0.0


def test_state_pension_is_taken_off_inflated_income():
    inp = make_input(
        apply_inflation=True,
        inflation_rate=0.02,
        state_pension=StatePension(weekly_amount=100.0, start_age=67, enabled=True),
    )

    assert isclose(effective_withdrawal(inp, 2), 10404.0 - 5200.0)


def test_monthly_income_before_state_pension_age():
    pension = StatePension(enabled=True)

    assert monthly_income_at_age(1000.0, 60, state_pension=pension) == 1000.0


def test_monthly_income_after_state_pension_age():
    pension = StatePension(weekly_amount=221.20, start_age=67, enabled=True)

    assert isclose(monthly_income_at_age(1000.0, 67, state_pension=pension), 1000.0 - 221.20 * 52 / 12)


def test_monthly_income_with_inflation_and_state_pension():
    pension = StatePension(weekly_amount=221.20, start_age=67, enabled=True)

    value = monthly_income_at_age(1000.0, 67, 2, apply_inflation=True, inflation_rate=0.02, state_pension=pension)

    assert isclose(value, 1040.4 - 221.20 * 52 / 12)


def test_grow_to_retirement_compounds_at_five_percent():
    assert isclose(grow_to_retirement(100000.0, 55, 60), 127628.15625)
    assert grow_to_retirement(100000.0, 60, 60) == 100000.0
