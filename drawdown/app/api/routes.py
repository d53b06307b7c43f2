"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from drawdown import __version__
from drawdown.core.calculator import CalculatorInputs, DrawdownOptions, run_calculator
from drawdown.core.errors import InvalidInput
from drawdown.core.life_expectancy import chance_of_100, lookup
from drawdown.core.projection import ProjectionInput, StatePension, depletion_point, project
from drawdown.schemas.drawdown import (
    ChanceOf100Query,
    ChanceOf100Response,
    DrawdownRequest,
    DrawdownResponse,
    LifeExpectancyQuery,
    LifeExpectancyResponse,
    OutcomeRow,
    ProjectionPointRow,
    ProjectionRequest,
    ProjectionResponse,
)
from drawdown.schemas.ping import PingResponse

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidInput)
def _handle_invalid_input(exc: InvalidInput):
    current_app.logger.info("rejected input: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _point_rows(points) -> list:
    return [
        ProjectionPointRow(
            yearIndex=point.year_index,
            age=point.age,
            fundValueByScenario=point.fund_value_by_scenario,
        )
        for point in points
    ]


def _outcome_rows(outcomes) -> Dict[str, OutcomeRow]:
    return {
        name: OutcomeRow(age=outcome.age, finalAmount=outcome.final_amount)
        for name, outcome in outcomes.items()
    }


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", version=__version__)
    return jsonify(response.model_dump())


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Year-by-year fund values for caller-supplied scenarios."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)

    inp = ProjectionInput(
        initial_fund=payload.initialFund,
        annual_withdrawal=payload.annualWithdrawal,
        horizon_years=payload.horizonYears,
        start_age=payload.startAge,
        growth_rates=payload.growthRates,
        annual_charge_rate=payload.annualChargeRate,
        inflation_rate=payload.inflationRate,
        apply_inflation=payload.applyInflation,
        state_pension=StatePension(
            weekly_amount=payload.statePension.weeklyAmount,
            start_age=payload.statePension.startAge,
            enabled=payload.statePension.enabled,
        ),
    )
    points = project(inp)
    outcomes = {name: depletion_point(points, name, inp.start_age) for name in inp.growth_rates}

    response = ProjectionResponse(points=_point_rows(points), outcomes=_outcome_rows(outcomes))
    return jsonify(response.model_dump())


@api_bp.post("/calc/drawdown")
def calc_drawdown() -> Any:
    """The full calculator: pre-retirement growth, tax-free cash and three scenarios."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = DrawdownRequest.model_validate(raw_payload)

    summary = run_calculator(
        CalculatorInputs(
            current_age=payload.currentAge,
            retirement_age=payload.retirementAge,
            pension_fund=payload.pensionFund,
            monthly_income=payload.monthlyIncome,
            tax_free_cash_pct=payload.taxFreeCash,
            gender=payload.gender,
        ),
        DrawdownOptions(
            chosen_growth_rate=payload.chosenGrowthRate,
            apply_inflation=payload.adjustForInflation,
            include_state_pension=payload.includeStatePension,
            state_pension_weekly=payload.statePensionWeekly,
        ),
    )

    response = DrawdownResponse(
        retirementAge=summary.retirement_age,
        fundAtRetirement=summary.fund_at_retirement,
        taxFreeCashAmount=summary.tax_free_cash_amount,
        remainingFund=summary.remaining_fund,
        lifeExpectancy=summary.life_expectancy,
        chanceOf100=summary.chance_of_100,
        projections=_point_rows(summary.projections),
        outcomes=_outcome_rows(summary.outcomes),
        currentMonthlyIncome=summary.current_monthly_income,
        statePensionAgeMonthlyIncome=summary.state_pension_age_monthly_income,
    )
    return jsonify(response.model_dump())


@api_bp.get("/life-expectancy")
def life_expectancy() -> Any:
    query = LifeExpectancyQuery.model_validate(request.args.to_dict())
    response = LifeExpectancyResponse(
        birthYear=query.birthYear,
        gender=query.gender,
        lifeExpectancy=lookup(query.birthYear, query.gender),
    )
    return jsonify(response.model_dump())


@api_bp.get("/chance-of-100")
def chance() -> Any:
    query = ChanceOf100Query.model_validate(request.args.to_dict())
    response = ChanceOf100Response(age=query.age, chance=chance_of_100(query.age))
    return jsonify(response.model_dump())
