"""Data contracts for the drawdown endpoints."""

from __future__ import annotations

from typing import Annotated, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from drawdown.config import (
    DEFAULT_CHOSEN_GROWTH_RATE,
    DEFAULT_STATE_PENSION_WEEKLY,
    FUND_CHARGE,
    INFLATION_RATE,
    MAX_ANNUAL_RATE,
    MAX_CHOSEN_GROWTH_RATE,
    MAX_HORIZON_YEARS,
    MAX_TAX_FREE_CASH_PCT,
    MIN_ANNUAL_RATE,
    STATE_PENSION_AGE,
)

AnnualRate = Annotated[float, Field(ge=MIN_ANNUAL_RATE, le=MAX_ANNUAL_RATE)]


class StatePensionRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    weeklyAmount: float = Field(DEFAULT_STATE_PENSION_WEEKLY, ge=0)
    startAge: int = Field(STATE_PENSION_AGE, ge=0, le=120)
    enabled: bool = False


class ProjectionRequest(BaseModel):
    """Raw engine inputs. Negative fund or horizon is left to the engine to reject."""

    model_config = ConfigDict(extra="forbid")

    initialFund: float
    annualWithdrawal: float = Field(..., ge=0)
    horizonYears: int = Field(..., le=MAX_HORIZON_YEARS)
    startAge: int = Field(..., ge=0, le=120)
    growthRates: Dict[str, AnnualRate] = Field(..., min_length=1)
    annualChargeRate: AnnualRate = FUND_CHARGE
    inflationRate: AnnualRate = INFLATION_RATE
    applyInflation: bool = False
    statePension: StatePensionRow = Field(default_factory=StatePensionRow)


class ProjectionPointRow(BaseModel):
    yearIndex: int
    age: int
    fundValueByScenario: Dict[str, float]


class OutcomeRow(BaseModel):
    age: int
    finalAmount: float


class ProjectionResponse(BaseModel):
    points: List[ProjectionPointRow]
    outcomes: Dict[str, OutcomeRow]


class DrawdownRequest(BaseModel):
    """Calculator form plus the results-screen options."""

    model_config = ConfigDict(extra="forbid")

    currentAge: int = Field(..., ge=0, le=100)
    retirementAge: int = Field(..., ge=0, le=100)
    pensionFund: float = Field(..., ge=0)
    monthlyIncome: float = Field(..., ge=0)
    taxFreeCash: float = Field(0.0, ge=0, le=MAX_TAX_FREE_CASH_PCT, description="Percent of the pot.")
    gender: Literal["male", "female"] = "male"

    chosenGrowthRate: float = Field(
        DEFAULT_CHOSEN_GROWTH_RATE,
        ge=0,
        le=MAX_CHOSEN_GROWTH_RATE,
        description="Fractional annual growth for the chosen scenario (e.g. 0.05 for 5%).",
    )
    adjustForInflation: bool = False
    includeStatePension: bool = False
    statePensionWeekly: float = Field(DEFAULT_STATE_PENSION_WEEKLY, ge=0)


class DrawdownResponse(BaseModel):
    retirementAge: int
    fundAtRetirement: float
    taxFreeCashAmount: float
    remainingFund: float
    lifeExpectancy: float
    chanceOf100: str
    projections: List[ProjectionPointRow]
    outcomes: Dict[str, OutcomeRow]
    currentMonthlyIncome: float
    statePensionAgeMonthlyIncome: float


class LifeExpectancyResponse(BaseModel):
    birthYear: int
    gender: str
    lifeExpectancy: float


class ChanceOf100Response(BaseModel):
    age: int
    chance: str


class LifeExpectancyQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    birthYear: int = Field(..., ge=1800, le=2200)
    gender: Literal["male", "female"]


class ChanceOf100Query(BaseModel):
    model_config = ConfigDict(extra="forbid")

    age: int = Field(..., ge=0, le=130)
