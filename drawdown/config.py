"""Model constants and default Flask settings."""

from typing import Final

# Annual platform/fund fee applied in every scenario.
FUND_CHARGE: Final[float] = 0.0055

POOR_GROWTH_RATE: Final[float] = -0.01
GOOD_GROWTH_RATE: Final[float] = 0.08
DEFAULT_CHOSEN_GROWTH_RATE: Final[float] = 0.05
MIN_CHOSEN_GROWTH_RATE: Final[float] = 0.0
MAX_CHOSEN_GROWTH_RATE: Final[float] = 0.10

# Growth applied to the pot between today and retirement.
PRE_RETIREMENT_GROWTH_RATE: Final[float] = 0.05

INFLATION_RATE: Final[float] = 0.02

DEFAULT_STATE_PENSION_WEEKLY: Final[float] = 221.20
STATE_PENSION_AGE: Final[int] = 67
WEEKS_PER_YEAR: Final[int] = 52

MAX_TAX_FREE_CASH_PCT: Final[float] = 25.0
PROJECTION_END_AGE: Final[int] = 100

# Engine limits that keep every compounded figure finite.
MAX_HORIZON_YEARS: Final[int] = 120
MIN_ANNUAL_RATE: Final[float] = -1.0
MAX_ANNUAL_RATE: Final[float] = 1.0

DEFAULT_SETTINGS: Final[dict] = {
    "LOG_LEVEL": "INFO",
    "CORS_ORIGINS": [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
}
