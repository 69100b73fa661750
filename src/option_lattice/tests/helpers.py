import datetime as dt

from option_lattice.enums import DayCountConvention
from option_lattice.market_environment import MarketSnapshot
from option_lattice.rates import DiscountCurve
from option_lattice.utils import calculate_year_fraction

PRICING_DATE = dt.datetime(2025, 1, 1)
MATURITY = dt.datetime(2026, 1, 1)


def flat_curve(
    pricing_date: dt.datetime,
    maturity: dt.datetime,
    rate: float,
    day_count_convention: DayCountConvention = DayCountConvention.ACT_365F,
) -> DiscountCurve:
    """Flat continuously-compounded curve spanning [pricing_date, maturity]."""
    end_time = calculate_year_fraction(pricing_date, maturity, day_count_convention)
    return DiscountCurve.flat(rate, end_time=end_time)


def make_snapshot(
    *,
    spot: float = 100.0,
    risk_free_rate: float = 0.05,
    dividend_yield: float = 0.0,
    volatility: float = 0.20,
    pricing_date: dt.datetime = PRICING_DATE,
    maturity: dt.datetime = MATURITY,
) -> MarketSnapshot:
    return MarketSnapshot(
        spot=spot,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
        volatility=volatility,
        pricing_date=pricing_date,
        maturity=maturity,
    )
