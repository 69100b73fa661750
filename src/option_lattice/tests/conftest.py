"""Shared pytest fixtures for option_lattice tests."""

import datetime as dt

import pytest

from option_lattice.enums import ExerciseType, OptionType
from option_lattice.market_environment import MarketData, MarketSnapshot
from option_lattice.rates import DiscountCurve
from option_lattice.valuation import OptionSpec, PlainVanillaPayoff, UnderlyingPricingData

from option_lattice.tests.helpers import MATURITY, PRICING_DATE, flat_curve, make_snapshot


# ---------------------------------------------------------------------------
# Scalar constants
# ---------------------------------------------------------------------------

SPOT = 100.0
STRIKE = 100.0
RATE = 0.05
VOL = 0.20


@pytest.fixture()
def pricing_date() -> dt.datetime:
    return PRICING_DATE


@pytest.fixture()
def maturity() -> dt.datetime:
    return MATURITY


@pytest.fixture()
def risk_free_rate() -> float:
    return RATE


@pytest.fixture()
def vol() -> float:
    return VOL


@pytest.fixture()
def spot() -> float:
    return SPOT


@pytest.fixture()
def strike() -> float:
    return STRIKE


# ---------------------------------------------------------------------------
# Curve / Market Data
# ---------------------------------------------------------------------------


@pytest.fixture()
def discount_curve(
    pricing_date: dt.datetime, maturity: dt.datetime, risk_free_rate: float
) -> DiscountCurve:
    """Flat discount curve over [pricing_date, maturity]."""
    return flat_curve(pricing_date, maturity, risk_free_rate)


@pytest.fixture()
def market_data(pricing_date: dt.datetime, discount_curve: DiscountCurve) -> MarketData:
    return MarketData(pricing_date, discount_curve)


@pytest.fixture()
def underlying_data(market_data: MarketData) -> UnderlyingPricingData:
    """ATM underlying with no dividends."""
    return UnderlyingPricingData(
        initial_value=SPOT,
        volatility=VOL,
        market_data=market_data,
    )


@pytest.fixture()
def snapshot() -> MarketSnapshot:
    """Flat ATM inputs: S=100, r=5%, q=0, vol=20%, T=1y."""
    return make_snapshot()


# ---------------------------------------------------------------------------
# Payoffs / option specs
# ---------------------------------------------------------------------------


@pytest.fixture()
def call_payoff(strike: float) -> PlainVanillaPayoff:
    return PlainVanillaPayoff(OptionType.CALL, strike)


@pytest.fixture()
def put_payoff(strike: float) -> PlainVanillaPayoff:
    return PlainVanillaPayoff(OptionType.PUT, strike)


@pytest.fixture()
def euro_call_spec(strike: float, maturity: dt.datetime) -> OptionSpec:
    return OptionSpec.vanilla(OptionType.CALL, strike, maturity, ExerciseType.EUROPEAN)


@pytest.fixture()
def euro_put_spec(strike: float, maturity: dt.datetime) -> OptionSpec:
    return OptionSpec.vanilla(OptionType.PUT, strike, maturity, ExerciseType.EUROPEAN)
