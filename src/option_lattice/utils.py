"""Helper functions for lattice valuation: day counts, timing and parity checks."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from collections.abc import Iterator
import time
import numpy as np

from .enums import DayCountConvention
from .exceptions import DomainError, ValidationError

__all__ = [
    "log_timing",
    "calculate_year_fraction",
    "forward_price",
    "put_call_parity_rhs",
    "put_call_parity_gap",
]

SECONDS_IN_DAY = 86400


@contextmanager
def log_timing(logger, label: str, enabled: bool) -> Iterator[None]:
    """Log timing for a code block when enabled is True."""
    if not enabled:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("Timing %s: %.6fs", label, elapsed)


def _day_count_30_360_us(start_date: datetime, end_date: datetime) -> float:
    """30/360 (US) day-count fraction between two dates."""
    y1, m1, d1 = start_date.year, start_date.month, start_date.day
    y2, m2, d2 = end_date.year, end_date.month, end_date.day

    if d1 == 31:
        d1 = 30
    if d2 == 31 and d1 in (30, 31):
        d2 = 30

    return (360 * (y2 - y1) + 30 * (m2 - m1) + (d2 - d1)) / 360.0


def calculate_year_fraction(
    start_date,
    end_date,
    day_count_convention: DayCountConvention = DayCountConvention.ACT_365F,
) -> float:
    """Calculate year fraction between two dates.

    Parameters
    ==========
    start_date: datetime
        starting date
    end_date: datetime
        ending date
    day_count_convention: DayCountConvention, default DayCountConvention.ACT_365F
        Day-count basis. Supported:
        - DayCountConvention.ACT_365F
        - DayCountConvention.ACT_360
        - DayCountConvention.ACT_365_25
        - DayCountConvention.THIRTY_360_US

    Returns
    =======
    year_fraction: float
        year fraction between start_date and end_date

    Examples
    ========
    >>> from datetime import datetime
    >>> start = datetime(2025, 1, 1)
    >>> end = datetime(2025, 1, 2)
    >>> calculate_year_fraction(start, end)  # doctest: +SKIP
    0.00273972...
    """
    if day_count_convention is DayCountConvention.THIRTY_360_US:
        return _day_count_30_360_us(start_date, end_date)
    if day_count_convention is DayCountConvention.ACT_360:
        denom = 360.0
    elif day_count_convention is DayCountConvention.ACT_365_25:
        denom = 365.25
    elif day_count_convention is DayCountConvention.ACT_365F:
        denom = 365.0
    else:
        raise ValidationError(f"Unsupported day_count_convention: {day_count_convention}")

    delta_days = (end_date - start_date).total_seconds() / SECONDS_IN_DAY
    year_fraction = delta_days / denom
    return year_fraction


def forward_price(
    *,
    spot: float,
    time_to_maturity: float,
    risk_free_rate: float,
    dividend_yield: float = 0.0,
) -> float:
    """No-arbitrage forward price under flat continuously-compounded r and q."""
    if time_to_maturity <= 0:
        raise DomainError("time_to_maturity must be positive")
    return float(spot * np.exp((risk_free_rate - dividend_yield) * time_to_maturity))


def put_call_parity_rhs(
    *,
    spot: float,
    strike: float,
    time_to_maturity: float,
    risk_free_rate: float,
    dividend_yield: float = 0.0,
) -> float:
    """Compute the RHS of put-call parity for European options.

    Returns C - P implied by no-arbitrage, i.e. ``S e^{-qT} - K e^{-rT}``.
    """
    fwd = forward_price(
        spot=spot,
        time_to_maturity=time_to_maturity,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
    )
    return float(np.exp(-risk_free_rate * time_to_maturity) * (fwd - float(strike)))


def put_call_parity_gap(
    *,
    call_price: float,
    put_price: float,
    spot: float,
    strike: float,
    time_to_maturity: float,
    risk_free_rate: float,
    dividend_yield: float = 0.0,
) -> float:
    """Return call-put parity residual: (C - P) - RHS."""
    rhs = put_call_parity_rhs(
        spot=spot,
        strike=strike,
        time_to_maturity=time_to_maturity,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
    )
    return float(call_price - put_price - rhs)
