"""Market data containers for lattice valuation."""

from __future__ import annotations
from dataclasses import dataclass
import datetime as dt
import numpy as np
from .enums import DayCountConvention
from .rates import DiscountCurve
from .utils import calculate_year_fraction
from .exceptions import ConfigurationError, DomainError, ValidationError


@dataclass(frozen=True, slots=True)
class MarketData:
    """Market data shared by every option priced on the same date."""

    pricing_date: dt.datetime
    discount_curve: DiscountCurve
    day_count_convention: DayCountConvention = DayCountConvention.ACT_365F

    def __post_init__(self) -> None:
        if not isinstance(self.pricing_date, dt.datetime):
            raise ValidationError(
                f"pricing_date must be a datetime, got {type(self.pricing_date).__name__}"
            )
        if not isinstance(self.discount_curve, DiscountCurve):
            raise ValidationError(
                f"discount_curve must be a DiscountCurve, got {type(self.discount_curve).__name__}"
            )
        if not isinstance(self.day_count_convention, DayCountConvention):
            raise ConfigurationError(
                "day_count_convention must be DayCountConvention enum, "
                f"got {type(self.day_count_convention).__name__}"
            )

    def year_fraction(self, start: dt.datetime, end: dt.datetime) -> float:
        return calculate_year_fraction(start, end, self.day_count_convention)


@dataclass(frozen=True, slots=True)
class MarketSnapshot:
    """Immutable, flat market inputs captured once at evaluation time.

    All rates are continuously compounded and constant over
    ``[pricing_date, maturity]``. Instances are read-only and can be shared
    by concurrent pricing calls.

    Attributes
    ==========
    spot:
        Underlying price, must be > 0.
    risk_free_rate:
        Flat risk-free zero rate.
    dividend_yield:
        Flat dividend (or foreign) yield.
    volatility:
        Flat annualized Black volatility, must be >= 0.
    pricing_date, maturity:
        Valuation and last exercise dates.
    day_count_convention:
        Basis used for ``time_to_maturity``.
    """

    spot: float
    risk_free_rate: float
    dividend_yield: float
    volatility: float
    pricing_date: dt.datetime
    maturity: dt.datetime
    day_count_convention: DayCountConvention = DayCountConvention.ACT_365F

    def __post_init__(self) -> None:
        for name in ("spot", "risk_free_rate", "dividend_yield", "volatility"):
            try:
                value = float(getattr(self, name))
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"{name} must be numeric") from exc
            if not np.isfinite(value):
                raise DomainError(f"{name} must be finite, got {value}")
            object.__setattr__(self, name, value)

        if self.spot <= 0.0:
            raise DomainError(f"non-positive underlying given: {self.spot}")
        if self.volatility < 0.0:
            raise DomainError(f"negative volatility given: {self.volatility}")
        if not isinstance(self.day_count_convention, DayCountConvention):
            raise ConfigurationError(
                "day_count_convention must be DayCountConvention enum, "
                f"got {type(self.day_count_convention).__name__}"
            )
        if not isinstance(self.pricing_date, dt.datetime) or not isinstance(
            self.maturity, dt.datetime
        ):
            raise ValidationError("pricing_date and maturity must be datetimes")
        if self.time_to_maturity <= 0.0:
            raise DomainError("maturity must be after pricing_date")

    @property
    def time_to_maturity(self) -> float:
        """Year fraction from pricing date to maturity."""
        return calculate_year_fraction(self.pricing_date, self.maturity, self.day_count_convention)

    @property
    def drift(self) -> float:
        """Risk-neutral growth rate ``r - q``."""
        return self.risk_free_rate - self.dividend_yield
