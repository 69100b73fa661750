"""Contract descriptors, underlying data and market flattening."""

from __future__ import annotations
from dataclasses import dataclass, replace as dc_replace
from collections.abc import Callable
import datetime as dt
import logging
import numpy as np

from ..enums import ExerciseType, OptionType
from ..exceptions import ConfigurationError, DomainError, ValidationError
from ..market_environment import MarketData, MarketSnapshot
from ..rates import DiscountCurve
from ..volatility import BlackVolatility

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlainVanillaPayoff:
    """Call/put payoff on the terminal spot against a fixed strike."""

    option_type: OptionType
    strike: float

    def __post_init__(self) -> None:
        """Validate option_type and coerce strike."""
        if not isinstance(self.option_type, OptionType):
            raise ConfigurationError(
                f"option_type must be OptionType enum, got {type(self.option_type).__name__}"
            )
        if self.strike is None:
            raise ValidationError("PlainVanillaPayoff.strike must be provided")
        try:
            strike = float(self.strike)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("PlainVanillaPayoff.strike must be numeric") from exc
        if not np.isfinite(strike):
            raise DomainError("PlainVanillaPayoff.strike must be finite")
        if strike <= 0.0:
            raise DomainError("PlainVanillaPayoff.strike must be > 0")
        object.__setattr__(self, "strike", strike)

    def __call__(self, spot: np.ndarray | float) -> np.ndarray:
        """Vectorized intrinsic value: max(S-K, 0) for calls, max(K-S, 0) for puts."""
        spot = np.asarray(spot, dtype=float)
        if self.option_type is OptionType.CALL:
            return np.maximum(spot - self.strike, 0.0)
        return np.maximum(self.strike - spot, 0.0)


@dataclass(frozen=True, slots=True)
class PayoffSpec:
    """Arbitrary payoff of the terminal spot.

    Useful for exploring shapes such as capped calls or digitals with other
    tools; the lattice engine only prices :class:`PlainVanillaPayoff` and
    rejects this with ``UnsupportedPayoffError``.

    Notes
    -----
    - payoff_fn must be vectorized over spot (accept float or np.ndarray and return np.ndarray)
    """

    payoff_fn: Callable[[np.ndarray | float], np.ndarray]

    def __post_init__(self) -> None:
        if not callable(self.payoff_fn):
            raise ConfigurationError("payoff_fn must be callable")

    def __call__(self, spot: np.ndarray | float) -> np.ndarray:
        return np.asarray(self.payoff_fn(spot), dtype=float)


@dataclass(frozen=True, slots=True)
class Exercise:
    """Exercise schedule; the lattice reads only the last exercise date."""

    exercise_type: ExerciseType
    last_date: dt.datetime

    def __post_init__(self) -> None:
        if not isinstance(self.exercise_type, ExerciseType):
            raise ConfigurationError(
                f"exercise_type must be ExerciseType enum, got {type(self.exercise_type).__name__}"
            )
        if not isinstance(self.last_date, dt.datetime):
            raise ValidationError(
                f"last_date must be a datetime, got {type(self.last_date).__name__}"
            )


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Contract specification: payoff plus exercise."""

    payoff: PlainVanillaPayoff | PayoffSpec
    exercise: Exercise

    @classmethod
    def vanilla(
        cls,
        option_type: OptionType,
        strike: float,
        maturity: dt.datetime,
        exercise_type: ExerciseType = ExerciseType.EUROPEAN,
    ) -> "OptionSpec":
        """Convenience constructor for a plain call or put."""
        return cls(
            payoff=PlainVanillaPayoff(option_type, strike),
            exercise=Exercise(exercise_type, maturity),
        )

    @property
    def maturity(self) -> dt.datetime:
        return self.exercise.last_date

    @property
    def exercise_type(self) -> ExerciseType:
        return self.exercise.exercise_type


@dataclass(frozen=True, slots=True)
class UnderlyingPricingData:
    """Underlying asset data as seen by the lattice engine.

    Contains spot price, volatility (a number or any :class:`BlackVolatility`
    provider), market data (pricing date, risk-free curve, day count) and an
    optional continuous dividend curve. Curves and surfaces may carry a term
    structure; :func:`snapshot_market` flattens them for a given contract.
    """

    initial_value: float
    volatility: float | BlackVolatility
    market_data: MarketData
    dividend_curve: DiscountCurve | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.market_data, MarketData):
            raise ConfigurationError(
                f"market_data must be MarketData, got {type(self.market_data).__name__}"
            )
        if self.dividend_curve is not None and not isinstance(self.dividend_curve, DiscountCurve):
            raise ConfigurationError(
                f"dividend_curve must be a DiscountCurve, got {type(self.dividend_curve).__name__}"
            )

    @property
    def pricing_date(self) -> dt.datetime:
        return self.market_data.pricing_date

    @property
    def discount_curve(self) -> DiscountCurve:
        return self.market_data.discount_curve

    def black_vol(self, strike: float, expiry: float) -> float:
        if isinstance(self.volatility, BlackVolatility):
            return self.volatility.get_vol(strike, expiry)
        return float(self.volatility)

    def replace(self, **kwargs: object) -> "UnderlyingPricingData":
        """Create a new UnderlyingPricingData instance with modified fields.

        Used for scenario and bump-and-revalue runs without mutating the
        original object.
        """
        return dc_replace(self, **kwargs)


def snapshot_market(underlying: UnderlyingPricingData, spec: OptionSpec) -> MarketSnapshot:
    """Capture flat market inputs for one contract.

    The risk-free and dividend zero rates are read at the last exercise date
    and the volatility at (strike, expiry). Any term structure beyond those
    single numbers is dropped: the lattice uses constant coefficients over
    ``[pricing_date, maturity]``.
    """
    market = underlying.market_data
    maturity = spec.maturity
    if maturity <= market.pricing_date:
        raise DomainError("Option maturity must be after pricing_date.")
    ttm = market.year_fraction(market.pricing_date, maturity)

    risk_free_rate = market.discount_curve.zero_rate(ttm)
    dividend_yield = (
        underlying.dividend_curve.zero_rate(ttm) if underlying.dividend_curve is not None else 0.0
    )
    strike = getattr(spec.payoff, "strike", None)
    if strike is None:
        strike = float(underlying.initial_value)
    volatility = underlying.black_vol(strike, ttm)

    logger.debug(
        "Flattened market at T=%.6f: r=%.6f q=%.6f vol=%.6f",
        ttm,
        risk_free_rate,
        dividend_yield,
        volatility,
    )
    return MarketSnapshot(
        spot=underlying.initial_value,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
        volatility=volatility,
        pricing_date=market.pricing_date,
        maturity=maturity,
        day_count_convention=market.day_count_convention,
    )
