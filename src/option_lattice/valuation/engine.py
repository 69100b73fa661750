"""Binomial pricing engine for vanilla options: value, delta, gamma and theta.

One backward induction produces everything:

1. the option is seeded at maturity and rolled back to time step 2, the
   first layer of the tree that holds three nodes (for ``num_steps == 2``
   that is maturity itself, no rollback needed);
2. delta and gamma are read off those three nodes by finite differences;
3. the same rollback continues to the root for the value;
4. theta follows from the Black-Scholes PDE given value, delta and gamma,
   so no extra time layer has to be carried.

No separate tree with three nodes at t=0 is built, so delta and gamma are
measured ``2 dt`` after the valuation date (error O(dt)).
"""

from __future__ import annotations
from dataclasses import asdict, dataclass
import numbers
import logging
import numpy as np
import pandas as pd

from ..enums import ExerciseType, TreeModelType
from ..exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    NumericalDegeneracyError,
    UnsupportedPayoffError,
)
from ..market_environment import MarketSnapshot
from ..utils import log_timing
from .bsm import pde_theta
from .core import OptionSpec, PlainVanillaPayoff, UnderlyingPricingData, snapshot_market
from .discretized import DiscretizedVanillaOption
from .grid import TimeGrid
from .lattice import BinomialLattice
from .params import MIN_STEPS, BinomialParams
from .trees import make_tree_model

logger = logging.getLogger(__name__)

# Time step whose three nodes form the finite-difference stencil.
STENCIL_STEP = 2

DAYS_PER_YEAR = 365.0


@dataclass(frozen=True, slots=True)
class GreeksResult:
    """Value and sensitivities from one lattice pass.

    ``theta`` is per year: the value change for a unit decrease in time to
    maturity, in the sign convention of dV/dt.
    """

    value: float
    delta: float
    gamma: float
    theta: float

    @property
    def theta_per_day(self) -> float:
        return self.theta / DAYS_PER_YEAR

    def as_dict(self) -> dict[str, float]:
        return asdict(self)

    def to_series(self) -> pd.Series:
        return pd.Series(self.as_dict(), dtype=float)


def _stencil_greeks(values: np.ndarray, prices: np.ndarray) -> tuple[float, float]:
    """Delta and gamma from three adjacent nodes (low, mid, high)."""
    p_down, p_mid, p_up = (float(v) for v in values)
    s_down, s_mid, s_up = (float(s) for s in prices)

    spread = s_up - s_down
    if spread == 0.0 or s_up == s_mid or s_down == s_mid:
        raise NumericalDegeneracyError(
            "degenerate lattice: zero price spread in the delta/gamma stencil "
            f"(s_down={s_down}, s_mid={s_mid}, s_up={s_up})"
        )

    delta = (p_up - p_down) / spread
    delta_up = (p_up - p_mid) / (s_up - s_mid)
    delta_down = (p_down - p_mid) / (s_down - s_mid)
    gamma = (delta_up - delta_down) / (spread / 2.0)
    return delta, gamma


def _validate_num_steps(num_steps) -> int:
    if isinstance(num_steps, bool) or not isinstance(num_steps, numbers.Integral):
        raise ConfigurationError(f"num_steps must be an int, got {type(num_steps).__name__}")
    if num_steps < MIN_STEPS:
        raise InvalidArgumentError(
            f"at least {MIN_STEPS} time steps required, {num_steps} provided"
        )
    return int(num_steps)


def price_vanilla(
    snapshot: MarketSnapshot,
    payoff: PlainVanillaPayoff,
    num_steps: int,
    *,
    tree_model: TreeModelType | str = TreeModelType.COX_ROSS_RUBINSTEIN,
    exercise_type: ExerciseType = ExerciseType.EUROPEAN,
    log_timings: bool = False,
) -> GreeksResult:
    """Price a plain-vanilla option on a binomial lattice.

    Parameters
    ==========
    snapshot: MarketSnapshot
        flat market inputs (spot > 0 is guaranteed by the snapshot)
    payoff: PlainVanillaPayoff
        call or put; anything else raises UnsupportedPayoffError
    num_steps: int
        lattice resolution, >= 2
    tree_model: TreeModelType | str
        discretization scheme, default Cox-Ross-Rubinstein
    exercise_type: ExerciseType
        EUROPEAN, or AMERICAN to apply early exercise at every node
    log_timings: bool
        log rollback timing at DEBUG level

    Returns
    =======
    GreeksResult
        value, delta, gamma, theta (per year)

    Raises
    ======
    UnsupportedPayoffError
        payoff is not a PlainVanillaPayoff
    InvalidArgumentError
        num_steps < 2
    NumericalDegeneracyError
        the three stencil nodes do not spread (e.g. zero volatility)
    """
    if not isinstance(snapshot, MarketSnapshot):
        raise ConfigurationError(
            f"snapshot must be a MarketSnapshot, got {type(snapshot).__name__}"
        )
    if not isinstance(payoff, PlainVanillaPayoff):
        raise UnsupportedPayoffError(f"non-plain payoff given: {type(payoff).__name__}")
    num_steps = _validate_num_steps(num_steps)
    if isinstance(tree_model, str):
        try:
            tree_model = TreeModelType(tree_model)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown tree_model {tree_model!r}") from exc
    if not isinstance(exercise_type, ExerciseType):
        raise ConfigurationError(
            f"exercise_type must be ExerciseType enum, got {type(exercise_type).__name__}"
        )

    maturity = snapshot.time_to_maturity
    grid = TimeGrid(maturity, num_steps, snapshot.pricing_date, snapshot.maturity)
    model = make_tree_model(
        tree_model,
        spot=snapshot.spot,
        strike=payoff.strike,
        maturity=maturity,
        num_steps=num_steps,
    )
    lattice = BinomialLattice(
        model,
        spot=snapshot.spot,
        risk_free_rate=snapshot.risk_free_rate,
        drift=snapshot.drift,
        volatility=snapshot.volatility,
        grid=grid,
    )

    option = DiscretizedVanillaOption(payoff, exercise_type)
    with log_timing(logger, f"Binomial {exercise_type.value} rollback", log_timings):
        option.initialize(lattice)
        option.rollback_to(lattice, STENCIL_STEP)
        stencil_values = option.values
        stencil_prices = lattice.underlying_prices(STENCIL_STEP)
        option.rollback_to(lattice, 0)

    value = float(option.values[0])
    delta, gamma = _stencil_greeks(stencil_values, stencil_prices)
    theta = pde_theta(snapshot, value, delta, gamma)

    if not np.all(np.isfinite([value, delta, gamma, theta])):
        raise NumericalDegeneracyError(
            f"non-finite lattice result: value={value}, delta={delta}, "
            f"gamma={gamma}, theta={theta}"
        )

    logger.debug(
        "Binomial %s %s N=%d: value=%.6f delta=%.6f gamma=%.6f theta=%.6f",
        exercise_type.value,
        payoff.option_type.value,
        num_steps,
        value,
        delta,
        gamma,
        theta,
    )
    return GreeksResult(value=value, delta=delta, gamma=gamma, theta=theta)


class BinomialVanillaEngine:
    """Pricing engine for vanilla options on binomial trees.

    The engine holds configuration only; every call builds its own lattice
    and value buffer, so one engine can serve concurrent callers.

    Attributes
    ==========
    params: BinomialParams
        step count, tree model and timing flag

    Methods
    =======
    price:
        Price from an already flattened MarketSnapshot.
    calculate:
        Snapshot (and flatten) the market for a contract, then price it.
    """

    def __init__(self, params: BinomialParams | None = None) -> None:
        if params is None:
            params = BinomialParams()
        if not isinstance(params, BinomialParams):
            raise ConfigurationError(
                f"params must be BinomialParams, got {type(params).__name__}"
            )
        self.params = params

    def price(
        self,
        snapshot: MarketSnapshot,
        payoff: PlainVanillaPayoff,
        exercise_type: ExerciseType = ExerciseType.EUROPEAN,
    ) -> GreeksResult:
        """Price a payoff against flat market inputs."""
        return price_vanilla(
            snapshot,
            payoff,
            self.params.num_steps,
            tree_model=self.params.tree_model,
            exercise_type=exercise_type,
            log_timings=self.params.log_timings,
        )

    def calculate(self, underlying: UnderlyingPricingData, spec: OptionSpec) -> GreeksResult:
        """Flatten the market for ``spec`` and price it."""
        snapshot = snapshot_market(underlying, spec)
        return self.price(snapshot, spec.payoff, spec.exercise_type)
