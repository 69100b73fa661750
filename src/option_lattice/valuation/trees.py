"""Binomial tree models: per-step up/down factors and risk-neutral probability.

Every model is a strategy with one method,
``step_parameters(volatility, drift, dt) -> StepParameters``. The down factor
never depends on the path taken, so an up move followed by a down move lands
on the same price as a down move followed by an up move and the lattice
recombines (``n + 1`` nodes after ``n`` steps).

``drift`` is the risk-neutral growth rate ``r - q``. With zero volatility
the up and down factors coincide and the probability saturates to 1 for a
non-negative drift and to 0 otherwise.
"""

from __future__ import annotations
from typing import NamedTuple
import logging
import numpy as np

from ..enums import TreeModelType
from ..exceptions import (
    ArbitrageViolationError,
    InvalidArgumentError,
    NumericalDegeneracyError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "StepParameters",
    "TreeModel",
    "CoxRossRubinstein",
    "JarrowRudd",
    "Trigeorgis",
    "Tian",
    "LeisenReimer",
    "make_tree_model",
]


class StepParameters(NamedTuple):
    """Multiplicative moves and up-probability for one time step."""

    up: float
    down: float
    probability: float


def _saturated_probability(drift: float) -> float:
    return 1.0 if drift >= 0.0 else 0.0


def _checked(name: str, up: float, down: float, probability: float) -> StepParameters:
    """Enforce 0 <= p <= 1 and up >= down > 0."""
    if not (0.0 <= probability <= 1.0):
        raise ArbitrageViolationError(
            f"{name}: risk-neutral probability {probability:.6g} outside [0, 1]"
        )
    if not (down > 0.0 and up >= down):
        raise ArbitrageViolationError(
            f"{name}: invalid move ordering up={up:.6g}, down={down:.6g}"
        )
    return StepParameters(float(up), float(down), float(probability))


class TreeModel:
    """Base class for binomial discretization schemes.

    Subclasses should implement step_parameters() method.
    """

    name = "tree"

    def step_parameters(self, volatility: float, drift: float, dt: float) -> StepParameters:
        """Up factor, down factor and up-probability for a step of length dt.

        Parameters
        ----------
        volatility : float
            Annualized volatility over the step (>= 0).
        drift : float
            Risk-neutral growth rate ``r - q`` over the step.
        dt : float
            Step length in years (> 0).
        """
        raise NotImplementedError("Subclasses must implement step_parameters()")

    @staticmethod
    def _require_positive_step(dt: float) -> None:
        if not dt > 0.0:
            raise InvalidArgumentError(f"step length must be positive, got {dt}")


class CoxRossRubinstein(TreeModel):
    """Cox-Ross-Rubinstein: ``u = exp(sigma sqrt(dt))``, ``d = 1/u``.

    The probability matches the first moment exactly:
    ``p = (exp((r - q) dt) - d) / (u - d)``.
    """

    name = "Cox-Ross-Rubinstein"

    def step_parameters(self, volatility: float, drift: float, dt: float) -> StepParameters:
        self._require_positive_step(dt)
        dx = volatility * np.sqrt(dt)
        if dx == 0.0:
            return _checked(self.name, 1.0, 1.0, _saturated_probability(drift))
        up = np.exp(dx)
        down = np.exp(-dx)
        growth = np.exp(drift * dt)
        return _checked(self.name, up, down, (growth - down) / (up - down))


class JarrowRudd(TreeModel):
    """Jarrow-Rudd equal-probability tree centred on the log drift."""

    name = "Jarrow-Rudd"

    def step_parameters(self, volatility: float, drift: float, dt: float) -> StepParameters:
        self._require_positive_step(dt)
        nu = drift - 0.5 * volatility**2
        dx = volatility * np.sqrt(dt)
        up = np.exp(nu * dt + dx)
        down = np.exp(nu * dt - dx)
        if dx == 0.0:
            return _checked(self.name, up, down, _saturated_probability(drift))
        return _checked(self.name, up, down, 0.5)


class Trigeorgis(TreeModel):
    """Trigeorgis log-transformed tree: symmetric log moves, drift in p."""

    name = "Trigeorgis"

    def step_parameters(self, volatility: float, drift: float, dt: float) -> StepParameters:
        self._require_positive_step(dt)
        nu = drift - 0.5 * volatility**2
        dx = np.sqrt(volatility**2 * dt + (nu * dt) ** 2)
        if dx == 0.0:
            return _checked(self.name, 1.0, 1.0, _saturated_probability(drift))
        if volatility == 0.0:
            # deterministic drift: every path follows the sign of nu
            return _checked(self.name, np.exp(dx), np.exp(-dx), 1.0 if nu > 0.0 else 0.0)
        return _checked(self.name, np.exp(dx), np.exp(-dx), 0.5 + 0.5 * nu * dt / dx)


class Tian(TreeModel):
    """Tian third-moment-matching tree."""

    name = "Tian"

    def step_parameters(self, volatility: float, drift: float, dt: float) -> StepParameters:
        self._require_positive_step(dt)
        q = np.exp(volatility**2 * dt)
        r = np.exp(drift * dt)
        root = np.sqrt(q * q + 2.0 * q - 3.0)
        up = 0.5 * r * q * (q + 1.0 + root)
        down = 0.5 * r * q * (q + 1.0 - root)
        if up == down:
            return _checked(self.name, up, down, _saturated_probability(drift))
        return _checked(self.name, up, down, (r - down) / (up - down))


def _peizer_pratt_inversion(z: float, n: int) -> float:
    """Peizer-Pratt method 2 inversion of the normal CDF on an n-step tree."""
    denom = n + 1.0 / 3.0 + 0.1 / (n + 1.0)
    inner = 1.0 - np.exp(-((z / denom) ** 2) * (n + 1.0 / 6.0))
    return float(0.5 + np.copysign(0.5, z) * np.sqrt(max(inner, 0.0)))


class LeisenReimer(TreeModel):
    """Leisen-Reimer tree; nodes are centred on the strike at maturity.

    Unlike the other models it needs the contract: spot, strike, maturity and
    step count enter the Peizer-Pratt inversion. Convergence is smooth and
    close to second order, best with an odd number of steps.
    """

    name = "Leisen-Reimer"

    def __init__(self, spot: float, strike: float, maturity: float, num_steps: int) -> None:
        if not maturity > 0.0:
            raise InvalidArgumentError(f"maturity must be positive, got {maturity}")
        if num_steps < 1:
            raise InvalidArgumentError(f"num_steps must be >= 1, got {num_steps}")
        self.spot = float(spot)
        self.strike = float(strike)
        self.maturity = float(maturity)
        self.num_steps = int(num_steps)

    def step_parameters(self, volatility: float, drift: float, dt: float) -> StepParameters:
        self._require_positive_step(dt)
        if volatility <= 0.0:
            raise NumericalDegeneracyError(
                "Leisen-Reimer tree requires positive volatility"
            )
        sd = volatility * np.sqrt(self.maturity)
        d1 = (np.log(self.spot / self.strike) + (drift + 0.5 * volatility**2) * self.maturity) / sd
        d2 = d1 - sd
        p_up = _peizer_pratt_inversion(d2, self.num_steps)
        p_dash = _peizer_pratt_inversion(d1, self.num_steps)
        growth = np.exp(drift * dt)
        up = growth * p_dash / p_up
        down = (growth - p_up * up) / (1.0 - p_up)
        return _checked(self.name, up, down, p_up)


_SIMPLE_MODELS: dict[TreeModelType, type[TreeModel]] = {
    TreeModelType.COX_ROSS_RUBINSTEIN: CoxRossRubinstein,
    TreeModelType.JARROW_RUDD: JarrowRudd,
    TreeModelType.TRIGEORGIS: Trigeorgis,
    TreeModelType.TIAN: Tian,
}


def make_tree_model(
    tree_type: TreeModelType,
    *,
    spot: float,
    strike: float,
    maturity: float,
    num_steps: int,
) -> TreeModel:
    """Instantiate the tree model selected by ``tree_type``."""
    if tree_type is TreeModelType.LEISEN_REIMER:
        model: TreeModel = LeisenReimer(spot, strike, maturity, num_steps)
    else:
        model = _SIMPLE_MODELS[tree_type]()
    logger.debug("Tree model %s num_steps=%d", model.name, num_steps)
    return model
