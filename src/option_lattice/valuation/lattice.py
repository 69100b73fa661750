"""Recombining binomial lattice with a discounted-expectation rollback."""

from __future__ import annotations
import logging
import numpy as np
import pandas as pd

from ..exceptions import DomainError, InvalidArgumentError
from .grid import TimeGrid
from .trees import StepParameters, TreeModel

logger = logging.getLogger(__name__)


class BinomialLattice:
    """Black-Scholes binomial lattice with constant coefficients.

    Node ``j`` at step ``i`` (``0 <= j <= i``) is reached by ``j`` up moves
    and ``i - j`` down moves, so its price is ``S0 * u**j * d**(i - j)``;
    prices increase with ``j``. Nothing here is mutated after construction:
    lookups and rollbacks are pure functions of their arguments.

    Parameters
    ==========
    tree_model: TreeModel
        discretization scheme providing (up, down, probability)
    spot: float
        underlying price at the root, must be > 0
    risk_free_rate: float
        flat continuously-compounded rate used for discounting
    drift: float
        risk-neutral growth rate r - q
    volatility: float
        flat volatility
    grid: TimeGrid
        uniform time grid; every step shares the same parameters
    """

    def __init__(
        self,
        tree_model: TreeModel,
        *,
        spot: float,
        risk_free_rate: float,
        drift: float,
        volatility: float,
        grid: TimeGrid,
    ) -> None:
        if not spot > 0.0:
            raise DomainError(f"non-positive underlying given: {spot}")
        self.tree_model = tree_model
        self.spot = float(spot)
        self.risk_free_rate = float(risk_free_rate)
        self.grid = grid
        self._params: StepParameters = tree_model.step_parameters(volatility, drift, grid.dt)
        self._discount = float(np.exp(-self.risk_free_rate * grid.dt))
        logger.debug(
            "Lattice %s: steps=%d dt=%.6f u=%.8f d=%.8f p=%.8f df=%.8f",
            tree_model.name,
            grid.num_steps,
            grid.dt,
            self._params.up,
            self._params.down,
            self._params.probability,
            self._discount,
        )

    @property
    def num_steps(self) -> int:
        return self.grid.num_steps

    def step_parameters(self, step: int) -> StepParameters:
        """Tree parameters on the interval ``[t_step, t_step+1]``."""
        self._check_step(step, last=self.num_steps - 1)
        return self._params

    def discount(self, step: int) -> float:
        """One-step discount factor on ``[t_step, t_step+1]``."""
        self._check_step(step, last=self.num_steps - 1)
        return self._discount

    def size(self, step: int) -> int:
        """Number of nodes at ``step``."""
        return step + 1

    def underlying(self, step: int, node: int) -> float:
        """Underlying price at node ``node`` of time step ``step``."""
        self._check_step(step, last=self.num_steps)
        if not 0 <= node <= step:
            raise InvalidArgumentError(f"node {node} outside [0, {step}] at step {step}")
        up, down, _ = self._params
        return float(self.spot * up**node * down ** (step - node))

    def underlying_prices(self, step: int) -> np.ndarray:
        """All node prices at ``step``, lowest first."""
        self._check_step(step, last=self.num_steps)
        up, down, _ = self._params
        j = np.arange(step + 1)
        return self.spot * up**j * down ** (step - j)

    def rollback(self, values: np.ndarray, step: int) -> np.ndarray:
        """Discounted risk-neutral expectation from step ``step + 1`` to ``step``.

        ``out[j] = df * (p * values[j + 1] + (1 - p) * values[j])``; the input
        is left untouched and a new, one-shorter array is returned.
        """
        self._check_step(step, last=self.num_steps - 1)
        values = np.asarray(values, dtype=float)
        if values.shape != (step + 2,):
            raise InvalidArgumentError(
                f"rollback to step {step} expects {step + 2} values, got shape {values.shape}"
            )
        p = self._params.probability
        return self._discount * (p * values[1:] + (1.0 - p) * values[:-1])

    def to_frame(self, max_steps: int | None = None) -> pd.DataFrame:
        """Node prices as a table: rows are node indices, columns time steps.

        Unreached cells are NaN. Columns are labelled with grid dates when the
        grid carries them.
        """
        last = self.num_steps if max_steps is None else min(int(max_steps), self.num_steps)
        table = np.full((last + 1, last + 1), np.nan)
        for step in range(last + 1):
            table[: step + 1, step] = self.underlying_prices(step)
        dates = self.grid.dates
        columns = dates[: last + 1] if dates is not None else pd.RangeIndex(last + 1, name="step")
        return pd.DataFrame(table, index=pd.RangeIndex(last + 1, name="node"), columns=columns)

    def _check_step(self, step: int, *, last: int) -> None:
        if not 0 <= step <= last:
            raise InvalidArgumentError(f"time step {step} outside [0, {last}]")
