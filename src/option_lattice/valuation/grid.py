"""Uniform time grid for the lattice."""

from __future__ import annotations
from dataclasses import dataclass, field
import datetime as dt
import numpy as np
import pandas as pd

from ..exceptions import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class TimeGrid:
    """``num_steps + 1`` equally spaced year fractions from 0 to ``maturity``.

    ``dates`` labels each time point with a calendar date when the grid is
    built from a pricing date; it is informational only, the lattice works
    on ``times``.
    """

    maturity: float
    num_steps: int
    start_date: dt.datetime | None = None
    end_date: dt.datetime | None = None
    times: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.maturity > 0.0:
            raise InvalidArgumentError(f"maturity must be positive, got {self.maturity}")
        if self.num_steps < 1:
            raise InvalidArgumentError(f"num_steps must be >= 1, got {self.num_steps}")
        if (self.start_date is None) != (self.end_date is None):
            raise InvalidArgumentError("start_date and end_date must be given together")
        object.__setattr__(self, "times", np.linspace(0.0, self.maturity, self.num_steps + 1))

    @property
    def dt(self) -> float:
        """Length of every step in years."""
        return self.maturity / self.num_steps

    @property
    def dates(self) -> pd.DatetimeIndex | None:
        """Calendar date of each time point, or None for a pure year-fraction grid."""
        if self.start_date is None:
            return None
        return pd.date_range(self.start_date, self.end_date, periods=self.num_steps + 1)

    def __len__(self) -> int:
        return self.num_steps + 1

    def __getitem__(self, i: int) -> float:
        return float(self.times[i])
