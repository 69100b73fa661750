"""Option values living on a lattice, rolled back one time step at a time."""

from __future__ import annotations
import numpy as np

from ..enums import ExerciseType
from ..exceptions import ConfigurationError, InvalidArgumentError, ValidationError
from .core import PlainVanillaPayoff
from .lattice import BinomialLattice


class DiscretizedAsset:
    """Value vector attached to one time step of a lattice.

    The vector is owned by this object and replaced (never shared) on every
    ``step_back``. After ``k`` calls following ``initialize`` it holds
    ``num_steps + 1 - k`` values for time step ``num_steps - k``.

    Subclasses provide the terminal values and may override
    :meth:`adjust_values`, which runs after every rollback.
    """

    def __init__(self) -> None:
        self.values: np.ndarray | None = None
        self.time_step: int | None = None

    def terminal_values(self, lattice: BinomialLattice) -> np.ndarray:
        raise NotImplementedError("Subclasses must implement terminal_values()")

    def adjust_values(self, lattice: BinomialLattice) -> None:
        """Hook applied to the freshly rolled-back values (default: none)."""

    def initialize(self, lattice: BinomialLattice) -> None:
        """Seed the values at the maturity step."""
        self.time_step = lattice.num_steps
        self.values = np.asarray(self.terminal_values(lattice), dtype=float)
        if self.values.shape != (lattice.size(self.time_step),):
            raise ValidationError(
                f"terminal values must have {lattice.size(self.time_step)} entries, "
                f"got shape {self.values.shape}"
            )

    def step_back(self, lattice: BinomialLattice) -> None:
        """Roll back exactly one time step, then apply :meth:`adjust_values`."""
        if self.values is None or self.time_step is None:
            raise ValidationError("initialize() must be called before step_back()")
        if self.time_step == 0:
            raise InvalidArgumentError("already at time step 0, cannot roll back further")
        self.values = lattice.rollback(self.values, self.time_step - 1)
        self.time_step -= 1
        self.adjust_values(lattice)

    def rollback_to(self, lattice: BinomialLattice, step: int) -> None:
        """Step back, in strictly decreasing time order, until ``step`` is reached."""
        if self.time_step is None:
            raise ValidationError("initialize() must be called before rollback_to()")
        if not 0 <= step <= self.time_step:
            raise InvalidArgumentError(
                f"cannot roll back from step {self.time_step} to step {step}"
            )
        while self.time_step > step:
            self.step_back(lattice)


class DiscretizedVanillaOption(DiscretizedAsset):
    """Plain call/put on the lattice, European or American.

    For American exercise each node is floored at its intrinsic value after
    discounting, at every step.
    """

    def __init__(self, payoff: PlainVanillaPayoff, exercise_type: ExerciseType) -> None:
        super().__init__()
        if not isinstance(exercise_type, ExerciseType):
            raise ConfigurationError(
                f"exercise_type must be ExerciseType enum, got {type(exercise_type).__name__}"
            )
        self.payoff = payoff
        self.exercise_type = exercise_type

    def terminal_values(self, lattice: BinomialLattice) -> np.ndarray:
        return self.payoff(lattice.underlying_prices(lattice.num_steps))

    def adjust_values(self, lattice: BinomialLattice) -> None:
        if self.exercise_type is ExerciseType.AMERICAN:
            intrinsic = self.payoff(lattice.underlying_prices(self.time_step))
            self.values = np.maximum(self.values, intrinsic)
