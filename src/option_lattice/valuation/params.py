"""Configuration for the binomial lattice engine."""

from dataclasses import dataclass
import numbers

from ..enums import TreeModelType
from ..exceptions import ConfigurationError, InvalidArgumentError

MIN_STEPS = 2


@dataclass(frozen=True, slots=True)
class BinomialParams:
    """Parameters for binomial tree option valuation.

    Attributes
    ==========
    num_steps:
        Number of time steps in the binomial tree. More steps increase
        accuracy but also computation time. Must be >= 2 so that a
        three-node layer exists for delta/gamma extraction.
        Default: 500.
    tree_model:
        Discretization scheme used to build the tree.
        Default: Cox-Ross-Rubinstein.
    log_timings:
        Emit DEBUG timing records for the rollback.
    """

    num_steps: int = 500
    tree_model: TreeModelType | str = TreeModelType.COX_ROSS_RUBINSTEIN
    log_timings: bool = False

    def __post_init__(self):
        if isinstance(self.tree_model, str):
            try:
                object.__setattr__(self, "tree_model", TreeModelType(self.tree_model))
            except ValueError as exc:
                raise ConfigurationError(f"Unknown tree_model {self.tree_model!r}") from exc
        if not isinstance(self.tree_model, TreeModelType):
            raise ConfigurationError(
                f"tree_model must be a TreeModelType, got {type(self.tree_model).__name__}"
            )
        if isinstance(self.num_steps, bool) or not isinstance(self.num_steps, numbers.Integral):
            raise ConfigurationError(
                f"num_steps must be an int, got {type(self.num_steps).__name__}"
            )
        object.__setattr__(self, "num_steps", int(self.num_steps))
        if self.num_steps < MIN_STEPS:
            raise InvalidArgumentError(
                f"at least {MIN_STEPS} time steps required, {self.num_steps} provided"
            )
