"""Binomial lattice valuation of vanilla options.

Public API
----------
Contract and market inputs:
    PlainVanillaPayoff: Call/put payoff against a fixed strike
    PayoffSpec: Arbitrary payoff (rejected by the lattice engine)
    Exercise: Exercise type and last exercise date
    OptionSpec: Payoff plus exercise
    UnderlyingPricingData: Spot, volatility provider, curves
    snapshot_market: Flatten market data into a MarketSnapshot

Engine:
    BinomialVanillaEngine: Configured engine (price / calculate)
    price_vanilla: Functional entry point
    GreeksResult: value, delta, gamma, theta
    BinomialParams: Engine configuration

Building blocks:
    TreeModel and its variants, TimeGrid, BinomialLattice,
    DiscretizedAsset, DiscretizedVanillaOption
"""

from .core import (
    Exercise,
    OptionSpec,
    PayoffSpec,
    PlainVanillaPayoff,
    UnderlyingPricingData,
    snapshot_market,
)
from .params import BinomialParams
from .trees import (
    CoxRossRubinstein,
    JarrowRudd,
    LeisenReimer,
    StepParameters,
    Tian,
    TreeModel,
    Trigeorgis,
    make_tree_model,
)
from .grid import TimeGrid
from .lattice import BinomialLattice
from .discretized import DiscretizedAsset, DiscretizedVanillaOption
from .engine import STENCIL_STEP, BinomialVanillaEngine, GreeksResult, price_vanilla
from .bsm import (
    black_scholes_delta,
    black_scholes_gamma,
    black_scholes_price,
    black_scholes_theta,
    pde_theta,
)

__all__ = [
    # Contract and market inputs
    "Exercise",
    "OptionSpec",
    "PayoffSpec",
    "PlainVanillaPayoff",
    "UnderlyingPricingData",
    "snapshot_market",
    # Engine
    "BinomialParams",
    "BinomialVanillaEngine",
    "GreeksResult",
    "STENCIL_STEP",
    "price_vanilla",
    # Building blocks
    "StepParameters",
    "TreeModel",
    "CoxRossRubinstein",
    "JarrowRudd",
    "Trigeorgis",
    "Tian",
    "LeisenReimer",
    "make_tree_model",
    "TimeGrid",
    "BinomialLattice",
    "DiscretizedAsset",
    "DiscretizedVanillaOption",
    # Closed forms
    "black_scholes_price",
    "black_scholes_delta",
    "black_scholes_gamma",
    "black_scholes_theta",
    "pde_theta",
]
