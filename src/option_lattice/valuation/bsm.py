"""Black-Scholes-Merton closed forms with continuous dividend yield.

Used as the convergence benchmark for the lattice, and for the PDE relation
that turns the lattice's value, delta and gamma into a theta.
"""

from __future__ import annotations
from typing import NamedTuple
import numpy as np
from scipy.stats import norm

from ..enums import OptionType
from ..market_environment import MarketSnapshot
from .core import PlainVanillaPayoff


class _BSMInputs(NamedTuple):
    """Pre-computed inputs shared across all BSM Greek calculations."""

    spot: float
    strike: float
    volatility: float
    time_to_maturity: float
    df_r: float
    df_q: float
    d1: float
    d2: float


def _calculate_d_values(
    spot: float,
    strike: float,
    time_to_maturity: float,
    volatility: float,
    df_r: float,
    df_q: float,
) -> tuple[float, float]:
    """Calculate d1 and d2 for BSM model.

    Parameters
    ----------
    spot
        Current spot price.
    strike
        Strike price.
    time_to_maturity
        Time to maturity in years.
    volatility
        Volatility (annualized).
    df_r
        Risk-free discount factor $P(0,T)$.
    df_q
        Dividend discount factor $D_q(0,T)$.

    Returns
    -------
    tuple[float, float]
        Pair ``(d1, d2)``.
    """
    forward = spot * df_q / df_r
    denominator = volatility * np.sqrt(time_to_maturity)

    if denominator < 1e-300:
        # Zero (or near-zero) vol: deterministic limit.
        # d1 = d2 = +inf when forward > strike  →  N(d) = 1
        # d1 = d2 = -inf when forward < strike  →  N(d) = 0
        # d1 = d2 = 0    when forward == strike →  N(d) = 0.5
        if forward > strike:
            return np.inf, np.inf
        elif forward < strike:
            return -np.inf, -np.inf
        else:
            return 0.0, 0.0

    numerator = np.log(forward / strike) + 0.5 * volatility**2 * time_to_maturity
    d1 = numerator / denominator
    d2 = d1 - denominator

    return d1, d2


def _bsm_inputs(snapshot: MarketSnapshot, payoff: PlainVanillaPayoff) -> _BSMInputs:
    ttm = snapshot.time_to_maturity
    df_r = float(np.exp(-snapshot.risk_free_rate * ttm))
    df_q = float(np.exp(-snapshot.dividend_yield * ttm))
    d1, d2 = _calculate_d_values(
        snapshot.spot, payoff.strike, ttm, snapshot.volatility, df_r, df_q
    )
    return _BSMInputs(
        spot=snapshot.spot,
        strike=payoff.strike,
        volatility=snapshot.volatility,
        time_to_maturity=ttm,
        df_r=df_r,
        df_q=df_q,
        d1=d1,
        d2=d2,
    )


def black_scholes_price(snapshot: MarketSnapshot, payoff: PlainVanillaPayoff) -> float:
    """Closed-form European option value."""
    inp = _bsm_inputs(snapshot, payoff)
    if payoff.option_type is OptionType.CALL:
        value = inp.spot * inp.df_q * norm.cdf(inp.d1) - inp.strike * inp.df_r * norm.cdf(inp.d2)
    else:
        value = inp.strike * inp.df_r * norm.cdf(-inp.d2) - inp.spot * inp.df_q * norm.cdf(-inp.d1)
    return float(value)


def black_scholes_delta(snapshot: MarketSnapshot, payoff: PlainVanillaPayoff) -> float:
    """delta = df_q * N(d1) for calls, df_q * (N(d1) - 1) for puts."""
    inp = _bsm_inputs(snapshot, payoff)
    if payoff.option_type is OptionType.CALL:
        return float(inp.df_q * norm.cdf(inp.d1))
    return float(inp.df_q * (norm.cdf(inp.d1) - 1))


def black_scholes_gamma(snapshot: MarketSnapshot, payoff: PlainVanillaPayoff) -> float:
    """gamma = df_q * N'(d1) / (S * sigma * sqrt(T)); zero in the zero-vol limit."""
    inp = _bsm_inputs(snapshot, payoff)
    if inp.volatility == 0.0:
        return 0.0
    return float(
        inp.df_q * norm.pdf(inp.d1) / (inp.spot * inp.volatility * np.sqrt(inp.time_to_maturity))
    )


def black_scholes_theta(snapshot: MarketSnapshot, payoff: PlainVanillaPayoff) -> float:
    """Closed-form theta per year (value change for a unit decrease in maturity).

    For call:
        theta = -(S * N'(d1) * sigma * e^(-qT)) / (2 * sqrt(T))
                - r * K * e^(-rT) * N(d2)
                + q * S * e^(-qT) * N(d1)

    For put:
        theta = -(S * N'(d1) * sigma * e^(-qT)) / (2 * sqrt(T))
                + r * K * e^(-rT) * N(-d2)
                - q * S * e^(-qT) * N(-d1)
    """
    inp = _bsm_inputs(snapshot, payoff)
    r = snapshot.risk_free_rate
    q = snapshot.dividend_yield

    term1 = -(
        inp.spot * inp.df_q * norm.pdf(inp.d1) * inp.volatility
        / (2 * np.sqrt(inp.time_to_maturity))
    )
    if payoff.option_type is OptionType.CALL:
        term2 = -r * inp.strike * inp.df_r * norm.cdf(inp.d2)
        term3 = q * inp.spot * inp.df_q * norm.cdf(inp.d1)
    else:
        term2 = r * inp.strike * inp.df_r * norm.cdf(-inp.d2)
        term3 = -q * inp.spot * inp.df_q * norm.cdf(-inp.d1)
    return float(term1 + term2 + term3)


def pde_theta(snapshot: MarketSnapshot, value: float, delta: float, gamma: float) -> float:
    """Theta implied by the Black-Scholes PDE at the current spot.

    .. math::

        \\Theta = rV - (r - q) S \\Delta - \\tfrac12 \\sigma^2 S^2 \\Gamma

    Exact for any European claim under the model; for an American option it
    holds in the continuation region.
    """
    r = snapshot.risk_free_rate
    q = snapshot.dividend_yield
    s = snapshot.spot
    vol = snapshot.volatility
    return float(r * value - (r - q) * s * delta - 0.5 * vol * vol * s * s * gamma)
