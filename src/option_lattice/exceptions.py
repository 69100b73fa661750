"""Custom exception hierarchy for the option_lattice library.

All library-specific exceptions inherit from :class:`LatticePricingError`,
enabling callers to catch *any* library error with a single ``except`` clause::

    try:
        result = BinomialVanillaEngine(params).calculate(underlying, spec)
    except LatticePricingError as exc:
        log.error("Pricing failed: %s", exc)

Every error except :class:`NumericalDegeneracyError` is raised before the
lattice is built; a failed pricing call never returns a partial result.
"""

from __future__ import annotations


class LatticePricingError(Exception):
    """Base exception for all library errors."""


# ── Input validation ────────────────────────────────────────────────


class ValidationError(LatticePricingError):
    """Invalid input values (out-of-range, non-finite, inconsistent inputs, etc.)."""


class InvalidArgumentError(ValidationError):
    """Engine arguments out of range (step count < 2, non-positive step length)."""


class DomainError(ValidationError):
    """Market or contract input outside its mathematical domain (spot <= 0, vol < 0)."""


class ConfigurationError(LatticePricingError):
    """Wrong types passed to a public API (e.g. raw int instead of enum)."""


# ── Feature support ─────────────────────────────────────────────────


class UnsupportedFeatureError(LatticePricingError):
    """Requested feature combination is not (yet) supported."""


class UnsupportedPayoffError(UnsupportedFeatureError):
    """Payoff is not a plain-vanilla call/put."""


# ── Numerical issues ────────────────────────────────────────────────


class NumericalError(LatticePricingError):
    """Base for errors arising from numerical computation."""


class ArbitrageViolationError(NumericalError):
    """Tree parameters imply an arbitrage (risk-neutral probability outside [0, 1])."""


class NumericalDegeneracyError(NumericalError):
    """Finite-difference stencil collapsed (zero price spread), Greeks are undefined."""
