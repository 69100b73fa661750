"""Black volatility providers: constant volatility and a quoted surface."""

from dataclasses import dataclass
import numpy as np
from scipy.interpolate import griddata

from .exceptions import DomainError, ValidationError


class BlackVolatility:
    """Base class for Black volatility providers.

    Subclasses should implement get_vol() method.
    """

    def get_vol(self, strike: float, expiry: float) -> float:
        """Get Black volatility.

        Parameters
        ----------
        strike : float
            Strike price
        expiry : float
            Time to expiry in years

        Returns
        -------
        float
            Implied volatility
        """
        raise NotImplementedError("Subclasses must implement get_vol()")


@dataclass(frozen=True, slots=True)
class ConstantVolatility(BlackVolatility):
    """Flat volatility, identical for every strike and expiry."""

    volatility: float

    def __post_init__(self) -> None:
        vol = float(self.volatility)
        if not np.isfinite(vol):
            raise DomainError("volatility must be finite")
        if vol < 0.0:
            raise DomainError(f"volatility must be non-negative, got {vol}")
        object.__setattr__(self, "volatility", vol)

    def get_vol(self, strike: float, expiry: float) -> float:
        return self.volatility


@dataclass(frozen=True)
class VolatilityQuote:
    """Single volatility quote.

    Parameters
    ----------
    strike : float
        Strike price
    expiry : float
        Time to expiry in years
    implied_volatility : float
        Implied volatility (annualized)
    """

    strike: float
    expiry: float
    implied_volatility: float

    def __post_init__(self):
        """Validate parameters."""
        if self.strike <= 0:
            raise DomainError("strike must be positive")
        if self.expiry <= 0:
            raise DomainError("expiry must be positive")
        if self.implied_volatility < 0:
            raise DomainError("implied_volatility must be non-negative")


class VolatilitySurface(BlackVolatility):
    """Quoted volatilities interpolated over (strike, expiry).

    The lattice engine samples the surface once, at the option's strike and
    expiry, and prices with that single number.

    Parameters
    ----------
    quotes : list[VolatilityQuote]
        List of volatility quotes
    interpolation_method : str, optional
        Interpolation method: 'linear', 'cubic', 'nearest' (default: 'linear')
    """

    def __init__(
        self,
        quotes: list[VolatilityQuote],
        interpolation_method: str = "linear",
    ):
        if not quotes:
            raise ValidationError("quotes list cannot be empty")
        if interpolation_method not in ("linear", "cubic", "nearest"):
            raise ValidationError(
                f"interpolation_method must be 'linear', 'cubic' or 'nearest', "
                f"got {interpolation_method!r}"
            )

        self.quotes = quotes
        self.interpolation_method = interpolation_method

        self._strikes = np.array([q.strike for q in quotes], dtype=float)
        self._expiries = np.array([q.expiry for q in quotes], dtype=float)
        self._vols = np.array([q.implied_volatility for q in quotes], dtype=float)

    def get_vol(self, strike: float, expiry: float) -> float:
        """Get interpolated volatility for given strike and expiry.

        Raises
        ------
        DomainError
            If strike/expiry is outside the surface range
        """
        vol = griddata(
            (self._strikes, self._expiries),
            self._vols,
            (strike, expiry),
            method=self.interpolation_method,
            fill_value=np.nan,
        )

        if np.isnan(vol):
            raise DomainError(f"No volatility available for strike={strike}, expiry={expiry}")

        return float(vol)
