from .enums import DayCountConvention, ExerciseType, OptionType, TreeModelType
from .market_environment import MarketData, MarketSnapshot
from .rates import DiscountCurve
from .volatility import ConstantVolatility, VolatilityQuote, VolatilitySurface
from .valuation import (
    BinomialParams,
    BinomialVanillaEngine,
    Exercise,
    GreeksResult,
    OptionSpec,
    PlainVanillaPayoff,
    UnderlyingPricingData,
    price_vanilla,
)


__all__ = [
    "DayCountConvention",
    "ExerciseType",
    "OptionType",
    "TreeModelType",
    "MarketData",
    "MarketSnapshot",
    "DiscountCurve",
    "ConstantVolatility",
    "VolatilityQuote",
    "VolatilitySurface",
    "BinomialParams",
    "BinomialVanillaEngine",
    "Exercise",
    "GreeksResult",
    "OptionSpec",
    "PlainVanillaPayoff",
    "UnderlyingPricingData",
    "price_vanilla",
]
