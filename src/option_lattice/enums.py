"""Enums for lattice option valuation."""

from enum import Enum

__all__ = [
    "OptionType",
    "ExerciseType",
    "TreeModelType",
    "DayCountConvention",
]


class OptionType(Enum):
    CALL = "call"
    PUT = "put"


class ExerciseType(Enum):
    EUROPEAN = "european"
    AMERICAN = "american"


class TreeModelType(Enum):
    COX_ROSS_RUBINSTEIN = "crr"
    JARROW_RUDD = "jr"
    TRIGEORGIS = "trigeorgis"
    TIAN = "tian"
    LEISEN_REIMER = "lr"


class DayCountConvention(Enum):
    ACT_360 = "ACT/360"
    ACT_365F = "ACT/365F"
    ACT_365_25 = "ACT/365.25"
    THIRTY_360_US = "30/360 US"
