"""Tests for option values rolled back on the lattice."""

import numpy as np
import pytest

from option_lattice.enums import ExerciseType, OptionType
from option_lattice.exceptions import ConfigurationError, InvalidArgumentError, ValidationError
from option_lattice.valuation.core import PlainVanillaPayoff
from option_lattice.valuation.discretized import DiscretizedAsset, DiscretizedVanillaOption
from option_lattice.valuation.grid import TimeGrid
from option_lattice.valuation.lattice import BinomialLattice
from option_lattice.valuation.trees import CoxRossRubinstein


def _lattice(num_steps: int = 6, drift: float = 0.05) -> BinomialLattice:
    return BinomialLattice(
        CoxRossRubinstein(),
        spot=100.0,
        risk_free_rate=0.05,
        drift=drift,
        volatility=0.2,
        grid=TimeGrid(1.0, num_steps),
    )


def _option(option_type=OptionType.PUT, exercise_type=ExerciseType.EUROPEAN):
    return DiscretizedVanillaOption(PlainVanillaPayoff(option_type, 100.0), exercise_type)


class TestInitialize:
    def test_terminal_values_are_payoff(self):
        lattice = _lattice()
        option = _option(OptionType.CALL)
        option.initialize(lattice)
        assert option.time_step == 6
        expected = np.maximum(lattice.underlying_prices(6) - 100.0, 0.0)
        assert np.array_equal(option.values, expected)

    def test_step_back_before_initialize(self):
        with pytest.raises(ValidationError):
            _option().step_back(_lattice())

    def test_base_class_requires_terminal_values(self):
        with pytest.raises(NotImplementedError):
            DiscretizedAsset().initialize(_lattice())

    def test_bad_exercise_type(self):
        with pytest.raises(ConfigurationError):
            DiscretizedVanillaOption(PlainVanillaPayoff(OptionType.PUT, 100.0), "american")


class TestStepBack:
    def test_size_shrinks_by_one_per_step(self):
        lattice = _lattice(num_steps=6)
        option = _option()
        option.initialize(lattice)
        for k in range(1, 7):
            option.step_back(lattice)
            assert option.time_step == 6 - k
            assert option.values.shape == (6 + 1 - k,)

    def test_cannot_step_past_root(self):
        lattice = _lattice(num_steps=2)
        option = _option()
        option.initialize(lattice)
        option.rollback_to(lattice, 0)
        with pytest.raises(InvalidArgumentError):
            option.step_back(lattice)

    def test_rollback_to_matches_repeated_step_back(self):
        lattice = _lattice()
        a, b = _option(), _option()
        a.initialize(lattice)
        b.initialize(lattice)
        a.rollback_to(lattice, 2)
        for _ in range(4):
            b.step_back(lattice)
        assert np.array_equal(a.values, b.values)

    def test_rollback_to_later_step_rejected(self):
        lattice = _lattice()
        option = _option()
        option.initialize(lattice)
        option.rollback_to(lattice, 3)
        with pytest.raises(InvalidArgumentError):
            option.rollback_to(lattice, 4)

    def test_rollback_to_current_step_is_noop(self):
        lattice = _lattice()
        option = _option()
        option.initialize(lattice)
        before = option.values.copy()
        option.rollback_to(lattice, 6)
        assert np.array_equal(option.values, before)

    def test_captured_values_survive_further_rollback(self):
        lattice = _lattice()
        option = _option()
        option.initialize(lattice)
        option.rollback_to(lattice, 2)
        captured = option.values
        snapshot = captured.copy()
        option.rollback_to(lattice, 0)
        assert np.array_equal(captured, snapshot)


class TestAmericanHook:
    def test_american_values_dominate_intrinsic(self):
        lattice = _lattice(num_steps=20)
        option = _option(OptionType.PUT, ExerciseType.AMERICAN)
        option.initialize(lattice)
        while option.time_step > 0:
            option.step_back(lattice)
            intrinsic = np.maximum(100.0 - lattice.underlying_prices(option.time_step), 0.0)
            assert np.all(option.values >= intrinsic)

    def test_american_put_dominates_european(self):
        lattice = _lattice(num_steps=20)
        american = _option(OptionType.PUT, ExerciseType.AMERICAN)
        european = _option(OptionType.PUT, ExerciseType.EUROPEAN)
        for option in (american, european):
            option.initialize(lattice)
            option.rollback_to(lattice, 0)
        assert american.values[0] > european.values[0]

    def test_european_has_no_adjustment(self):
        lattice = _lattice(num_steps=4)
        option = _option(OptionType.PUT, ExerciseType.EUROPEAN)
        option.initialize(lattice)
        expected = lattice.rollback(option.values, 3)
        option.step_back(lattice)
        assert np.array_equal(option.values, expected)
