"""Tests for binomial tree models (step parameters)."""

import numpy as np
import pytest

from option_lattice.enums import TreeModelType
from option_lattice.exceptions import (
    ArbitrageViolationError,
    InvalidArgumentError,
    NumericalDegeneracyError,
)
from option_lattice.valuation.trees import (
    CoxRossRubinstein,
    JarrowRudd,
    LeisenReimer,
    Tian,
    Trigeorgis,
    make_tree_model,
)

VOL = 0.20
DRIFT = 0.05
DT = 1.0 / 200


def _all_models():
    return [
        CoxRossRubinstein(),
        JarrowRudd(),
        Trigeorgis(),
        Tian(),
        LeisenReimer(spot=100.0, strike=100.0, maturity=1.0, num_steps=201),
    ]


class TestStepParameterInvariants:
    @pytest.mark.parametrize("model", _all_models(), ids=lambda m: m.name)
    def test_probability_in_unit_interval_and_ordering(self, model):
        up, down, p = model.step_parameters(VOL, DRIFT, DT)
        assert 0.0 <= p <= 1.0
        assert up > down > 0.0

    @pytest.mark.parametrize("model", _all_models(), ids=lambda m: m.name)
    def test_non_positive_step_rejected(self, model):
        for dt in (0.0, -0.01):
            with pytest.raises(InvalidArgumentError):
                model.step_parameters(VOL, DRIFT, dt)

    @pytest.mark.parametrize(
        "model", [CoxRossRubinstein(), Tian(), LeisenReimer(100.0, 100.0, 1.0, 201)],
        ids=lambda m: m.name,
    )
    def test_first_moment_matches_forward(self, model):
        """CRR, Tian and LR are martingale-exact: p*u + (1-p)*d = exp((r-q)dt)."""
        up, down, p = model.step_parameters(VOL, DRIFT, DT)
        assert np.isclose(p * up + (1 - p) * down, np.exp(DRIFT * DT), rtol=1e-12)


class TestCoxRossRubinstein:
    def test_symmetric_moves(self):
        up, down, _ = CoxRossRubinstein().step_parameters(VOL, DRIFT, DT)
        assert np.isclose(up, np.exp(VOL * np.sqrt(DT)))
        assert np.isclose(up * down, 1.0, rtol=1e-14)

    def test_zero_vol_saturates_probability(self):
        up, down, p = CoxRossRubinstein().step_parameters(0.0, DRIFT, DT)
        assert up == down == 1.0
        assert p == 1.0

    def test_zero_vol_negative_drift_saturates_to_zero(self):
        _, _, p = CoxRossRubinstein().step_parameters(0.0, -0.02, DT)
        assert p == 0.0

    def test_drift_outside_moves_raises(self):
        """exp((r-q)dt) above u implies p > 1."""
        with pytest.raises(ArbitrageViolationError):
            CoxRossRubinstein().step_parameters(0.01, 1.0, 1.0)


class TestOtherModels:
    def test_jarrow_rudd_equal_probabilities(self):
        up, down, p = JarrowRudd().step_parameters(VOL, DRIFT, DT)
        assert p == 0.5
        assert np.isclose(np.log(up / down), 2 * VOL * np.sqrt(DT))
        nu = DRIFT - 0.5 * VOL**2
        assert np.isclose(np.log(up * down), 2 * nu * DT)

    def test_trigeorgis_zero_vol_is_deterministic_drift(self):
        up, down, p = Trigeorgis().step_parameters(0.0, DRIFT, DT)
        assert p == 1.0
        assert np.isclose(np.log(up), DRIFT * DT)

    def test_trigeorgis_matches_log_variance(self):
        up, down, p = Trigeorgis().step_parameters(VOL, DRIFT, DT)
        nu = DRIFT - 0.5 * VOL**2
        dx = np.log(up)
        mean = p * dx - (1 - p) * dx
        var = dx**2 - mean**2
        assert np.isclose(mean, nu * DT)
        assert np.isclose(var, VOL**2 * DT)

    def test_tian_zero_vol_collapses(self):
        up, down, p = Tian().step_parameters(0.0, DRIFT, DT)
        assert up == down
        assert p == 1.0

    def test_leisen_reimer_requires_positive_vol(self):
        model = LeisenReimer(spot=100.0, strike=100.0, maturity=1.0, num_steps=101)
        with pytest.raises(NumericalDegeneracyError):
            model.step_parameters(0.0, DRIFT, DT)

    def test_leisen_reimer_invalid_construction(self):
        with pytest.raises(InvalidArgumentError):
            LeisenReimer(spot=100.0, strike=100.0, maturity=0.0, num_steps=101)


class TestFactory:
    @pytest.mark.parametrize(
        "tree_type, cls",
        [
            (TreeModelType.COX_ROSS_RUBINSTEIN, CoxRossRubinstein),
            (TreeModelType.JARROW_RUDD, JarrowRudd),
            (TreeModelType.TRIGEORGIS, Trigeorgis),
            (TreeModelType.TIAN, Tian),
            (TreeModelType.LEISEN_REIMER, LeisenReimer),
        ],
    )
    def test_make_tree_model(self, tree_type, cls):
        model = make_tree_model(tree_type, spot=100.0, strike=95.0, maturity=1.0, num_steps=50)
        assert isinstance(model, cls)

    def test_leisen_reimer_receives_contract(self):
        model = make_tree_model(
            TreeModelType.LEISEN_REIMER, spot=100.0, strike=95.0, maturity=0.5, num_steps=51
        )
        assert model.strike == 95.0
        assert model.maturity == 0.5
        assert model.num_steps == 51
