"""Outcome metrics on raw cash flow series."""

import numpy as np
import pytest

from core.config import EngineConfig
from core.schema import ROICalculationInputs
from outcomes.metrics import (
    confidence_score,
    payback_period,
    risk_adjusted_roi,
    simple_roi,
    total_return,
)


class TestPaybackPeriod:
    def test_interpolates_inside_crossing_period(self):
        payback, break_even = payback_period(np.array([-100.0, 50.0, 60.0]))
        assert payback == pytest.approx(1 + 50 / 60)
        assert break_even == pytest.approx(0.0, abs=1e-9)

    def test_exact_recovery_at_period_end(self):
        payback, _ = payback_period(np.array([-100.0, 40.0, 60.0, 10.0]))
        assert payback == pytest.approx(2.0)

    def test_not_recovered_returns_none(self):
        payback, break_even = payback_period(np.array([-100.0, 10.0, 10.0]))
        assert payback is None
        assert break_even == pytest.approx(-80.0)

    def test_nothing_invested_pays_back_immediately(self):
        payback, break_even = payback_period(np.array([0.0, 5.0]))
        assert payback == 0.0
        assert break_even == 0.0

    def test_dip_after_payback_keeps_first_crossing(self):
        payback, _ = payback_period(np.array([-100.0, 150.0, -200.0, 300.0]))
        assert payback == pytest.approx(100 / 150)


class TestROI:
    def test_total_return_includes_investment(self):
        assert total_return(np.array([-100.0, 50.0, 60.0, 70.0])) == pytest.approx(80.0)

    def test_roi_against_initial_investment(self):
        assert simple_roi(80.0, 100.0, 100.0) == pytest.approx(0.8)

    def test_roi_falls_back_to_total_outlays(self):
        assert simple_roi(5_000.0, 0.0, 5_000.0) == pytest.approx(1.0)

    def test_roi_with_no_outlays_is_zero(self):
        assert simple_roi(0.0, 0.0, 0.0) == 0.0

    def test_risk_adjustment_shrinks_gains(self):
        assert risk_adjusted_roi(0.8, 0.2) == pytest.approx(0.64)

    def test_risk_adjustment_deepens_losses(self):
        assert risk_adjusted_roi(-0.5, 0.2) == pytest.approx(-0.6)

    def test_zero_risk_is_identity(self):
        assert risk_adjusted_roi(0.37, 0.0) == 0.37


class TestConfidenceScore:
    def _inputs(self, n_benefits=3, horizon=3, risk=0.0):
        return ROICalculationInputs(
            initial_investment=100,
            annual_benefits=[50] * n_benefits,
            time_horizon=horizon,
            risk_factor=risk,
        )

    def test_reference_value(self):
        # (0.5 + 0.25 * 3/5 + 0.2 * 3/5) * (1 - 0.5 * 0.2)
        assert confidence_score(self._inputs(risk=0.2)) == pytest.approx(0.693)

    def test_capped(self):
        score = confidence_score(self._inputs(n_benefits=10, horizon=10))
        assert score == pytest.approx(0.95)
        assert score <= 0.95

    def test_strictly_decreasing_in_risk(self):
        scores = [confidence_score(self._inputs(risk=r)) for r in (0.0, 0.25, 0.5, 0.75, 1.0)]
        assert all(a > b for a, b in zip(scores, scores[1:]))

    def test_more_data_raises_confidence(self):
        assert confidence_score(self._inputs(n_benefits=5, horizon=5)) > confidence_score(
            self._inputs(n_benefits=1, horizon=1)
        )

    def test_bounds_across_inputs(self):
        for n in (1, 2, 5, 12):
            for risk in (0.0, 0.5, 1.0):
                score = confidence_score(self._inputs(n_benefits=n, horizon=n, risk=risk))
                assert 0.0 <= score <= 0.95

    def test_custom_cap(self):
        config = EngineConfig(confidence_cap=0.5)
        assert confidence_score(self._inputs(), config) == pytest.approx(0.5)
