"""Decision report flags and table."""

import pytest

from engine.pipeline import calculate_roi
from engine.runner import run_monte_carlo_simulation
from outcomes.decisions import generate_decision_report


def _flag_names(report):
    return [f.split(":")[0] for f in report.flags]


class TestGenerateDecisionReport:
    def test_healthy_case_has_no_flags(self, profitable_inputs):
        report = generate_decision_report(calculate_roi(profitable_inputs), name="CRM rollout")
        assert report.flags == []
        assert report.name == "CRM rollout"
        assert report.mean_roi is None

    def test_losing_case_flags(self, unprofitable_inputs):
        report = generate_decision_report(calculate_roi(unprofitable_inputs))
        names = _flag_names(report)
        assert "NEGATIVE_NPV" in names
        assert "NO_PAYBACK" in names

    def test_hurdle_rate(self, profitable_inputs):
        result = calculate_roi(profitable_inputs)
        assert "BELOW_HURDLE" in _flag_names(generate_decision_report(result, hurdle_rate=0.5))
        assert "BELOW_HURDLE" not in _flag_names(generate_decision_report(result, hurdle_rate=0.1))

    def test_undefined_irr_flag(self):
        result = calculate_roi({"initial_investment": 1_000, "annual_benefits": [1], "time_horizon": 1})
        assert "IRR_UNDEFINED" in _flag_names(generate_decision_report(result))

    def test_low_confidence_flag(self):
        result = calculate_roi({
            "initial_investment": 100, "annual_benefits": [300], "time_horizon": 1, "risk_factor": 0.9,
        })
        assert "LOW_CONFIDENCE" in _flag_names(generate_decision_report(result))

    def test_simulation_fields_and_downside_flag(self, unprofitable_inputs):
        simulation = run_monte_carlo_simulation(
            unprofitable_inputs, {"annual_benefits": {"min": 0.8, "max": 1.2}}, 50, seed=4,
        )
        report = generate_decision_report(calculate_roi(unprofitable_inputs), simulation)
        assert report.mean_roi == pytest.approx(simulation.mean_roi)
        assert report.probability_of_positive_roi == 0.0
        assert "DOWNSIDE_RISK" in _flag_names(report)

    def test_table(self, profitable_inputs):
        result = calculate_roi(profitable_inputs)
        simulation = run_monte_carlo_simulation(
            profitable_inputs, {"annual_benefits": {"min": 0.9, "max": 1.1}}, 50, seed=4,
        )
        df = generate_decision_report(result, simulation, hurdle_rate=0.12).to_dataframe()
        metrics = df["Metric"].tolist()
        assert metrics[:2] == ["Business Case", "Hurdle Rate"]
        assert "P(ROI > 0)" in metrics
        assert "FLAGS" not in metrics
