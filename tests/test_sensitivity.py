"""One-at-a-time sensitivity, the sensitivity report, interactions, tornado data and break-even search."""

import pytest
from pydantic import ValidationError

from analysis.sensitivity import (
    analyze_sensitivity,
    find_break_even_factors,
    generate_tornado_data,
    perform_interaction_analysis,
    perform_sensitivity_analysis,
)
from core.schema import UnsupportedVariableError


class TestPerformSensitivityAnalysis:
    def test_sorted_by_absolute_impact(self, profitable_inputs, benefit_ranges):
        results = perform_sensitivity_analysis(profitable_inputs, benefit_ranges)
        impacts = [abs(r.impact_on_roi) for r in results]
        assert impacts == sorted(impacts, reverse=True)
        assert [r.variable for r in results] == ["annual_benefits", "initial_investment", "discount_rate"]

    def test_impacts(self, profitable_inputs, benefit_ranges):
        by_name = {r.variable: r for r in perform_sensitivity_analysis(profitable_inputs, benefit_ranges)}
        benefits = by_name["annual_benefits"]
        assert benefits.low_impact == pytest.approx(-0.36)
        assert benefits.high_impact == pytest.approx(0.36)
        assert benefits.swing == pytest.approx(0.72)
        assert benefits.base_value == pytest.approx(60_000)

        investment = by_name["initial_investment"]
        assert investment.impact_on_roi == pytest.approx(0.2)
        assert investment.high_impact == pytest.approx(70 / 110 - 0.8)

        # ROI is undiscounted
        assert by_name["discount_rate"].impact_on_roi == pytest.approx(0.0)

    def test_camel_case_names_reported_canonical(self, profitable_inputs):
        results = perform_sensitivity_analysis(profitable_inputs, {"annualBenefits": {"min": 0.9, "max": 1.1}})
        assert results[0].variable == "annual_benefits"

    def test_variable_without_data_has_no_impact(self, profitable_inputs):
        results = perform_sensitivity_analysis(
            profitable_inputs, {"implementation_costs": {"min": 0.5, "max": 2.0}},
        )
        assert results[0].impact_on_roi == 0.0

    def test_unsupported_variable_raises(self, profitable_inputs):
        with pytest.raises(UnsupportedVariableError):
            perform_sensitivity_analysis(profitable_inputs, {"taxRate": {"min": 0.9, "max": 1.1}})

    def test_inverted_range_rejected(self, profitable_inputs):
        with pytest.raises(ValidationError):
            perform_sensitivity_analysis(profitable_inputs, {"annual_benefits": {"min": 1.2, "max": 0.8}})

    def test_empty_ranges(self, profitable_inputs):
        assert perform_sensitivity_analysis(profitable_inputs, {}) == []


class TestAnalyzeSensitivity:
    def test_report(self, profitable_inputs, benefit_ranges):
        report = analyze_sensitivity(profitable_inputs, benefit_ranges)
        assert report.critical_variables == ["annual_benefits"]
        assert report.robustness_score == pytest.approx(1 - (0.36 + 0.2 + 0.0) / 3)
        assert "annual_benefits" in report.risk_assessment.medium_risk_factors
        assert "discount_rate" in report.risk_assessment.low_risk_factors
        assert report.recommendations[0].startswith("LOW RISK")
        assert any("critical variables: annual_benefits" in r for r in report.recommendations)
        assert any("conservative benefit estimates" in r for r in report.recommendations)

    def test_volatile_case_is_high_priority(self, profitable_inputs):
        report = analyze_sensitivity(profitable_inputs, {"annual_benefits": {"min": 0.0, "max": 2.0}})
        assert report.robustness_score == 0.0
        assert report.risk_assessment.high_risk_factors == ["annual_benefits"]
        assert report.recommendations[0].startswith("HIGH PRIORITY")

    def test_no_ranges_is_fully_robust(self, profitable_inputs):
        report = analyze_sensitivity(profitable_inputs, {})
        assert report.robustness_score == 1.0
        assert report.critical_variables == []


class TestInteractionAnalysis:
    def test_weak_interaction(self, profitable_inputs, benefit_ranges):
        analysis = perform_interaction_analysis(
            profitable_inputs, [("annual_benefits", "initial_investment")], benefit_ranges,
        )
        effect = analysis.interactions[0]
        assert effect.combined_effect == pytest.approx(106 / 110 - 0.8)
        assert effect.independent_effect == pytest.approx(0.36 + (70 / 110 - 0.8))
        assert effect.interaction_effect < 0.1
        assert analysis.significant_interactions == []

    def test_strong_interaction(self, profitable_inputs):
        ranges = {
            "annual_benefits": {"min": 1.0, "max": 2.0},
            "initial_investment": {"min": 1.0, "max": 2.0},
        }
        analysis = perform_interaction_analysis(
            profitable_inputs, [("annualBenefits", "initialInvestment")], ranges,
        )
        assert analysis.interactions[0].interaction_effect == pytest.approx(0.9)
        assert analysis.significant_interactions == [("annual_benefits", "initial_investment")]

    def test_pair_without_range_skipped(self, profitable_inputs, benefit_ranges):
        analysis = perform_interaction_analysis(
            profitable_inputs, [("annual_benefits", "maintenance_costs")], benefit_ranges,
        )
        assert analysis.interactions == []


class TestTornadoData:
    def test_columns_and_order(self, profitable_inputs, benefit_ranges):
        df = generate_tornado_data(perform_sensitivity_analysis(profitable_inputs, benefit_ranges))
        assert list(df.columns) == ["variable", "label", "low_impact", "high_impact", "range"]
        assert df["variable"].tolist() == ["annual_benefits", "initial_investment", "discount_rate"]
        assert df["label"].iloc[0] == "Annual Benefits"
        assert df["range"].is_monotonic_decreasing

    def test_empty(self):
        assert generate_tornado_data([]).empty


class TestBreakEven:
    def test_factors(self, profitable_inputs):
        points = {p.variable: p for p in find_break_even_factors(
            profitable_inputs, ["annual_benefits", "initialInvestment", "discount_rate"],
        )}
        # roi = 1.8 f - 1 for benefits; roi = 1.8 / f - 1 for investment
        assert points["annual_benefits"].break_even_factor == pytest.approx(1 / 1.8, abs=1e-6)
        assert points["annual_benefits"].break_even_value == pytest.approx(60_000 / 1.8, rel=1e-5)
        assert points["initial_investment"].break_even_factor == pytest.approx(1.8, abs=1e-6)
        assert "discount_rate" not in points

    def test_unreachable_within_limit(self, unprofitable_inputs):
        # benefits would have to grow more than 6.6x
        assert find_break_even_factors(unprofitable_inputs, ["annual_benefits"], max_factor=5.0) == []
        points = find_break_even_factors(unprofitable_inputs, ["annual_benefits"])
        assert points[0].break_even_factor == pytest.approx(200 / 30, abs=1e-6)

    def test_unsupported_variable_raises(self, profitable_inputs):
        with pytest.raises(UnsupportedVariableError):
            find_break_even_factors(profitable_inputs, ["taxRate"])
