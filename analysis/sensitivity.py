"""
Sensitivity analysis: which assumption moves ROI the most?

One variable at a time is scaled to the low and high end of its range while
every other input stays at base; the ROI change against the base case is that
variable's impact. Results come back in tornado order (largest |impact| first).

On top of the one-at-a-time sweep:
  - analyze_sensitivity:          critical variables, robustness, risk tiers, recommendations
  - perform_interaction_analysis: do two variables together move ROI more than apart?
  - generate_tornado_data:        chart-ready table
  - find_break_even_factors:      how far can a variable move before ROI hits zero?
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from scipy.optimize import brentq

from core.config import DEFAULT_CONFIG, EngineConfig
from core.logger import LogContext, setup_logger
from core.schema import (
    SUPPORTED_VARIABLES,
    ROICalculationInputs,
    RangeLike,
    coerce_inputs,
    parse_variable_ranges,
    resolve_variable,
)
from core.utils import apply_variable_factor, base_value
from engine.pipeline import calculate_roi

logger = setup_logger(__name__)

_MIN_FACTOR = 1e-6


@dataclass(frozen=True)
class SensitivityResult:
    variable: str
    impact_on_roi: float  # signed ROI delta of the larger-magnitude end
    low_impact: float
    high_impact: float
    low_factor: float
    high_factor: float
    base_value: float

    @property
    def swing(self) -> float:
        return abs(self.high_impact - self.low_impact)

    @property
    def max_abs_impact(self) -> float:
        return max(abs(self.low_impact), abs(self.high_impact))


@dataclass
class RiskAssessment:
    high_risk_factors: List[str] = field(default_factory=list)
    medium_risk_factors: List[str] = field(default_factory=list)
    low_risk_factors: List[str] = field(default_factory=list)


@dataclass
class SensitivityReport:
    factors: List[SensitivityResult]
    critical_variables: List[str]
    robustness_score: float
    risk_assessment: RiskAssessment
    recommendations: List[str]


@dataclass(frozen=True)
class InteractionEffect:
    variables: Tuple[str, str]
    independent_effect: float
    combined_effect: float
    interaction_effect: float


@dataclass
class InteractionAnalysis:
    interactions: List[InteractionEffect]
    significant_interactions: List[Tuple[str, str]]


@dataclass(frozen=True)
class BreakEvenPoint:
    variable: str
    break_even_factor: float
    current_value: float

    @property
    def break_even_value(self) -> float:
        return self.current_value * self.break_even_factor


def _roi_at(inputs: ROICalculationInputs, variable: str, factor: float, config: EngineConfig) -> float:
    return calculate_roi(apply_variable_factor(inputs, variable, factor), config).roi


def perform_sensitivity_analysis(
    inputs: Union[ROICalculationInputs, Mapping[str, Any]],
    ranges: Mapping[str, RangeLike],
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[SensitivityResult]:
    """
    One-at-a-time sensitivity of ROI to each named variable.

    Parameters
    ----------
    inputs : ROICalculationInputs or mapping
        Base case
    ranges : mapping
        {variable: {min, max}} multiplicative factors on the base value.
        Unknown variable names raise UnsupportedVariableError.

    Returns
    -------
    List of SensitivityResult sorted by |impact_on_roi| descending.
    """
    inputs = coerce_inputs(inputs)
    parsed = parse_variable_ranges(ranges)
    base_roi = calculate_roi(inputs, config).roi

    results = []
    for variable, rng in parsed.items():
        low_delta = _roi_at(inputs, variable, rng.min, config) - base_roi
        high_delta = _roi_at(inputs, variable, rng.max, config) - base_roi
        impact = low_delta if abs(low_delta) >= abs(high_delta) else high_delta
        results.append(SensitivityResult(
            variable=variable,
            impact_on_roi=impact,
            low_impact=low_delta,
            high_impact=high_delta,
            low_factor=rng.min,
            high_factor=rng.max,
            base_value=base_value(inputs, variable),
        ))

    results.sort(key=lambda r: abs(r.impact_on_roi), reverse=True)
    logger.debug(
        "Sensitivity ranking: "
        + ", ".join(f"{r.variable}={r.impact_on_roi:+.3f}" for r in results)
    )
    return results


def _robustness_score(factors: Sequence[SensitivityResult]) -> float:
    """1.0 = ROI does not move at all; 0.0 = average swing of 100 points or more."""
    if not factors:
        return 1.0
    avg = float(np.mean([f.max_abs_impact for f in factors]))
    return float(np.clip(1.0 - avg, 0.0, 1.0))


def _assess_risk(factors: Sequence[SensitivityResult], config: EngineConfig) -> RiskAssessment:
    assessment = RiskAssessment()
    for f in factors:
        if f.max_abs_impact > config.high_risk_swing:
            assessment.high_risk_factors.append(f.variable)
        elif f.max_abs_impact > config.medium_risk_swing:
            assessment.medium_risk_factors.append(f.variable)
        else:
            assessment.low_risk_factors.append(f.variable)
    return assessment


# (variable, minimum |impact| to trigger, advice)
_VARIABLE_ADVICE = (
    ("annual_benefits", 0.30,
     "Consider conservative benefit estimates and implement milestone-based validation."),
    ("implementation_costs", 0.25,
     "Establish detailed cost controls and contingency planning for implementation."),
    ("time_horizon", 0.20,
     "Develop phased implementation approach to reduce timeline risks."),
    ("discount_rate", 0.15,
     "Consider multiple discount rate scenarios in final decision making."),
)


def _recommendations(
    factors: Sequence[SensitivityResult],
    critical: Sequence[str],
    robustness: float,
) -> List[str]:
    recs = []
    if robustness < 0.3:
        recs.append("HIGH PRIORITY: Project shows high sensitivity to input variations. "
                    "Consider additional risk mitigation strategies.")
    elif robustness < 0.6:
        recs.append("MEDIUM PRIORITY: Project has moderate sensitivity. "
                    "Monitor key variables closely during implementation.")
    else:
        recs.append("LOW RISK: Project shows good robustness to input variations.")

    if critical:
        recs.append(f"Focus monitoring and control on critical variables: {', '.join(critical)}")

    for f in factors[:3]:
        for variable, threshold, advice in _VARIABLE_ADVICE:
            if f.variable == variable and f.max_abs_impact > threshold:
                recs.append(advice)
    return recs


def analyze_sensitivity(
    inputs: Union[ROICalculationInputs, Mapping[str, Any]],
    ranges: Mapping[str, RangeLike],
    config: EngineConfig = DEFAULT_CONFIG,
) -> SensitivityReport:
    """Full sensitivity report: ranking plus critical variables, robustness and advice."""
    factors = perform_sensitivity_analysis(inputs, ranges, config)

    n_critical = math.ceil(len(factors) * config.critical_variable_fraction)
    critical = [f.variable for f in factors[:n_critical]]
    robustness = _robustness_score(factors)

    return SensitivityReport(
        factors=factors,
        critical_variables=critical,
        robustness_score=robustness,
        risk_assessment=_assess_risk(factors, config),
        recommendations=_recommendations(factors, critical, robustness),
    )


def perform_interaction_analysis(
    inputs: Union[ROICalculationInputs, Mapping[str, Any]],
    pairs: Sequence[Tuple[str, str]],
    ranges: Mapping[str, RangeLike],
    config: EngineConfig = DEFAULT_CONFIG,
) -> InteractionAnalysis:
    """
    Two-variable interaction effects at the high end of each range.

    interaction_effect = |combined - (effect_a + effect_b)|. Pairs whose
    variables have no range are skipped.
    """
    inputs = coerce_inputs(inputs)
    parsed = parse_variable_ranges(ranges)
    base_roi = calculate_roi(inputs, config).roi

    interactions = []
    for a, b in pairs:
        a, b = resolve_variable(a), resolve_variable(b)
        if a not in parsed or b not in parsed:
            continue
        effect_a = _roi_at(inputs, a, parsed[a].max, config) - base_roi
        effect_b = _roi_at(inputs, b, parsed[b].max, config) - base_roi

        both = apply_variable_factor(inputs, a, parsed[a].max)
        both = apply_variable_factor(both, b, parsed[b].max)
        combined = calculate_roi(both, config).roi - base_roi

        independent = effect_a + effect_b
        interactions.append(InteractionEffect(
            variables=(a, b),
            independent_effect=independent,
            combined_effect=combined,
            interaction_effect=abs(combined - independent),
        ))

    significant = sorted(
        (i for i in interactions if i.interaction_effect > config.significant_interaction),
        key=lambda i: i.interaction_effect,
        reverse=True,
    )
    return InteractionAnalysis(
        interactions=interactions,
        significant_interactions=[i.variables for i in significant],
    )


def generate_tornado_data(factors: Sequence[SensitivityResult]) -> pd.DataFrame:
    """Chart-ready tornado table, widest swing first."""
    rows = [
        {
            "variable": f.variable,
            "label": SUPPORTED_VARIABLES.get(f.variable, f.variable),
            "low_impact": f.low_impact,
            "high_impact": f.high_impact,
            "range": f.swing,
        }
        for f in factors
    ]
    df = pd.DataFrame(rows, columns=["variable", "label", "low_impact", "high_impact", "range"])
    return df.sort_values("range", ascending=False, kind="stable").reset_index(drop=True)


def find_break_even_factors(
    inputs: Union[ROICalculationInputs, Mapping[str, Any]],
    variables: Sequence[str],
    config: EngineConfig = DEFAULT_CONFIG,
    max_factor: Optional[float] = None,
) -> List[BreakEvenPoint]:
    """
    Multiplicative factor at which ROI crosses zero, per variable.

    Searches (0, max_factor] with Brent's method. A factor of exactly zero is
    never a break-even: zero investment with zero outlays reports ROI 0.0.
    Variables whose ROI never changes sign in that interval (e.g. scaling the
    discount rate, which ROI ignores) are left out of the result.
    """
    inputs = coerce_inputs(inputs)
    upper = config.break_even_max_factor if max_factor is None else max_factor

    points = []
    with LogContext(logger, f"Break-even search over {len(variables)} variables"):
        for name in variables:
            variable = resolve_variable(name)

            def roi_of(factor: float) -> float:
                return _roi_at(inputs, variable, factor, config)

            lo_val, hi_val = roi_of(_MIN_FACTOR), roi_of(upper)
            if lo_val == 0.0:
                factor = _MIN_FACTOR
            elif hi_val == 0.0:
                factor = upper
            elif np.sign(lo_val) == np.sign(hi_val):
                logger.debug(f"No ROI break-even for {variable} within (0, {upper}]")
                continue
            else:
                factor = float(brentq(roi_of, _MIN_FACTOR, upper, xtol=1e-8))

            points.append(BreakEvenPoint(
                variable=variable,
                break_even_factor=factor,
                current_value=base_value(inputs, variable),
            ))
    return points
