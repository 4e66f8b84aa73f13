"""
Scenario modeling: conservative / realistic / optimistic versions of one
business case.

Each variable with a range is pushed to the end of its range that hurts ROI
(conservative) or helps it (optimistic); the realistic case is the base case
as entered. Three points are not a distribution, so the "probabilities" here
are simply the share of the three scenarios meeting each condition. Use
engine.run_monte_carlo_simulation for a real distribution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from core.config import DEFAULT_CONFIG, EngineConfig
from core.schema import ROICalculationInputs, RangeLike, coerce_inputs, parse_variable_ranges
from core.utils import apply_variable_factor
from engine.pipeline import ROICalculationResult, calculate_roi

from .sensitivity import SensitivityResult, perform_sensitivity_analysis

# Variables where a larger value improves ROI; everything else hurts it.
_FAVOURABLE_WHEN_HIGH = {"annual_benefits", "time_horizon"}


@dataclass(frozen=True)
class ScenarioProbabilities:
    positive_roi: float
    break_even: float
    target_return: float


@dataclass(frozen=True)
class ScenarioComparison:
    conservative: ROICalculationResult
    realistic: ROICalculationResult
    optimistic: ROICalculationResult
    probability: ScenarioProbabilities
    sensitivity_ranking: List[SensitivityResult]

    def as_dict(self) -> Dict[str, ROICalculationResult]:
        return {
            "conservative": self.conservative,
            "realistic": self.realistic,
            "optimistic": self.optimistic,
        }


def build_scenario_inputs(
    base_case: ROICalculationInputs,
    ranges: Mapping[str, RangeLike],
    *,
    optimistic: bool,
) -> ROICalculationInputs:
    """Push every ranged variable to its ROI-favourable (or unfavourable) bound."""
    scenario = base_case
    for variable, rng in parse_variable_ranges(ranges).items():
        take_max = (variable in _FAVOURABLE_WHEN_HIGH) == optimistic
        scenario = apply_variable_factor(scenario, variable, rng.max if take_max else rng.min)
    return scenario


def generate_scenarios(
    base_case: Union[ROICalculationInputs, Mapping[str, Any]],
    ranges: Mapping[str, RangeLike],
    *,
    target_roi: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ScenarioComparison:
    """
    Build and evaluate the conservative, realistic and optimistic scenarios.

    Parameters
    ----------
    base_case : ROICalculationInputs or mapping
        Realistic case as entered
    ranges : mapping
        {variable: {min, max}} multiplicative factors (a DistributionRange works too)
    target_roi : float, optional
        ROI a scenario must reach to count toward target_return (default config.target_roi)
    """
    base_case = coerce_inputs(base_case)
    target = config.target_roi if target_roi is None else target_roi

    conservative = calculate_roi(build_scenario_inputs(base_case, ranges, optimistic=False), config)
    realistic = calculate_roi(base_case, config)
    optimistic = calculate_roi(build_scenario_inputs(base_case, ranges, optimistic=True), config)

    scenarios = (conservative, realistic, optimistic)
    band = config.break_even_band
    probability = ScenarioProbabilities(
        positive_roi=sum(s.roi > 0 for s in scenarios) / len(scenarios),
        break_even=sum(-band <= s.roi <= band for s in scenarios) / len(scenarios),
        target_return=sum(s.roi >= target for s in scenarios) / len(scenarios),
    )

    return ScenarioComparison(
        conservative=conservative,
        realistic=realistic,
        optimistic=optimistic,
        probability=probability,
        sensitivity_ranking=perform_sensitivity_analysis(base_case, ranges, config),
    )
