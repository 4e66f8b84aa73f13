"""
Analyses built on the single-scenario pipeline: sensitivity and scenario modeling.
"""

from .scenarios import ScenarioComparison, ScenarioProbabilities, generate_scenarios
from .sensitivity import (
    BreakEvenPoint,
    SensitivityReport,
    SensitivityResult,
    analyze_sensitivity,
    find_break_even_factors,
    generate_tornado_data,
    perform_interaction_analysis,
    perform_sensitivity_analysis,
)

__all__ = [
    "ScenarioComparison",
    "ScenarioProbabilities",
    "generate_scenarios",
    "BreakEvenPoint",
    "SensitivityReport",
    "SensitivityResult",
    "analyze_sensitivity",
    "find_break_even_factors",
    "generate_tornado_data",
    "perform_interaction_analysis",
    "perform_sensitivity_analysis",
]
