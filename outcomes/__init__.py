"""
Outcome metrics, Monte Carlo aggregation and decision support.
"""

from .aggregator import ConfidenceInterval, MonteCarloResult, aggregate_trial_results
from .decisions import DecisionReport, generate_decision_report
from .metrics import (
    confidence_score,
    payback_period,
    risk_adjusted_roi,
    simple_roi,
    total_return,
)

__all__ = [
    "ConfidenceInterval",
    "MonteCarloResult",
    "aggregate_trial_results",
    "DecisionReport",
    "generate_decision_report",
    "confidence_score",
    "payback_period",
    "risk_adjusted_roi",
    "simple_roi",
    "total_return",
]
