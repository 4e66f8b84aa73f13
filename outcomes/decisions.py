"""
Decision support: headline metrics, probability statements and flags for
one business case.

Translates the engine's outputs into answers a reviewer can act on:
  Q1: "Does this create value?"          -> NPV sign, ROI vs hurdle
  Q2: "When do we get the money back?"   -> payback within horizon
  Q3: "How likely is a loss?"            -> P(ROI > 0) from Monte Carlo
  Q4: "How wide is the outcome range?"   -> confidence interval width
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

import pandas as pd

if TYPE_CHECKING:
    from engine.pipeline import ROICalculationResult
    from outcomes.aggregator import MonteCarloResult


@dataclass
class DecisionReport:
    """Structured decision output for one business case."""
    name: str
    hurdle_rate: Optional[float]

    # Base case
    npv: float
    irr: Optional[float]
    roi: float
    risk_adjusted_roi: float
    payback_period: Optional[float]
    confidence: float

    # Simulation (None when no Monte Carlo run was supplied)
    mean_roi: Optional[float] = None
    probability_of_positive_roi: Optional[float] = None
    roi_interval_lower: Optional[float] = None
    roi_interval_upper: Optional[float] = None

    # Flags
    flags: List[str] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Business Case", "Value": self.name, "Unit": ""},
            {"Metric": "NPV", "Value": f"{self.npv:,.0f}", "Unit": "currency"},
            {"Metric": "IRR", "Value": f"{self.irr:.2%}" if self.irr is not None else "N/A", "Unit": ""},
            {"Metric": "ROI", "Value": f"{self.roi:.2%}", "Unit": ""},
            {"Metric": "Risk-Adjusted ROI", "Value": f"{self.risk_adjusted_roi:.2%}", "Unit": ""},
            {
                "Metric": "Payback Period",
                "Value": f"{self.payback_period:.2f}" if self.payback_period is not None else "Beyond horizon",
                "Unit": "periods",
            },
            {"Metric": "Confidence", "Value": f"{self.confidence:.0%}", "Unit": ""},
        ]
        if self.hurdle_rate is not None:
            rows.insert(1, {"Metric": "Hurdle Rate", "Value": f"{self.hurdle_rate:.2%}", "Unit": ""})
        if self.mean_roi is not None:
            rows.extend([
                {"Metric": "Simulated Mean ROI", "Value": f"{self.mean_roi:.2%}", "Unit": ""},
                {"Metric": "P(ROI > 0)", "Value": f"{self.probability_of_positive_roi:.1%}", "Unit": ""},
                {
                    "Metric": "ROI Interval",
                    "Value": f"{self.roi_interval_lower:.2%} to {self.roi_interval_upper:.2%}",
                    "Unit": "",
                },
            ])
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags), "Unit": ""})
        return pd.DataFrame(rows)


def generate_decision_report(
    result: "ROICalculationResult",
    simulation: Optional["MonteCarloResult"] = None,
    *,
    name: str = "Unnamed Business Case",
    hurdle_rate: Optional[float] = None,
) -> DecisionReport:
    """
    Generate a decision report from a base-case result and an optional simulation.

    Parameters
    ----------
    result : ROICalculationResult
        Output of engine.calculate_roi() for the base case
    simulation : MonteCarloResult, optional
        Output of engine.run_monte_carlo_simulation() for the same case
    name : str
        Identifier for the report
    hurdle_rate : float, optional
        Minimum acceptable IRR (e.g., 0.12 for 12%)
    """
    flags = []
    if result.npv < 0:
        flags.append("NEGATIVE_NPV: project destroys value at the chosen discount rate")
    if result.payback_period is None:
        flags.append("NO_PAYBACK: investment not recovered within the horizon")
    if result.irr is None:
        flags.append("IRR_UNDEFINED: no real rate of return in the search domain")
    elif hurdle_rate is not None and result.irr < hurdle_rate:
        flags.append(f"BELOW_HURDLE: IRR {result.irr:.1%} under hurdle {hurdle_rate:.1%}")
    if result.confidence < 0.6:
        flags.append("LOW_CONFIDENCE: sparse data or high risk factor")

    report = DecisionReport(
        name=name,
        hurdle_rate=hurdle_rate,
        npv=result.npv,
        irr=result.irr,
        roi=result.roi,
        risk_adjusted_roi=result.risk_adjusted_roi,
        payback_period=result.payback_period,
        confidence=result.confidence,
        flags=flags,
    )

    if simulation is not None:
        report.mean_roi = simulation.mean_roi
        report.probability_of_positive_roi = simulation.probability_of_positive_roi
        report.roi_interval_lower = simulation.confidence_interval.lower
        report.roi_interval_upper = simulation.confidence_interval.upper
        if simulation.probability_of_positive_roi < 0.8:
            flags.append(
                f"DOWNSIDE_RISK: {1 - simulation.probability_of_positive_roi:.0%} chance of a negative ROI"
            )
        if simulation.confidence_interval.width > 1.0:
            flags.append("WIDE_INTERVAL: simulated ROI range spans more than 100 points")

    return report
