"""
Outcome metrics for a single scenario.

Derived from the normalized net cash flows:
  payback period, total return, ROI, risk-adjusted ROI, break-even point
and from the raw inputs:
  confidence

Every function returns a finite number (or None where a metric is undefined
by design), so a degenerate scenario never poisons a batch aggregate.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from core.config import DEFAULT_CONFIG, EngineConfig
from core.schema import ROICalculationInputs


def payback_period(flows: np.ndarray) -> Tuple[Optional[float], float]:
    """
    Fractional period at which cumulative undiscounted cash flow turns non-negative.

    Linear interpolation inside the crossing period: if the crossing happens in
    period t, payback = (t - 1) + |cumulative before t| / flows[t].

    Returns
    -------
    (payback, break_even_point)
        payback is None when the investment is not recovered within the horizon.
        break_even_point is the cumulative flow at the payback instant (~0), or
        the cumulative flow at the end of the horizon when there is no payback.
    """
    flows = np.asarray(flows, dtype=float)
    cumulative = float(flows[0])
    if cumulative >= 0:
        return 0.0, cumulative

    for t in range(1, len(flows)):
        previous = cumulative
        cumulative += float(flows[t])
        if cumulative >= 0:
            fraction = -previous / float(flows[t])
            return (t - 1) + fraction, previous + fraction * float(flows[t])

    return None, cumulative


def total_return(flows: np.ndarray) -> float:
    """Undiscounted net of everything: benefits minus all costs including the investment."""
    return float(np.sum(flows))


def simple_roi(total: float, initial_investment: float, total_outlays: float) -> float:
    """
    total_return / initial_investment.
    With nothing invested up front, measure against total outlays; with no
    outlays at all there is nothing to return on and ROI is 0.
    """
    if initial_investment > 0:
        return total / initial_investment
    if total_outlays > 0:
        return total / total_outlays
    return 0.0


def risk_adjusted_roi(roi: float, risk_factor: float) -> float:
    """roi scaled down by risk: roi * (1 - risk) for gains, roi * (1 + risk) for losses."""
    return roi - abs(roi) * risk_factor


def confidence_score(
    inputs: ROICalculationInputs,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """
    Composite confidence in [0, confidence_cap].

    More benefit data points and a longer horizon raise it (both saturate at
    confidence_saturation_periods); risk scales it down multiplicatively.
    """
    saturation = max(config.confidence_saturation_periods, 1)
    data_score = min(len(inputs.annual_benefits), saturation) / saturation
    horizon_score = min(inputs.time_horizon, saturation) / saturation

    base = (
        config.confidence_base
        + config.confidence_data_weight * data_score
        + config.confidence_horizon_weight * horizon_score
    )
    score = base * (1.0 - config.confidence_risk_penalty * inputs.risk_factor)
    return float(np.clip(score, 0.0, config.confidence_cap))
