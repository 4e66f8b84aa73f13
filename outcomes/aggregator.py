"""
Aggregate per-trial ROI values into a Monte Carlo distribution summary.

Instead of: "ROI = 42%" (one number, no context)
The caller gets: "ROI: mean=40%, median=41%, 90% interval [12%, 66%], P(ROI > 0)=96%"

The aggregation only uses order-independent statistics (sorting happens inside
numpy), so the order in which trials finish never changes the result. The
per-trial values themselves are not kept on the result.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from core.config import DEFAULT_CONFIG, EngineConfig
from core.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ConfidenceInterval:
    lower: float
    upper: float
    level: float

    @property
    def width(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class MonteCarloResult:
    mean_roi: float
    median_roi: float
    standard_deviation: float
    confidence_interval: ConfidenceInterval
    probability_of_positive_roi: float
    iterations: int
    valid_trials: int
    percentiles: Dict[int, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> pd.DataFrame:
        """One-row-per-statistic table for reports."""
        rows = [
            {"Statistic": "Mean ROI", "Value": self.mean_roi},
            {"Statistic": "Median ROI", "Value": self.median_roi},
            {"Statistic": "Std Dev", "Value": self.standard_deviation},
            {"Statistic": f"CI {self.confidence_interval.level:.0%} Lower",
             "Value": self.confidence_interval.lower},
            {"Statistic": f"CI {self.confidence_interval.level:.0%} Upper",
             "Value": self.confidence_interval.upper},
            {"Statistic": "P(ROI > 0)", "Value": self.probability_of_positive_roi},
        ]
        for p, v in sorted(self.percentiles.items()):
            rows.append({"Statistic": f"P{p:02d}", "Value": v})
        rows.append({"Statistic": "Valid Trials", "Value": float(self.valid_trials)})
        return pd.DataFrame(rows)


def aggregate_trial_results(
    trial_rois: Sequence[float],
    *,
    iterations: Optional[int] = None,
    config: EngineConfig = DEFAULT_CONFIG,
    percentiles: Optional[Tuple[float, ...]] = None,
) -> MonteCarloResult:
    """
    Aggregate per-trial ROI values into a MonteCarloResult.

    Parameters
    ----------
    trial_rois : sequence of float
        One ROI per trial, in any order
    iterations : int, optional
        Number of trials that were run (defaults to len(trial_rois))
    config : EngineConfig
        Supplies the confidence level and default percentile levels
    percentiles : tuple of float, optional
        Percentile levels to report, as fractions

    Non-finite values are dropped (and logged) before any statistic is taken.
    """
    values = np.asarray(trial_rois, dtype=float)
    iterations = len(values) if iterations is None else iterations
    percentiles = config.mc_percentiles if percentiles is None else percentiles

    finite = np.isfinite(values)
    n_dropped = int((~finite).sum())
    if n_dropped:
        logger.warning(f"Dropped {n_dropped} non-finite trial ROI values out of {len(values)}")
    values = values[finite]

    n = len(values)
    if n == 0:
        raise ValueError("No finite trial results to aggregate.")

    level = config.mc_confidence_level
    tail = (1.0 - level) / 2.0
    lower = float(np.percentile(values, tail * 100))
    upper = float(np.percentile(values, (1.0 - tail) * 100))

    return MonteCarloResult(
        mean_roi=float(np.mean(values)),
        median_roi=float(np.median(values)),
        standard_deviation=float(np.std(values, ddof=1)) if n > 1 else 0.0,
        confidence_interval=ConfidenceInterval(lower=lower, upper=upper, level=level),
        probability_of_positive_roi=float(np.mean(values > 0)),
        iterations=int(iterations),
        valid_trials=n,
        percentiles={int(round(p * 100)): float(np.percentile(values, p * 100)) for p in percentiles},
    )
