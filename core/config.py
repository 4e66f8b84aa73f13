"""
Engine configuration.
Every tunable constant of the ROI engine lives here so callers can override
them without touching the math. None of these are domain truth: the confidence
coefficients in particular are heuristics validated against the reference
scenarios in tests/.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EngineConfig:
    # IRR search domain and solver controls
    irr_lower_bound: float = -0.99
    irr_upper_bound: float = 10.0
    irr_initial_guess: float = 0.10
    irr_tolerance: float = 1e-10
    irr_max_iterations: int = 200
    irr_grid_points: int = 400

    # confidence composite: (base + data + horizon) * (1 - risk_penalty * risk)
    confidence_base: float = 0.50
    confidence_data_weight: float = 0.25
    confidence_horizon_weight: float = 0.20
    confidence_saturation_periods: int = 5
    confidence_risk_penalty: float = 0.50
    confidence_cap: float = 0.95

    # Monte Carlo
    mc_default_iterations: int = 1000
    mc_confidence_level: float = 0.90  # 5th / 95th percentile interval
    mc_normal_sigma_divisor: float = 6.0  # (max - min) spans +/- 3 sigma
    mc_percentiles: Tuple[float, ...] = (0.05, 0.10, 0.25, 0.50, 0.75, 0.90, 0.95)

    # sensitivity report
    critical_variable_fraction: float = 0.30
    high_risk_swing: float = 0.50
    medium_risk_swing: float = 0.20
    significant_interaction: float = 0.10
    break_even_max_factor: float = 10.0

    # scenario modeler
    target_roi: float = 0.15
    break_even_band: float = 0.05


DEFAULT_CONFIG = EngineConfig()
