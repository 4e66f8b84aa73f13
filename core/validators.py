"""
Data quality checks for ROI inputs that the schema accepts but a reviewer
should know about before trusting the numbers.

Catches problems early:
- Series that run past the time horizon (entries are ignored)
- Horizons longer than the supplied data (periods are zero-filled)
- Cost series that do not line up with the benefit series
- Rates that look like percentages instead of decimals
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .schema import SERIES_VARIABLES, ROICalculationInputs


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for one set of inputs."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  x {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ! {w}")
        if not lines:
            lines.append("All checks passed.")
        return "\n".join(lines)


def validate_inputs(inputs: ROICalculationInputs) -> ValidationResult:
    """
    Run all data quality checks on a set of ROI inputs.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()
    horizon = inputs.time_horizon
    n_benefits = len(inputs.annual_benefits)

    # --- Horizon vs supplied data ---
    for name in SERIES_VARIABLES:
        n = len(getattr(inputs, name))
        if n > horizon:
            result.warnings.append(
                f"{name} has {n} entries but time_horizon is {horizon}; "
                f"{n - horizon} trailing entries are ignored."
            )
    if horizon > n_benefits:
        result.warnings.append(
            f"time_horizon ({horizon}) exceeds annual_benefits ({n_benefits}); "
            f"{horizon - n_benefits} periods carry zero benefit."
        )

    # --- Alignment ---
    for name in ("implementation_costs", "maintenance_costs"):
        n = len(getattr(inputs, name))
        if 0 < n < n_benefits:
            result.warnings.append(
                f"{name} covers {n} of {n_benefits} benefit periods; the rest are treated as zero."
            )

    # --- Negative amounts inside series ---
    for name in SERIES_VARIABLES:
        vals = np.asarray(getattr(inputs, name), dtype=float)
        n_neg = int((vals < 0).sum())
        if n_neg > 0:
            result.errors.append(f"{n_neg} entries of {name} are negative.")

    # --- Benefits ---
    if not np.any(np.asarray(inputs.annual_benefits, dtype=float)):
        result.warnings.append("annual_benefits are all zero; ROI can only be negative or zero.")

    # --- Rates ---
    # Rates should be in decimal form (e.g. 0.08 not 8.0)
    if inputs.discount_rate > 1.0:
        result.warnings.append(
            f"discount_rate is {inputs.discount_rate}; check if rates are in percent vs decimal form."
        )
    if inputs.initial_investment == 0:
        result.warnings.append("initial_investment is zero; ROI is measured against total outlays.")

    return result
