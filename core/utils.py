from __future__ import annotations

from typing import Sequence

import numpy as np

from .schema import SERIES_VARIABLES, ROICalculationInputs, resolve_variable


def align_series(values: Sequence[float], n_periods: int) -> np.ndarray:
    """
    Place a per-period series into periods 1..n_periods of a zero array of
    length n_periods + 1. Missing trailing entries stay zero; entries beyond
    the horizon are dropped.
    """
    out = np.zeros(n_periods + 1, dtype=float)
    vals = np.asarray(values, dtype=float)[:n_periods]
    out[1 : len(vals) + 1] = vals
    return out


def apply_variable_factor(
    inputs: ROICalculationInputs,
    variable: str,
    factor: float,
) -> ROICalculationInputs:
    """
    Return a copy of inputs with one variable scaled by a multiplicative factor.

    Series variables are scaled element-wise, risk_factor is clipped to [0, 1]
    and time_horizon is rounded to a whole number of periods (at least 1).
    """
    variable = resolve_variable(variable)
    factor = float(factor)

    if variable in SERIES_VARIABLES:
        scaled = tuple(v * factor for v in getattr(inputs, variable))
        return inputs.model_copy(update={variable: scaled})
    if variable == "initial_investment":
        return inputs.model_copy(update={"initial_investment": inputs.initial_investment * factor})
    if variable == "discount_rate":
        return inputs.model_copy(update={"discount_rate": inputs.discount_rate * factor})
    if variable == "risk_factor":
        risk = min(max(inputs.risk_factor * factor, 0.0), 1.0)
        return inputs.model_copy(update={"risk_factor": risk})
    # time_horizon
    horizon = max(1, int(round(inputs.time_horizon * factor)))
    return inputs.model_copy(update={"time_horizon": horizon})


def base_value(inputs: ROICalculationInputs, variable: str) -> float:
    """Scalar summary of a variable's base value (series report their mean per period)."""
    variable = resolve_variable(variable)
    if variable in SERIES_VARIABLES:
        vals = getattr(inputs, variable)
        return float(np.mean(vals)) if len(vals) > 0 else 0.0
    return float(getattr(inputs, variable))
