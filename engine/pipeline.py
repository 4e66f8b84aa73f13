"""
Single-scenario pipeline: normalize -> discount -> outcome metrics.

calculate_roi is the one function every analysis reuses. Sensitivity sweeps,
scenario comparisons and Monte Carlo trials all build a modified copy of the
inputs and call it, so their financial math cannot drift apart.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Union

from core.config import DEFAULT_CONFIG, EngineConfig
from core.logger import setup_logger
from core.schema import ROICalculationInputs, coerce_inputs
from core.validators import validate_inputs
from outcomes.metrics import (
    confidence_score,
    payback_period,
    risk_adjusted_roi,
    simple_roi,
    total_return,
)

from .cashflow import build_net_cash_flows
from .discounting import IRRStatus, net_present_value, solve_irr

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ROICalculationResult:
    npv: float
    irr: Optional[float]
    irr_status: IRRStatus
    payback_period: Optional[float]
    roi: float
    risk_adjusted_roi: float
    break_even_point: float
    total_return: float
    confidence: float

    @property
    def pays_back(self) -> bool:
        return self.payback_period is not None

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["irr_status"] = self.irr_status.value
        return out


def calculate_roi(
    inputs: Union[ROICalculationInputs, Mapping[str, Any]],
    config: EngineConfig = DEFAULT_CONFIG,
) -> ROICalculationResult:
    """
    Run the full pipeline for one scenario.

    Parameters
    ----------
    inputs : ROICalculationInputs or mapping
        Validated inputs (a mapping is validated on the way in)
    config : EngineConfig
        Solver bounds and confidence coefficients

    Returns
    -------
    ROICalculationResult. irr is None when no real root exists in the search
    domain; payback_period is None when the investment is not recovered
    within the horizon. All numeric fields are finite.
    """
    inputs = coerce_inputs(inputs)

    if logger.isEnabledFor(logging.DEBUG):
        check = validate_inputs(inputs)
        if check.errors or check.warnings:
            logger.debug(check.summary())

    series = build_net_cash_flows(inputs)

    npv = net_present_value(series.flows, inputs.discount_rate)
    irr = solve_irr(series.flows, config)

    payback, break_even = payback_period(series.flows)
    total = total_return(series.flows)
    roi = simple_roi(total, series.initial_investment, series.total_outlays)

    return ROICalculationResult(
        npv=npv,
        irr=irr.rate,
        irr_status=irr.status,
        payback_period=payback,
        roi=roi,
        risk_adjusted_roi=risk_adjusted_roi(roi, inputs.risk_factor),
        break_even_point=break_even,
        total_return=total,
        confidence=confidence_score(inputs, config),
    )
