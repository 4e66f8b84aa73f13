"""
Cash-flow normalization: turns benefit / cost / maintenance series into one
net cash flow per period.

Conventions:
  1. Period 0 carries only the initial investment (as an outflow)
  2. Periods 1..time_horizon carry benefit - implementation - maintenance
  3. Series shorter than the horizon are zero-filled, longer ones truncated
  4. No period's value is ever inferred from another period
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from core.schema import ROICalculationInputs
from core.utils import align_series


@dataclass(frozen=True)
class NetCashFlowSeries:
    """
    Per-period components and net flows, each of length time_horizon + 1.

    flows[0] = -initial_investment
    flows[t] = benefits[t] - implementation_costs[t] - maintenance_costs[t]
    """

    benefits: np.ndarray
    implementation_costs: np.ndarray
    maintenance_costs: np.ndarray
    flows: np.ndarray
    initial_investment: float

    @property
    def n_periods(self) -> int:
        return len(self.flows) - 1

    @property
    def cumulative(self) -> np.ndarray:
        return np.cumsum(self.flows)

    @property
    def total_outlays(self) -> float:
        """Everything spent: investment plus implementation and maintenance."""
        return float(
            self.initial_investment
            + self.implementation_costs.sum()
            + self.maintenance_costs.sum()
        )

    def to_dataframe(self, discount_rate: Optional[float] = None) -> pd.DataFrame:
        periods = np.arange(len(self.flows))
        df = pd.DataFrame({
            "period": periods,
            "benefit": self.benefits,
            "implementation_cost": self.implementation_costs,
            "maintenance_cost": self.maintenance_costs,
            "net_cash_flow": self.flows,
            "cumulative_cash_flow": self.cumulative,
        })
        if discount_rate is not None:
            df["discount_factor"] = (1.0 + discount_rate) ** -periods.astype(float)
            df["present_value"] = df["net_cash_flow"] * df["discount_factor"]
        return df


def build_net_cash_flows(inputs: ROICalculationInputs) -> NetCashFlowSeries:
    """Assemble the period-0-inclusive net cash flow series for one scenario."""
    horizon = int(inputs.time_horizon)

    benefits = align_series(inputs.annual_benefits, horizon)
    implementation = align_series(inputs.implementation_costs, horizon)
    maintenance = align_series(inputs.maintenance_costs, horizon)

    flows = benefits - implementation - maintenance
    flows[0] = -float(inputs.initial_investment)

    return NetCashFlowSeries(
        benefits=benefits,
        implementation_costs=implementation,
        maintenance_costs=maintenance,
        flows=flows,
        initial_investment=float(inputs.initial_investment),
    )
