"""
ROI engine: cash-flow normalization, discounting, the single-scenario
pipeline and the Monte Carlo runner.
"""

from .cashflow import NetCashFlowSeries, build_net_cash_flows
from .discounting import IRRSolution, IRRStatus, net_present_value, solve_irr
from .pipeline import ROICalculationResult, calculate_roi
from .runner import run_monte_carlo_simulation

__all__ = [
    "NetCashFlowSeries",
    "build_net_cash_flows",
    "IRRSolution",
    "IRRStatus",
    "net_present_value",
    "solve_irr",
    "ROICalculationResult",
    "calculate_roi",
    "run_monte_carlo_simulation",
]
