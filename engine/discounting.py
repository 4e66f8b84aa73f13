"""
Discounted-value core: NPV and IRR over a net cash flow series.

IRR is found by bracketing, not by an unbounded Newton walk:
  1. Evaluate NPV on a grid over [irr_lower_bound, irr_upper_bound]
  2. Every adjacent pair with opposite signs is a bracket
  3. Refine each bracket with Brent's method (scipy.optimize.brentq)
  4. Report the root closest to the initial guess

A series without a sign change in the domain has no real IRR there. That is a
legitimate financial outcome, so it is returned as IRRStatus.NOT_FOUND instead
of raised: sensitivity sweeps and Monte Carlo runs call this thousands of times.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import brentq

from core.config import DEFAULT_CONFIG, EngineConfig
from core.logger import setup_logger

logger = setup_logger(__name__)


class IRRStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class IRRSolution:
    status: IRRStatus
    rate: Optional[float] = None
    candidates: Tuple[float, ...] = ()
    iterations: int = 0

    @property
    def found(self) -> bool:
        return self.status is IRRStatus.FOUND


NOT_FOUND = IRRSolution(status=IRRStatus.NOT_FOUND)


def net_present_value(flows: Sequence[float], rate: float) -> float:
    """NPV = sum(flows[t] / (1 + rate)^t), t starting at 0."""
    if rate <= -1.0:
        raise ValueError(f"discount rate must be greater than -1, got {rate}")
    flows = np.asarray(flows, dtype=float)
    t = np.arange(len(flows), dtype=float)
    # rate = 0 gives factors of exactly 1.0, so the sum is the plain total
    return float(np.sum(flows * np.power(1.0 + rate, -t)))


def npv_profile(flows: Sequence[float], rates: np.ndarray) -> np.ndarray:
    """NPV at each rate; non-finite where the discount factors overflow."""
    flows = np.asarray(flows, dtype=float)
    rates = np.asarray(rates, dtype=float)
    t = np.arange(len(flows), dtype=float)
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        factors = np.power(1.0 + rates[:, np.newaxis], -t[np.newaxis, :])
        values = factors @ flows
    return values


def solve_irr(
    flows: Sequence[float],
    config: EngineConfig = DEFAULT_CONFIG,
) -> IRRSolution:
    """
    Internal rate of return: the rate at which NPV(flows) == 0.

    Returns IRRSolution(FOUND, rate) or the NOT_FOUND sentinel; never raises
    for a well-formed series.
    """
    flows = np.asarray(flows, dtype=float)
    if not np.any(flows > 0) or not np.any(flows < 0):
        # one-signed (or all-zero) series: NPV never crosses zero
        return NOT_FOUND

    grid = np.linspace(config.irr_lower_bound, config.irr_upper_bound, config.irr_grid_points)
    values = npv_profile(flows, grid)
    finite = np.isfinite(values)

    def f(r: float) -> float:
        return net_present_value(flows, r)

    candidates = []
    total_iterations = 0
    for i in range(len(grid) - 1):
        if not (finite[i] and finite[i + 1]):
            continue
        lo_val, hi_val = values[i], values[i + 1]
        if lo_val == 0.0:
            candidates.append(float(grid[i]))
            continue
        if np.sign(lo_val) == np.sign(hi_val):
            continue
        try:
            root, info = brentq(
                f,
                grid[i],
                grid[i + 1],
                xtol=config.irr_tolerance,
                maxiter=config.irr_max_iterations,
                full_output=True,
                disp=False,
            )
        except ValueError as exc:
            logger.debug(f"IRR bracket [{grid[i]:.4f}, {grid[i + 1]:.4f}] rejected: {exc}")
            continue
        total_iterations += info.iterations
        if info.converged:
            candidates.append(float(root))
        else:
            logger.debug(f"IRR bracket [{grid[i]:.4f}, {grid[i + 1]:.4f}] did not converge")

    if finite[-1] and values[-1] == 0.0:
        candidates.append(float(grid[-1]))

    if not candidates:
        return NOT_FOUND

    candidates = sorted(set(candidates))
    best = min(candidates, key=lambda r: abs(r - config.irr_initial_guess))
    return IRRSolution(
        status=IRRStatus.FOUND,
        rate=best,
        candidates=tuple(candidates),
        iterations=total_iterations,
    )
