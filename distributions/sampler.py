"""
Monte Carlo sampler: draws multiplicative factors for the input variables a
simulation varies.

Input:  {variable: DistributionRange(min, max, distribution)} + optional correlations
Output: (N x k) table of factors: one row per trial, one column per variable

A factor of 1.0 means "base value". Each row is one plausible version of the
business case:
  Trial 1: benefits x0.92, implementation x1.31  (slow adoption, overrun)
  Trial 2: benefits x1.18, implementation x0.97  (strong adoption)

Method (Gaussian copula):
  1. Draw standard normals, correlated if a correlation matrix is given
  2. Map each column to a uniform via the normal CDF
  3. Push the uniform through the marginal's inverse CDF:
     - uniform:    min + u * (max - min)
     - normal:     truncated Gaussian centred on 1.0, sigma = (max - min) / 6
     - triangular: mode 1.0, support [min, max]
Inverse-CDF sampling keeps every draw inside [min, max] by construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from core.config import DEFAULT_CONFIG, EngineConfig
from core.schema import DistributionRange

from .correlation import build_correlation_matrix


@dataclass(frozen=True)
class FactorDistribution:
    """Marginal distribution of one variable's multiplicative factor."""

    variable: str
    low: float
    high: float
    shape: str  # "uniform", "normal", "triangular"
    sigma_divisor: float = 6.0

    @property
    def center(self) -> float:
        # base factor 1.0, pulled into the range when the range excludes it
        return float(np.clip(1.0, self.low, self.high))

    def ppf(self, u: np.ndarray) -> np.ndarray:
        """Inverse CDF: map uniforms in (0, 1) to factors in [low, high]."""
        u = np.asarray(u, dtype=float)
        width = self.high - self.low
        if width <= 0:
            return np.full_like(u, self.low)

        if self.shape == "uniform":
            return self.low + u * width

        if self.shape == "normal":
            sigma = width / self.sigma_divisor
            a = (self.low - self.center) / sigma
            b = (self.high - self.center) / sigma
            out = stats.truncnorm.ppf(u, a, b, loc=self.center, scale=sigma)
            return np.clip(out, self.low, self.high)

        if self.shape == "triangular":
            c = (self.center - self.low) / width
            out = stats.triang.ppf(u, c, loc=self.low, scale=width)
            return np.clip(out, self.low, self.high)

        raise ValueError(f"Unknown distribution shape: {self.shape!r}")


@dataclass
class SampledFactors:
    """
    Output of Monte Carlo sampling: N rows of factors, one column per variable.
    """
    variables: Tuple[str, ...]
    values: np.ndarray  # shape (n_trials, n_variables)

    @property
    def n_trials(self) -> int:
        return self.values.shape[0]

    def get_trial(self, trial_idx: int) -> Dict[str, float]:
        """Return the factors for a single trial as a dict."""
        return {v: float(self.values[trial_idx, j]) for j, v in enumerate(self.variables)}

    def to_dataframe(self) -> pd.DataFrame:
        df = pd.DataFrame(self.values, columns=list(self.variables))
        df.insert(0, "trial_id", np.arange(self.n_trials))
        return df

    def summary(self) -> pd.DataFrame:
        """Percentile summary of sampled factors."""
        pcts = [0.05, 0.25, 0.50, 0.75, 0.95]
        rows = []
        for j, name in enumerate(self.variables):
            col = self.values[:, j]
            row = {"Variable": name, "Mean": np.mean(col), "Std": np.std(col),
                   "Min": np.min(col), "Max": np.max(col)}
            for p in pcts:
                row[f"P{int(p*100):02d}"] = np.percentile(col, p * 100)
            rows.append(row)
        return pd.DataFrame(rows)


class MonteCarloSampler:
    """
    Draws factor rows for a fixed set of variable distributions.

    Usage:
        sampler = MonteCarloSampler({"annual_benefits": DistributionRange(min=0.7, max=1.3,
                                                                          distribution="normal")})
        factors = sampler.sample(1000, np.random.default_rng(42))
        # factors.values -> (1000, 1) array of benefit multipliers

    The sampler holds no generator of its own: the caller passes one per call,
    so trials running in parallel never share random state.
    """

    def __init__(
        self,
        ranges: Mapping[str, DistributionRange],
        correlations: Optional[Mapping[Tuple[str, str], float]] = None,
        config: EngineConfig = DEFAULT_CONFIG,
    ):
        self.variables: Tuple[str, ...] = tuple(ranges)
        self.marginals = [
            FactorDistribution(
                variable=name,
                low=float(rng.min),
                high=float(rng.max),
                shape=rng.distribution,
                sigma_divisor=config.mc_normal_sigma_divisor,
            )
            for name, rng in ranges.items()
        ]
        self.correlation = build_correlation_matrix(self.variables, correlations)
        self._independent = bool(np.allclose(self.correlation, np.eye(len(self.variables))))

    def sample(self, n_trials: int, rng: np.random.Generator) -> SampledFactors:
        """Generate n_trials rows of factors using the supplied generator."""
        k = len(self.variables)
        if k == 0:
            return SampledFactors(variables=(), values=np.empty((n_trials, 0)))

        # Step 1: standard normal draws, shape (n_trials, k)
        if self._independent:
            z = rng.standard_normal(size=(n_trials, k))
        else:
            z = rng.multivariate_normal(mean=np.zeros(k), cov=self.correlation, size=n_trials)

        # Step 2: to uniforms, kept off the exact endpoints
        u = np.clip(stats.norm.cdf(z), 1e-12, 1.0 - 1e-12)

        # Step 3: through each marginal
        values = np.column_stack([m.ppf(u[:, j]) for j, m in enumerate(self.marginals)])
        return SampledFactors(variables=self.variables, values=values)
