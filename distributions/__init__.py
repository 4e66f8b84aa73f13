"""
Distributions package: describe and sample the uncertainty on ROI inputs.

  1. sampler.py:     draw N rows of multiplicative factors (uniform / normal / triangular)
  2. correlation.py: pairwise correlations -> valid correlation matrix
  3. benchmarks.py:  standard factor ranges per opportunity type
"""

from .benchmarks import create_standard_variable_ranges
from .correlation import build_correlation_matrix, ensure_positive_definite
from .sampler import FactorDistribution, MonteCarloSampler, SampledFactors

__all__ = [
    "create_standard_variable_ranges",
    "build_correlation_matrix",
    "ensure_positive_definite",
    "FactorDistribution",
    "MonteCarloSampler",
    "SampledFactors",
]
