"""
Correlation structure between the factors a Monte Carlo run varies.

Without correlations, a simulation can pair a best-case benefit draw with a
best-case cost draw in the same trial even when, in practice, a project that
over-delivers on benefits usually over-spends too. Pairwise correlations let
the caller express that; the sampler turns them into a Gaussian copula.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from core.schema import SUPPORTED_VARIABLES, resolve_variable


def ensure_positive_definite(matrix: np.ndarray) -> np.ndarray:
    """
    Force a correlation matrix to be positive semi-definite.

    Hand-entered pairwise correlations are easily inconsistent (A~B and B~C
    strongly positive, A~C strongly negative). Eigenvalue clipping repairs the
    matrix so it can drive a multivariate normal draw.
    """
    eigenvalues, eigenvectors = np.linalg.eigh(matrix)
    # Clip negative eigenvalues to small positive number
    eigenvalues = np.maximum(eigenvalues, 1e-8)
    fixed = eigenvectors @ np.diag(eigenvalues) @ eigenvectors.T
    # Re-normalize to correlation matrix (diagonal = 1)
    d = np.sqrt(np.diag(fixed))
    fixed = fixed / np.outer(d, d)
    np.fill_diagonal(fixed, 1.0)
    return fixed


def build_correlation_matrix(
    variables: Sequence[str],
    correlations: Optional[Mapping[Tuple[str, str], float]] = None,
) -> np.ndarray:
    """
    Build a k x k correlation matrix in the order of `variables`.

    Parameters
    ----------
    variables : sequence of str
        Canonical variable names, in sampler column order
    correlations : mapping of (var_a, var_b) -> rho
        Pairwise correlations in [-1, 1]; unspecified pairs are independent.
        Pairs naming a variable not in `variables` are ignored.
    """
    k = len(variables)
    matrix = np.eye(k)
    if not correlations:
        return matrix

    index = {name: i for i, name in enumerate(variables)}
    for (a, b), rho in correlations.items():
        a, b = resolve_variable(a), resolve_variable(b)
        if not -1.0 <= rho <= 1.0:
            raise ValueError(f"correlation between {a} and {b} must be in [-1, 1], got {rho}")
        if a == b:
            continue
        if a not in index or b not in index:
            continue
        matrix[index[a], index[b]] = rho
        matrix[index[b], index[a]] = rho

    return ensure_positive_definite(matrix)


def correlation_matrix_to_dataframe(matrix: np.ndarray, variables: Sequence[str]) -> pd.DataFrame:
    """Convert correlation matrix to a labeled DataFrame for display."""
    labels = [SUPPORTED_VARIABLES.get(v, v) for v in variables]
    return pd.DataFrame(matrix, index=labels, columns=labels)
