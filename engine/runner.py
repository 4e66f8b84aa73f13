"""
Monte Carlo runner: pushes sampled input factors through the ROI pipeline.

Each trial:
  1. Gets its own generator, spawned from one SeedSequence
  2. Draws one factor per configured variable from its distribution
  3. Scales a copy of the base inputs by those factors
  4. Runs calculate_roi and records the trial's ROI

Trials share nothing, so they may run on a thread pool. Because every trial
owns its random stream and results are collected by trial index, a given seed
produces the same statistics for any worker count.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from core.config import DEFAULT_CONFIG, EngineConfig
from core.logger import LogContext, setup_logger
from core.schema import ROICalculationInputs, RangeLike, coerce_inputs, parse_distribution_ranges
from core.utils import apply_variable_factor
from distributions.sampler import MonteCarloSampler
from outcomes.aggregator import MonteCarloResult, aggregate_trial_results

from .pipeline import calculate_roi

logger = setup_logger(__name__)


def _resolve_max_workers(max_workers: Optional[int], runs: int) -> int:
    """Bound pool size by requested max, run count, and CPU availability."""
    if runs <= 1:
        return 1
    if max_workers is None:
        return 1
    if max_workers <= 0:
        return max(1, min(runs, os.cpu_count() or 1))
    return max(1, min(max_workers, runs))


def _chunk(items: List[Any], size: int) -> List[List[Any]]:
    """Split a list into fixed-size batches, preserving order."""
    return [items[i : i + size] for i in range(0, len(items), size)]


def _run_trials(
    base_inputs: ROICalculationInputs,
    sampler: MonteCarloSampler,
    seeds: Sequence[np.random.SeedSequence],
    config: EngineConfig,
) -> List[float]:
    rois = []
    for seed_seq in seeds:
        rng = np.random.default_rng(seed_seq)
        factors = sampler.sample(1, rng).get_trial(0)
        trial_inputs = base_inputs
        for variable, factor in factors.items():
            trial_inputs = apply_variable_factor(trial_inputs, variable, factor)
        rois.append(calculate_roi(trial_inputs, config).roi)
    return rois


def run_monte_carlo_simulation(
    inputs: Union[ROICalculationInputs, Mapping[str, Any]],
    variable_ranges: Mapping[str, RangeLike],
    iterations: Optional[int] = None,
    *,
    seed: Optional[int] = None,
    correlations: Optional[Mapping[Tuple[str, str], float]] = None,
    max_workers: Optional[int] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> MonteCarloResult:
    """
    Run a Monte Carlo simulation of ROI under assumption noise.

    Parameters
    ----------
    inputs : ROICalculationInputs or mapping
        Base case
    variable_ranges : mapping
        {variable: {min, max, distribution}}; factors are multiplicative on the
        base value, distribution is "uniform", "normal" or "triangular"
    iterations : int, optional
        Number of trials (default config.mc_default_iterations)
    seed : int, optional
        Root seed; None draws fresh OS entropy
    correlations : mapping of (var_a, var_b) -> rho, optional
        Pairwise factor correlations; independent when omitted
    max_workers : int, optional
        Thread pool size. None runs serially; 0 or less uses every CPU

    Returns
    -------
    MonteCarloResult with mean/median/std of ROI, the percentile confidence
    interval and the probability of a positive ROI.
    """
    inputs = coerce_inputs(inputs)
    ranges = parse_distribution_ranges(variable_ranges)
    n_trials = config.mc_default_iterations if iterations is None else int(iterations)
    if n_trials < 1:
        raise ValueError(f"iterations must be at least 1, got {n_trials}")

    sampler = MonteCarloSampler(ranges, correlations=correlations, config=config)
    seeds = np.random.SeedSequence(seed).spawn(n_trials)
    workers = _resolve_max_workers(max_workers, n_trials)

    with LogContext(logger, f"Monte Carlo simulation ({n_trials} trials, {len(ranges)} variables, {workers} workers)"):
        if workers == 1:
            rois = _run_trials(inputs, sampler, seeds, config)
        else:
            batch_size = max(1, -(-n_trials // (workers * 4)))
            batches = _chunk(seeds, batch_size)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = pool.map(lambda batch: _run_trials(inputs, sampler, batch, config), batches)
                rois = [roi for batch_rois in results for roi in batch_rois]

    result = aggregate_trial_results(rois, iterations=n_trials, config=config)
    logger.info(
        f"Monte Carlo ROI: mean={result.mean_roi:.2%}, median={result.median_roi:.2%}, "
        f"P(ROI>0)={result.probability_of_positive_roi:.1%}"
    )
    return result
