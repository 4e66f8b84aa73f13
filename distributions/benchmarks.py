"""
Standard uncertainty ranges for common opportunity types.

When a caller has no project-specific view of how far each assumption can
move, these defaults give a reasonable starting envelope. All ranges are
multiplicative factors on the base inputs (1.0 = as entered).

Usage:
  - Day 1: run sensitivity / Monte Carlo against the standard envelope
  - Once the business has its own estimates, pass explicit ranges instead
"""

from __future__ import annotations

from typing import Dict

from core.schema import DistributionRange

BASE_RANGES: Dict[str, DistributionRange] = {
    "annual_benefits": DistributionRange(min=0.7, max=1.3, distribution="normal"),
    "implementation_costs": DistributionRange(min=0.8, max=1.5, distribution="triangular"),
    "maintenance_costs": DistributionRange(min=0.9, max=1.2, distribution="uniform"),
    "discount_rate": DistributionRange(min=0.5, max=1.5, distribution="uniform"),
    "risk_factor": DistributionRange(min=0.5, max=2.0, distribution="triangular"),
}

# Per-type overrides on top of BASE_RANGES
OPPORTUNITY_OVERRIDES: Dict[str, Dict[str, DistributionRange]] = {
    # large programmes overrun: implementation rarely comes in under budget
    "digital_transformation": {
        "implementation_costs": DistributionRange(min=1.0, max=2.0, distribution="triangular"),
    },
    "process_automation": {
        "annual_benefits": DistributionRange(min=0.8, max=1.5, distribution="normal"),
    },
    # campaign outcomes are wide and skewed to the upside
    "marketing_optimization": {
        "annual_benefits": DistributionRange(min=0.6, max=2.0, distribution="normal"),
    },
}


def create_standard_variable_ranges(opportunity_type: str = "default") -> Dict[str, DistributionRange]:
    """
    Return the standard factor ranges for an opportunity type.

    Unknown types get the base envelope.
    """
    ranges = dict(BASE_RANGES)
    ranges.update(OPPORTUNITY_OVERRIDES.get(opportunity_type, {}))
    return ranges
