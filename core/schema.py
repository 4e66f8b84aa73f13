"""
Input schema for the ROI engine.

ROICalculationInputs is the only object the engine accepts from a caller. It is
validated once at the boundary (pydantic) and never mutated afterwards; every
analysis that needs modified inputs builds a copy.

Field names are snake_case; the camelCase spellings used by the web layer
(initialInvestment, annualBenefits, ...) are accepted as aliases.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class UnsupportedVariableError(ValueError):
    """Raised when an analysis names an input variable the engine cannot vary."""


class ROICalculationInputs(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        extra="forbid",
    )

    initial_investment: float = Field(ge=0)
    annual_benefits: Tuple[float, ...] = Field(min_length=1)
    implementation_costs: Tuple[float, ...] = ()
    maintenance_costs: Tuple[float, ...] = ()
    discount_rate: float = Field(default=0.10, ge=0)
    time_horizon: int = Field(ge=1)
    risk_factor: float = Field(default=0.0, ge=0, le=1)


# Variables an analysis may scale, with display labels.
SUPPORTED_VARIABLES: Dict[str, str] = {
    "annual_benefits": "Annual Benefits",
    "implementation_costs": "Implementation Costs",
    "maintenance_costs": "Maintenance Costs",
    "initial_investment": "Initial Investment",
    "discount_rate": "Discount Rate",
    "risk_factor": "Risk Factor",
    "time_horizon": "Time Horizon",
}

SERIES_VARIABLES: Tuple[str, ...] = (
    "annual_benefits",
    "implementation_costs",
    "maintenance_costs",
)

_CAMEL_TO_CANONICAL = {to_camel(name): name for name in SUPPORTED_VARIABLES}


def resolve_variable(name: str) -> str:
    """Map a caller-supplied variable name (snake or camel case) to its canonical name."""
    if name in SUPPORTED_VARIABLES:
        return name
    if name in _CAMEL_TO_CANONICAL:
        return _CAMEL_TO_CANONICAL[name]
    raise UnsupportedVariableError(
        f"Unsupported variable {name!r}; expected one of {sorted(SUPPORTED_VARIABLES)}"
    )


class VariableRange(BaseModel):
    """Multiplicative range applied to one input variable (1.0 = base value)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    min: float = Field(ge=0)
    max: float = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "VariableRange":
        if self.min > self.max:
            raise ValueError(f"range min ({self.min}) exceeds max ({self.max})")
        return self


class DistributionRange(VariableRange):
    """Multiplicative range plus the distribution factors are drawn from."""

    distribution: Literal["uniform", "normal", "triangular"] = "uniform"


RangeLike = Union[VariableRange, Mapping[str, Any]]


def coerce_inputs(inputs: Union[ROICalculationInputs, Mapping[str, Any]]) -> ROICalculationInputs:
    if isinstance(inputs, ROICalculationInputs):
        return inputs
    return ROICalculationInputs.model_validate(inputs)


def parse_variable_ranges(ranges: Mapping[str, RangeLike]) -> Dict[str, VariableRange]:
    """Validate a {variable: {min, max}} mapping, keyed by canonical variable name."""
    parsed: Dict[str, VariableRange] = {}
    for name, rng in ranges.items():
        variable = resolve_variable(name)
        parsed[variable] = rng if isinstance(rng, VariableRange) else VariableRange.model_validate(rng)
    return parsed


def parse_distribution_ranges(ranges: Mapping[str, RangeLike]) -> Dict[str, DistributionRange]:
    """Validate a {variable: {min, max, distribution}} mapping, keyed by canonical name."""
    parsed: Dict[str, DistributionRange] = {}
    for name, rng in ranges.items():
        variable = resolve_variable(name)
        if isinstance(rng, DistributionRange):
            parsed[variable] = rng
        elif isinstance(rng, VariableRange):
            parsed[variable] = DistributionRange(min=rng.min, max=rng.max)
        else:
            parsed[variable] = DistributionRange.model_validate(rng)
    return parsed
