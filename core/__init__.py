"""
Core package: input schema, configuration, validation and shared utilities.
No financial math lives here.
"""

from .config import DEFAULT_CONFIG, EngineConfig
from .schema import (
    SUPPORTED_VARIABLES,
    DistributionRange,
    ROICalculationInputs,
    UnsupportedVariableError,
    VariableRange,
    resolve_variable,
)
from .utils import align_series, apply_variable_factor, base_value
from .validators import ValidationResult, validate_inputs

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "SUPPORTED_VARIABLES",
    "DistributionRange",
    "ROICalculationInputs",
    "UnsupportedVariableError",
    "VariableRange",
    "resolve_variable",
    "align_series",
    "apply_variable_factor",
    "base_value",
    "ValidationResult",
    "validate_inputs",
]
