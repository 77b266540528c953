"""Roof variables sanity checks.

Errors block an estimate (negative measurements); warnings flag values
that are possible but unusual and worth a second look before pricing.
"""

from dataclasses import dataclass, field
from typing import List

import structlog

from roofcost.models.variables import RoofVariables

logger = structlog.get_logger(__name__)

LARGE_ROOF_SQUARES = 200
SMALL_ROOF_SQUARES = 5
SF_SQ_TOLERANCE = 10
MIN_AREA_PERIMETER_RATIO = 5
MAX_AREA_PERIMETER_RATIO = 50


@dataclass
class VariablesValidationResult:
    """Result of roof variables validation."""
    is_valid: bool = True
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def validate_variables(variables: RoofVariables) -> VariablesValidationResult:
    """Check roof variables for impossible or suspicious values.

    Args:
        variables: Roof measurements to check

    Returns:
        VariablesValidationResult; ``is_valid`` is False only when there
        are errors.
    """
    warnings: List[str] = []
    errors: List[str] = []

    # Negative measurements
    if variables.SQ < 0:
        errors.append("Squares cannot be negative")
    if variables.SF < 0:
        errors.append("Square feet cannot be negative")
    if variables.EAVE < 0:
        errors.append("Eave length cannot be negative")
    if variables.R < 0:
        errors.append("Ridge length cannot be negative")

    # Size
    if variables.SQ > LARGE_ROOF_SQUARES:
        warnings.append(f"Very large roof (>{LARGE_ROOF_SQUARES} squares)")
    if variables.SQ < SMALL_ROOF_SQUARES:
        warnings.append(f"Very small roof (<{SMALL_ROOF_SQUARES} squares)")

    # Consistency
    if abs(variables.SF - variables.SQ * 100) > SF_SQ_TOLERANCE:
        warnings.append("SF and SQ values are inconsistent")

    if variables.SF > 0 and variables.P > 0:
        ratio = variables.SF / variables.P
        if ratio < MIN_AREA_PERIMETER_RATIO:
            warnings.append("Unusual shape - very long/narrow")
        if ratio > MAX_AREA_PERIMETER_RATIO:
            warnings.append("Perimeter seems too small for area")

    if errors or warnings:
        logger.info("roof_variables_flagged", errors=errors, warnings=warnings)

    return VariablesValidationResult(is_valid=not errors, warnings=warnings, errors=errors)
