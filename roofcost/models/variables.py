"""Roof Variables Pydantic models for RoofCost.

This module defines the measurement variables that quantity formulas
are evaluated against. Names follow the Xactimate-style convention
(SQ, EAVE, R, VAL, ...) used on line item formulas.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Top-level variable names in display order
ROOF_VARIABLE_NAMES: List[str] = [
    "SQ",
    "SF",
    "P",
    "EAVE",
    "R",
    "VAL",
    "HIP",
    "RAKE",
    "SKYLIGHT_COUNT",
    "CHIMNEY_COUNT",
    "PIPE_COUNT",
    "VENT_COUNT",
    "GUTTER_LF",
    "DS_COUNT",
]

# Per-slope variable names; combined with the slope label (F1SQ, F2EAVE)
SLOPE_VARIABLE_NAMES: List[str] = [
    "SQ",
    "SF",
    "PITCH",
    "EAVE",
    "RIDGE",
    "VALLEY",
    "HIP",
    "RAKE",
]


# =============================================================================
# SLOPE VARIABLES MODEL
# =============================================================================


class SlopeVariables(BaseModel):
    """Measurements for a single roof facet (F1, F2, ...)."""

    model_config = ConfigDict(frozen=True)

    SQ: float = Field(default=0.0, description="Squares on this slope")
    SF: float = Field(default=0.0, description="Square feet on this slope")
    PITCH: float = Field(default=0.0, description="Pitch in rise per 12 run")
    EAVE: float = Field(default=0.0, description="Eave length (LF)")
    RIDGE: float = Field(default=0.0, description="Ridge length (LF)")
    VALLEY: float = Field(default=0.0, description="Valley length (LF)")
    HIP: float = Field(default=0.0, description="Hip length (LF)")
    RAKE: float = Field(default=0.0, description="Rake length (LF)")


# =============================================================================
# ROOF VARIABLES MODEL
# =============================================================================


class RoofVariables(BaseModel):
    """Complete variable set for one estimation request.

    Built once from sketch, manual or photo measurements and read-only
    while formulas are evaluated.
    """

    model_config = ConfigDict(frozen=True)

    # Area
    SQ: float = Field(default=0.0, description="Total squares (1 SQ = 100 SF)")
    SF: float = Field(default=0.0, description="Total square feet")

    # Perimeter and linear measurements
    P: float = Field(default=0.0, description="Perimeter (LF)")
    EAVE: float = Field(default=0.0, description="Eave length (LF)")
    R: float = Field(default=0.0, description="Ridge length (LF)")
    VAL: float = Field(default=0.0, description="Valley length (LF)")
    HIP: float = Field(default=0.0, description="Hip length (LF)")
    RAKE: float = Field(default=0.0, description="Rake length (LF)")

    # Feature counts
    SKYLIGHT_COUNT: float = Field(default=0, description="Number of skylights")
    CHIMNEY_COUNT: float = Field(default=0, description="Number of chimneys")
    PIPE_COUNT: float = Field(default=0, description="Number of pipe boots")
    VENT_COUNT: float = Field(default=0, description="Number of vents")

    # Gutters
    GUTTER_LF: float = Field(default=0.0, description="Gutter length (LF)")
    DS_COUNT: float = Field(default=0, description="Number of downspouts")

    slopes: Dict[str, SlopeVariables] = Field(
        default_factory=dict,
        description="Per-slope measurements keyed by slope label (F1, F2, ...)"
    )

    @field_validator("slopes")
    @classmethod
    def require_slope_labels(cls, v):
        """Reject blank slope labels."""
        for label in v:
            if not label.strip():
                raise ValueError("slope label cannot be blank")
        return v

    def to_variable_map(self) -> Dict[str, float]:
        """Flatten into the upper-cased name -> value map used by formulas.

        Slope variables are exposed as the slope label followed by the
        slope variable name, e.g. ``F1SQ`` or ``F2EAVE``.
        """
        variable_map: Dict[str, float] = {
            name: float(getattr(self, name)) for name in ROOF_VARIABLE_NAMES
        }
        for label, slope in self.slopes.items():
            prefix = label.upper()
            for name in SLOPE_VARIABLE_NAMES:
                variable_map[f"{prefix}{name}"] = float(getattr(slope, name))
        return variable_map
