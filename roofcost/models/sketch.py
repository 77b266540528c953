"""Roof sketch measurement models for RoofCost.

Plain records produced by the sketch tool (one ``RoofSketch`` with any
number of ``RoofSlope`` facets). They are the raw input to the roof
variables calculator.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RoofSlope(BaseModel):
    """Measurements of one facet on a roof sketch."""

    slope_number: int = Field(..., ge=1, description="Facet number; becomes the F<n> label")
    name: Optional[str] = Field(None, description="Facet name")
    pitch: float = Field(default=0.0, ge=0, description="Pitch in rise per 12 run")
    sqft: float = Field(default=0.0, ge=0)
    squares: float = Field(default=0.0, ge=0)
    eave_lf: float = Field(default=0.0, ge=0)
    ridge_lf: float = Field(default=0.0, ge=0)
    valley_lf: float = Field(default=0.0, ge=0)
    hip_lf: float = Field(default=0.0, ge=0)
    rake_lf: float = Field(default=0.0, ge=0)


class RoofSketch(BaseModel):
    """Whole-roof totals captured from a sketch."""

    id: Optional[str] = None
    total_squares: float = Field(default=0.0, ge=0)
    total_sqft: float = Field(default=0.0, ge=0)
    total_perimeter_lf: float = Field(default=0.0, ge=0)
    total_eave_lf: float = Field(default=0.0, ge=0)
    total_ridge_lf: float = Field(default=0.0, ge=0)
    total_valley_lf: float = Field(default=0.0, ge=0)
    total_hip_lf: float = Field(default=0.0, ge=0)
    total_rake_lf: float = Field(default=0.0, ge=0)
    skylight_count: int = Field(default=0, ge=0)
    chimney_count: int = Field(default=0, ge=0)
    pipe_boot_count: int = Field(default=0, ge=0)
    vent_count: int = Field(default=0, ge=0)
    gutter_lf: float = Field(default=0.0, ge=0)
    downspout_count: int = Field(default=0, ge=0)
