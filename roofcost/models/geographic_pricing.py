"""Geographic Pricing Pydantic models for RoofCost.

Regional multipliers applied independently to the material, labor and
equipment base costs of catalog line items.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GeographicMultipliers(BaseModel):
    """Effective material/labor/equipment multipliers."""

    model_config = ConfigDict(frozen=True)

    material: float = Field(default=1.0, gt=0, description="Material cost multiplier")
    labor: float = Field(default=1.0, gt=0, description="Labor cost multiplier")
    equipment: float = Field(default=1.0, gt=0, description="Equipment cost multiplier")

    @property
    def average(self) -> float:
        """Mean of the three multipliers, reported as the estimate's adjustment."""
        return (self.material + self.labor + self.equipment) / 3


class GeographicPricing(BaseModel):
    """A regional pricing record as stored by the catalog.

    Unset multipliers default to 1.0 (no adjustment).
    """

    id: Optional[str] = Field(None, description="Pricing record ID")
    name: str = Field(default="Default", description="Region display name")
    description: Optional[str] = Field(None, description="Region description")
    state: Optional[str] = Field(None, description="State abbreviation")
    county: Optional[str] = Field(None, description="County name")
    zip_codes: List[str] = Field(default_factory=list, description="ZIP codes covered")

    material_multiplier: float = Field(default=1.0, gt=0, description="Material cost multiplier")
    labor_multiplier: float = Field(default=1.0, gt=0, description="Labor cost multiplier")
    equipment_multiplier: float = Field(default=1.0, gt=0, description="Equipment cost multiplier")

    is_active: bool = Field(default=True, description="Whether the record is in effect")

    def multipliers(self) -> GeographicMultipliers:
        """Return the three multipliers as a plain triple."""
        return GeographicMultipliers(
            material=self.material_multiplier,
            labor=self.labor_multiplier,
            equipment=self.equipment_multiplier,
        )
