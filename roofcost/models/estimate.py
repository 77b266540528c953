"""Estimate calculation models for RoofCost.

Pydantic models for the aggregate result of a detailed estimate and the
request context that accompanies it.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from roofcost.models.geographic_pricing import GeographicPricing
from roofcost.models.line_item import CalculatedLineItem
from roofcost.models.variables import RoofVariables


class EstimateOptions(BaseModel):
    """Per-call options for ``calculate_estimate``.

    Percent values are whole percents (10 = 10%). Unset values fall back
    to the configured defaults. ``geographic_pricing`` applies to this
    call only and leaves the engine's own setting untouched.
    """

    model_config = ConfigDict(populate_by_name=True)

    overhead_percent: Optional[float] = Field(None, ge=0, alias="overheadPercent")
    profit_percent: Optional[float] = Field(None, ge=0, alias="profitPercent")
    tax_percent: Optional[float] = Field(None, ge=0, alias="taxPercent")
    geographic_pricing: Optional[GeographicPricing] = Field(None, alias="geographicPricing")


class EstimateInput(BaseModel):
    """Request context persisted alongside a calculation."""

    model_config = ConfigDict(populate_by_name=True)

    lead_id: str = Field(..., alias="leadId")
    sketch_id: Optional[str] = Field(None, alias="sketchId")
    variables: RoofVariables = Field(default_factory=RoofVariables)
    macro_id: Optional[str] = Field(None, alias="macroId")
    geographic_pricing_id: Optional[str] = Field(None, alias="geographicPricingId")
    overhead_percent: Optional[float] = Field(None, alias="overheadPercent")
    profit_percent: Optional[float] = Field(None, alias="profitPercent")
    tax_percent: Optional[float] = Field(None, alias="taxPercent")
    existing_layers: Optional[int] = Field(None, ge=0, alias="existingLayers")


class EstimateCalculation(BaseModel):
    """Full detailed estimate: priced line items plus rollups.

    Totals only include line items with ``is_included``; excluded and
    optional items are still listed for display.
    """

    model_config = ConfigDict(populate_by_name=True)

    line_items: List[CalculatedLineItem] = Field(default_factory=list, alias="lineItems")

    # Direct cost rollups
    total_material: float = Field(..., alias="totalMaterial")
    total_labor: float = Field(..., alias="totalLabor")
    total_equipment: float = Field(..., alias="totalEquipment")
    subtotal: float

    # Markups
    overhead_percent: float = Field(..., alias="overheadPercent")
    overhead_amount: float = Field(..., alias="overheadAmount")
    profit_percent: float = Field(..., alias="profitPercent")
    profit_amount: float = Field(..., alias="profitAmount")

    # Tax
    taxable_amount: float = Field(..., alias="taxableAmount")
    tax_percent: float = Field(..., alias="taxPercent")
    tax_amount: float = Field(..., alias="taxAmount")

    # Price band
    price_low: float = Field(..., alias="priceLow")
    price_likely: float = Field(..., alias="priceLikely")
    price_high: float = Field(..., alias="priceHigh")

    geographic_adjustment: float = Field(default=1.0, alias="geographicAdjustment")

    @property
    def included_line_items(self) -> List[CalculatedLineItem]:
        """Line items that count toward totals."""
        return [li for li in self.line_items if li.is_included]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to camelCase dictionary for API responses."""
        return self.model_dump(by_alias=True, mode="json")


class EstimateSummary(BaseModel):
    """Headline figures derived from an ``EstimateCalculation``."""

    total_cost: float
    cost_per_square: float
    material_percentage: int
    labor_percentage: int
    included_items_count: int
    optional_items_count: int
