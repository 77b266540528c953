"""Line Item Pydantic models for RoofCost.

This module defines the catalog line item definition, the per-estimate
selection that references it, and the calculated result produced by
the pricing engine.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class LineItemCategory(str, Enum):
    """Catalog category of a line item."""

    TEAR_OFF = "tear_off"
    UNDERLAYMENT = "underlayment"
    SHINGLES = "shingles"
    METAL_ROOFING = "metal_roofing"
    TILE_ROOFING = "tile_roofing"
    FLAT_ROOFING = "flat_roofing"
    FLASHING = "flashing"
    VENTILATION = "ventilation"
    GUTTERS = "gutters"
    SKYLIGHTS = "skylights"
    CHIMNEYS = "chimneys"
    DECKING = "decking"
    INSULATION = "insulation"
    LABOR = "labor"
    EQUIPMENT = "equipment"
    DISPOSAL = "disposal"
    PERMITS = "permits"
    OTHER = "other"


class UnitType(str, Enum):
    """Unit of measure for a line item quantity."""

    SQ = "SQ"     # Square (100 SF)
    SF = "SF"     # Square foot
    LF = "LF"     # Linear foot
    EA = "EA"     # Each
    HR = "HR"     # Hour
    DAY = "DAY"
    TON = "TON"
    GAL = "GAL"
    BDL = "BDL"   # Bundle
    RL = "RL"     # Roll


# =============================================================================
# LINE ITEM DEFINITION (CATALOG)
# =============================================================================


class LineItem(BaseModel):
    """Catalog entry with base unit costs and a default quantity formula.

    Reference data owned by the catalog; the engine never mutates it.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable line item ID")
    item_code: str = Field(..., description="Item code (e.g., 'RFG420')")
    name: str = Field(..., description="Display name")
    description: Optional[str] = Field(None, description="Longer description")
    category: LineItemCategory = Field(..., description="Catalog category")
    unit_type: UnitType = Field(..., description="Unit of measure")

    base_material_cost: float = Field(default=0.0, ge=0, description="Material cost per unit")
    base_labor_cost: float = Field(default=0.0, ge=0, description="Labor cost per unit")
    base_equipment_cost: float = Field(default=0.0, ge=0, description="Equipment cost per unit")

    quantity_formula: Optional[str] = Field(None, description="Default quantity formula (e.g., 'SQ*1.10')")
    default_waste_factor: float = Field(default=1.0, ge=0, description="Default waste multiplier")
    min_quantity: Optional[float] = Field(None, ge=0, description="Minimum orderable quantity")
    max_quantity: Optional[float] = Field(None, ge=0, description="Maximum orderable quantity")

    is_active: bool = Field(default=True, description="Whether the item is offered")
    is_taxable: bool = Field(default=True, description="Whether the item is subject to tax")
    sort_order: int = Field(default=0, description="Display and calculation order")
    tags: List[str] = Field(default_factory=list, description="Search tags")
    notes: Optional[str] = Field(None, description="Catalog notes")


# =============================================================================
# LINE ITEM INPUT (SELECTION)
# =============================================================================


class LineItemInput(BaseModel):
    """A line item selected onto an estimate, with optional overrides.

    A manual ``quantity`` always takes precedence over any formula.
    """

    model_config = ConfigDict(populate_by_name=True)

    line_item_id: str = Field(..., alias="lineItemId", description="Referenced line item ID")
    line_item: Optional[LineItem] = Field(
        default=None,
        alias="lineItem",
        description="Embedded definition; looked up in the catalog when absent"
    )
    quantity_formula: Optional[str] = Field(
        default=None, alias="quantityFormula", description="Formula override"
    )
    waste_factor: Optional[float] = Field(
        default=None, ge=0, alias="wasteFactor", description="Waste factor override"
    )
    quantity: Optional[float] = Field(
        default=None, description="Manual quantity override"
    )
    material_unit_cost: Optional[float] = Field(
        default=None, ge=0, alias="materialUnitCost", description="Material unit cost override"
    )
    labor_unit_cost: Optional[float] = Field(
        default=None, ge=0, alias="laborUnitCost", description="Labor unit cost override"
    )
    equipment_unit_cost: Optional[float] = Field(
        default=None, ge=0, alias="equipmentUnitCost", description="Equipment unit cost override"
    )
    is_included: Optional[bool] = Field(default=None, alias="isIncluded")
    is_optional: Optional[bool] = Field(default=None, alias="isOptional")
    group_name: Optional[str] = Field(default=None, alias="groupName")
    notes: Optional[str] = Field(default=None)


# =============================================================================
# CALCULATED LINE ITEM (RESULT)
# =============================================================================


class CalculatedLineItem(BaseModel):
    """Priced line item produced by the pricing engine.

    ``line_total`` is always the sum of the three category totals.
    """

    model_config = ConfigDict(populate_by_name=True)

    # Identification
    line_item_id: str = Field(..., alias="lineItemId")
    item_code: str = Field(..., alias="itemCode")
    name: str
    category: LineItemCategory
    unit_type: UnitType = Field(..., alias="unitType")

    # Quantity
    quantity: float
    quantity_formula: Optional[str] = Field(None, alias="quantityFormula")
    waste_factor: float = Field(..., alias="wasteFactor")
    quantity_with_waste: float = Field(..., alias="quantityWithWaste")

    # Unit costs actually used
    material_unit_cost: float = Field(..., alias="materialUnitCost")
    labor_unit_cost: float = Field(..., alias="laborUnitCost")
    equipment_unit_cost: float = Field(..., alias="equipmentUnitCost")

    # Totals
    material_total: float = Field(..., alias="materialTotal")
    labor_total: float = Field(..., alias="laborTotal")
    equipment_total: float = Field(..., alias="equipmentTotal")
    line_total: float = Field(..., alias="lineTotal")

    # Flags and grouping
    is_included: bool = Field(default=True, alias="isIncluded")
    is_optional: bool = Field(default=False, alias="isOptional")
    is_taxable: bool = Field(default=True, alias="isTaxable")
    sort_order: int = Field(default=0, alias="sortOrder")
    group_name: Optional[str] = Field(None, alias="groupName")
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to camelCase dictionary for API responses."""
        return self.model_dump(by_alias=True, mode="json")
