"""Estimate Macro Pydantic models for RoofCost.

A macro is a reusable bundle of line item selections with preset
formulas and overrides for a roof or job type.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from roofcost.models.line_item import LineItem, LineItemInput


class MacroLineItem(BaseModel):
    """One line item binding inside a macro."""

    id: Optional[str] = Field(None, description="Macro line item ID")
    line_item_id: str = Field(..., description="Referenced catalog line item ID")
    line_item: Optional[LineItem] = Field(
        None, description="Embedded definition when the catalog row was joined in"
    )
    quantity_formula: Optional[str] = Field(None, description="Formula for this macro")
    waste_factor: Optional[float] = Field(None, ge=0, description="Waste factor override")
    material_cost_override: Optional[float] = Field(None, ge=0)
    labor_cost_override: Optional[float] = Field(None, ge=0)
    equipment_cost_override: Optional[float] = Field(None, ge=0)
    is_selected_by_default: bool = Field(default=True, description="Included unless deselected")
    is_optional: bool = Field(default=False, description="Presented as an add-on")
    group_name: Optional[str] = Field(None, description="Display group")
    sort_order: int = Field(default=0, description="Order within the macro")
    notes: Optional[str] = None


class Macro(BaseModel):
    """A named line item template for a roof or job type."""

    id: str = Field(..., description="Macro ID")
    name: str = Field(..., description="Macro name (e.g., 'Asphalt Re-Roof')")
    description: Optional[str] = None
    roof_type: Optional[str] = Field(None, description="Target roof material")
    job_type: Optional[str] = Field(None, description="Target job type (replacement, repair)")
    is_default: bool = Field(default=False, description="Default macro for its roof type")
    is_active: bool = Field(default=True)
    line_items: List[MacroLineItem] = Field(default_factory=list)


class SkippedMacroLineItem(BaseModel):
    """A macro entry dropped during expansion."""

    line_item_id: str
    reason: str


class MacroExpansion(BaseModel):
    """Result of expanding a macro against the catalog.

    ``inputs`` are ready for ``calculate_estimate``; ``skipped`` lists
    entries whose line item could not be resolved.
    """

    macro_id: str
    inputs: List[LineItemInput] = Field(default_factory=list)
    skipped: List[SkippedMacroLineItem] = Field(default_factory=list)
