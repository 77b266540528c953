"""
Estimate helpers for RoofCost.

Display formatting, grouping and summary figures for a finished
``EstimateCalculation``, plus conversion into the snake_case records the
persistence layer stores.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from roofcost.models.estimate import EstimateCalculation, EstimateInput, EstimateSummary
from roofcost.models.line_item import CalculatedLineItem, LineItemCategory, UnitType

# Squares assumed when an estimate has no shingle line item priced per square
DEFAULT_SUMMARY_SQUARES = 20.0


# =============================================================================
# FORMATTING
# =============================================================================


def format_currency(amount: float) -> str:
    """Format a dollar amount as US currency, e.g. ``$1,234.56``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_quantity(quantity: float, unit: Union[UnitType, str]) -> str:
    """Format a quantity with its unit, e.g. ``27.50 SQ``."""
    return f"{quantity:.2f} {UnitType(unit).value}"


# =============================================================================
# GROUPING AND SUMMARY
# =============================================================================


def group_line_items(line_items: Sequence[CalculatedLineItem]) -> Dict[str, List[CalculatedLineItem]]:
    """Group line items by group name, falling back to category.

    Groups appear in order of first occurrence.
    """
    groups: Dict[str, List[CalculatedLineItem]] = {}
    for item in line_items:
        key = item.group_name or item.category.value
        groups.setdefault(key, []).append(item)
    return groups


def calculate_cost_per_square(total_cost: float, squares: float) -> float:
    if squares <= 0:
        return 0.0
    return round(total_cost / squares, 2)


def _summary_squares(calc: EstimateCalculation) -> float:
    for item in calc.line_items:
        if item.unit_type == UnitType.SQ and item.category == LineItemCategory.SHINGLES:
            return item.quantity_with_waste or DEFAULT_SUMMARY_SQUARES
    return DEFAULT_SUMMARY_SQUARES


def generate_estimate_summary(calc: EstimateCalculation) -> EstimateSummary:
    """Headline figures for an estimate.

    Cost per square uses the first shingle line item priced per square
    (with waste), or 20 squares when there is none.
    """
    material_percentage = calc.total_material / calc.subtotal * 100 if calc.subtotal > 0 else 0
    labor_percentage = calc.total_labor / calc.subtotal * 100 if calc.subtotal > 0 else 0

    return EstimateSummary(
        total_cost=calc.price_likely,
        cost_per_square=calculate_cost_per_square(calc.price_likely, _summary_squares(calc)),
        material_percentage=round(material_percentage),
        labor_percentage=round(labor_percentage),
        included_items_count=sum(1 for li in calc.line_items if li.is_included),
        optional_items_count=sum(1 for li in calc.line_items if li.is_optional),
    )


# =============================================================================
# RECORD CONVERSION
# =============================================================================


def calculation_to_estimate(calc: EstimateCalculation, estimate_input: EstimateInput) -> Dict[str, Any]:
    """Detailed estimate record for a calculation and its request context."""
    return {
        "lead_id": estimate_input.lead_id,
        "sketch_id": estimate_input.sketch_id or None,
        "variables": estimate_input.variables.model_dump(mode="json"),
        "total_material": calc.total_material,
        "total_labor": calc.total_labor,
        "total_equipment": calc.total_equipment,
        "subtotal": calc.subtotal,
        "overhead_percent": calc.overhead_percent,
        "overhead_amount": calc.overhead_amount,
        "profit_percent": calc.profit_percent,
        "profit_amount": calc.profit_amount,
        "taxable_amount": calc.taxable_amount,
        "tax_percent": calc.tax_percent,
        "tax_amount": calc.tax_amount,
        "price_low": calc.price_low,
        "price_likely": calc.price_likely,
        "price_high": calc.price_high,
        "geographic_pricing_id": estimate_input.geographic_pricing_id or None,
        "geographic_adjustment": calc.geographic_adjustment,
        "source_macro_id": estimate_input.macro_id or None,
    }


def calculated_to_estimate_line_item(
    calc: CalculatedLineItem,
    estimate_id: Optional[str],
) -> Dict[str, Any]:
    """Estimate line item record linked to ``estimate_id``."""
    record = calc.model_dump(mode="json")
    record["detailed_estimate_id"] = estimate_id
    return record
