"""
Quantity Resolver Service for RoofCost.

Wraps the formula parser for use inside the pricing pipeline:
- Falls back to a caller-supplied quantity when there is no formula or
  the formula fails (unknown variable, syntax error, division by zero)
- Clamps negative results to zero
- Applies the waste factor after the quantity is determined

Formula failures never propagate from here; the reason is kept on the
result so callers can surface it if they want to.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from roofcost.config.errors import FormulaError
from roofcost.config.settings import settings
from roofcost.models.variables import RoofVariables
from roofcost.services.formula_parser import evaluate_formula

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class QuantityResolution:
    """
    Resolved quantity for one line item.

    Attributes:
        quantity: Resolved quantity, never negative
        quantity_with_waste: quantity * waste_factor
        formula_used: The formula that produced the quantity, or None when
            the fallback quantity was used
        fallback_reason: Why the formula was not used (error message), if
            a formula was supplied but failed
    """

    quantity: float
    quantity_with_waste: float
    formula_used: Optional[str]
    fallback_reason: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.formula_used is None


def resolve_quantity(
    formula: Optional[str],
    variables: RoofVariables,
    waste_factor: float = 1.0,
    fallback_quantity: float = 0.0,
) -> QuantityResolution:
    """Resolve a quantity from a formula, falling back on failure.

    Args:
        formula: Quantity formula, or None or "" to use the fallback directly.
            A whitespace-only formula evaluates to 0.
        variables: Roof measurements.
        waste_factor: Multiplier applied to the resolved quantity.
        fallback_quantity: Quantity used when no formula is usable.

    Returns:
        QuantityResolution with a non-negative quantity.
    """
    quantity = fallback_quantity
    formula_used: Optional[str] = None
    fallback_reason: Optional[str] = None

    if formula:
        try:
            quantity = evaluate_formula(formula, variables)
            formula_used = formula
        except FormulaError as e:
            quantity = fallback_quantity
            fallback_reason = e.message
            if settings.log_formula_fallbacks:
                logger.warning(
                    "formula_fallback",
                    formula=formula,
                    error_code=e.code,
                    error=e.message,
                    fallback_quantity=fallback_quantity,
                )

    quantity = max(0.0, quantity)
    return QuantityResolution(
        quantity=quantity,
        quantity_with_waste=max(0.0, quantity * waste_factor),
        formula_used=formula_used,
        fallback_reason=fallback_reason,
    )
