"""
Detailed Pricing Engine for RoofCost.

Line item based calculations with geographic pricing, material/labor/
equipment breakdowns, overhead, profit, tax and a low/likely/high price
band.

Pipeline:
1. Resolve each line item's quantity (manual override, else formula)
2. Apply waste factor and unit costs (override, else base x geographic multiplier)
3. Sum included items into material/labor/equipment totals
4. Overhead on subtotal, profit on subtotal + overhead, tax on taxable items
5. Price band: likely x 0.90 (low) and likely x 1.15 (high)

Concurrency note: ``set_geographic_pricing`` mutates the engine and is not
synchronised. Callers sharing one engine across requests should pass
``geographic_pricing`` per call instead.
"""

from typing import Dict, List, Optional, Sequence, Union

import structlog

from roofcost.config.errors import LineItemNotFoundError, MacroNotFoundError
from roofcost.config.settings import settings
from roofcost.models.estimate import EstimateCalculation, EstimateOptions
from roofcost.models.geographic_pricing import GeographicMultipliers, GeographicPricing
from roofcost.models.line_item import (
    CalculatedLineItem,
    LineItem,
    LineItemCategory,
    LineItemInput,
)
from roofcost.models.macro import (
    Macro,
    MacroExpansion,
    MacroLineItem,
    SkippedMacroLineItem,
)
from roofcost.models.variables import RoofVariables
from roofcost.services.quantity_resolver import resolve_quantity

logger = structlog.get_logger(__name__)


# Fixed price band around the likely price. For totals of a few cents the
# rounded band can collapse onto the likely price.
PRICE_BAND_LOW = 0.90
PRICE_BAND_HIGH = 1.15

MONEY_DECIMALS = 2


def _round_money(value: float) -> float:
    """Round a dollar (or quantity) amount to cents, exact halves to even."""
    return round(value, MONEY_DECIMALS)


def _first_set(*values):
    """First value that is not None (None if all are)."""
    for value in values:
        if value is not None:
            return value
    return None


class DetailedPricingEngine:
    """
    Prices line item selections against an indexed catalog.

    Catalog and macros are indexed once at construction and treated as
    read-only; only the geographic pricing can change afterwards.
    """

    def __init__(
        self,
        line_items: Optional[Sequence[LineItem]] = None,
        geographic_pricing: Optional[GeographicPricing] = None,
        macros: Optional[Sequence[Macro]] = None,
    ):
        self._line_items: Dict[str, LineItem] = {li.id: li for li in (line_items or [])}
        self._geographic_pricing = geographic_pricing
        self._macros: Dict[str, Macro] = {m.id: m for m in (macros or [])}

        logger.debug(
            "pricing_engine_initialized",
            line_item_count=len(self._line_items),
            macro_count=len(self._macros),
            geographic_pricing=geographic_pricing.name if geographic_pricing else None,
        )

    # =========================================================================
    # Geographic pricing
    # =========================================================================

    def set_geographic_pricing(self, pricing: Optional[GeographicPricing]) -> None:
        """Replace the engine-wide geographic pricing (None resets to 1.0)."""
        self._geographic_pricing = pricing

    def get_geographic_multipliers(
        self, geographic_pricing: Optional[GeographicPricing] = None
    ) -> GeographicMultipliers:
        """Effective multipliers: the per-call pricing if given, else the engine's."""
        pricing = geographic_pricing if geographic_pricing is not None else self._geographic_pricing
        if pricing is None:
            return GeographicMultipliers()
        return pricing.multipliers()

    # =========================================================================
    # Line item calculation
    # =========================================================================

    def _resolve_definition(self, line_item_input: LineItemInput) -> LineItem:
        if line_item_input.line_item is not None:
            return line_item_input.line_item
        definition = self._line_items.get(line_item_input.line_item_id)
        if definition is None:
            raise LineItemNotFoundError(line_item_input.line_item_id)
        return definition

    def calculate_line_item(
        self,
        line_item_input: LineItemInput,
        variables: RoofVariables,
        geographic_pricing: Optional[GeographicPricing] = None,
    ) -> CalculatedLineItem:
        """Calculate quantity, unit costs and totals for one line item.

        Args:
            line_item_input: The selection, with any overrides.
            variables: Roof measurements for formula evaluation.
            geographic_pricing: Pricing for this call only; defaults to
                the engine's current setting.

        Returns:
            CalculatedLineItem with cent-rounded figures.

        Raises:
            LineItemNotFoundError: If the input neither embeds a definition
                nor references one in the catalog.
        """
        definition = self._resolve_definition(line_item_input)
        geo = self.get_geographic_multipliers(geographic_pricing)

        waste_factor = _first_set(line_item_input.waste_factor, definition.default_waste_factor)

        if line_item_input.quantity is not None:
            # Manual override wins over any formula; waste still applies
            quantity = line_item_input.quantity
            quantity_formula = None
            quantity_with_waste = quantity * waste_factor
        else:
            formula = _first_set(line_item_input.quantity_formula, definition.quantity_formula)
            resolution = resolve_quantity(formula, variables, waste_factor, 0.0)
            quantity = resolution.quantity
            quantity_formula = resolution.formula_used
            quantity_with_waste = resolution.quantity_with_waste

        # Geographic multipliers only apply to catalog costs, never overrides
        material_unit_cost = _first_set(
            line_item_input.material_unit_cost, definition.base_material_cost * geo.material
        )
        labor_unit_cost = _first_set(
            line_item_input.labor_unit_cost, definition.base_labor_cost * geo.labor
        )
        equipment_unit_cost = _first_set(
            line_item_input.equipment_unit_cost, definition.base_equipment_cost * geo.equipment
        )

        material_total = _round_money(quantity_with_waste * material_unit_cost)
        labor_total = _round_money(quantity_with_waste * labor_unit_cost)
        equipment_total = _round_money(quantity_with_waste * equipment_unit_cost)

        return CalculatedLineItem(
            line_item_id=definition.id,
            item_code=definition.item_code,
            name=definition.name,
            category=definition.category,
            unit_type=definition.unit_type,
            quantity=_round_money(quantity),
            quantity_formula=quantity_formula,
            waste_factor=waste_factor,
            quantity_with_waste=_round_money(quantity_with_waste),
            material_unit_cost=_round_money(material_unit_cost),
            labor_unit_cost=_round_money(labor_unit_cost),
            equipment_unit_cost=_round_money(equipment_unit_cost),
            material_total=material_total,
            labor_total=labor_total,
            equipment_total=equipment_total,
            line_total=material_total + labor_total + equipment_total,
            is_included=_first_set(line_item_input.is_included, True),
            is_optional=_first_set(line_item_input.is_optional, False),
            is_taxable=definition.is_taxable,
            sort_order=definition.sort_order,
            group_name=line_item_input.group_name,
            notes=line_item_input.notes,
        )

    # =========================================================================
    # Estimate calculation
    # =========================================================================

    def calculate_estimate(
        self,
        line_item_inputs: Sequence[LineItemInput],
        variables: RoofVariables,
        options: Optional[EstimateOptions] = None,
    ) -> EstimateCalculation:
        """Calculate a full estimate from line item selections.

        Every line item is priced and listed; only included items count
        toward totals. Line items are ordered by catalog sort order, ties
        keeping input order.
        """
        options = options or EstimateOptions()
        overhead_percent = _first_set(options.overhead_percent, settings.default_overhead_percent)
        profit_percent = _first_set(options.profit_percent, settings.default_profit_percent)
        tax_percent = _first_set(options.tax_percent, settings.default_tax_percent)
        geographic_pricing = options.geographic_pricing

        calculated = [
            self.calculate_line_item(line_item_input, variables, geographic_pricing)
            for line_item_input in line_item_inputs
        ]
        calculated.sort(key=lambda li: li.sort_order)

        included = [li for li in calculated if li.is_included]

        total_material = _round_money(sum(li.material_total for li in included))
        total_labor = _round_money(sum(li.labor_total for li in included))
        total_equipment = _round_money(sum(li.equipment_total for li in included))
        subtotal = total_material + total_labor + total_equipment

        taxable_amount = sum(li.line_total for li in included if li.is_taxable)

        overhead_amount = subtotal * overhead_percent / 100
        # Profit is taken on cost plus overhead
        profit_amount = (subtotal + overhead_amount) * profit_percent / 100
        tax_amount = taxable_amount * tax_percent / 100

        price_likely = _round_money(subtotal + overhead_amount + profit_amount + tax_amount)

        geo = self.get_geographic_multipliers(geographic_pricing)

        calculation = EstimateCalculation(
            line_items=calculated,
            total_material=total_material,
            total_labor=total_labor,
            total_equipment=total_equipment,
            subtotal=subtotal,
            overhead_percent=overhead_percent,
            overhead_amount=_round_money(overhead_amount),
            profit_percent=profit_percent,
            profit_amount=_round_money(profit_amount),
            taxable_amount=_round_money(taxable_amount),
            tax_percent=tax_percent,
            tax_amount=_round_money(tax_amount),
            price_low=_round_money(price_likely * PRICE_BAND_LOW),
            price_likely=price_likely,
            price_high=_round_money(price_likely * PRICE_BAND_HIGH),
            geographic_adjustment=_round_money(geo.average),
        )

        logger.info(
            "estimate_calculated",
            line_item_count=len(calculated),
            included_count=len(included),
            subtotal=calculation.subtotal,
            price_likely=calculation.price_likely,
        )
        return calculation

    # =========================================================================
    # Macros
    # =========================================================================

    def _resolve_macro_definition(self, macro_line_item: MacroLineItem) -> Optional[LineItem]:
        if macro_line_item.line_item is not None:
            return macro_line_item.line_item
        return self._line_items.get(macro_line_item.line_item_id)

    def expand_macro(self, macro: Macro, variables: RoofVariables) -> MacroExpansion:
        """Expand a macro into line item inputs, recording dropped entries.

        Entries whose line item is missing from the catalog, or inactive,
        are skipped rather than treated as errors. Output order follows
        the macro's own order.
        """
        expansion = MacroExpansion(macro_id=macro.id)

        for macro_line_item in macro.line_items:
            definition = self._resolve_macro_definition(macro_line_item)
            if definition is None or not definition.is_active:
                reason = "not_found" if definition is None else "inactive"
                expansion.skipped.append(
                    SkippedMacroLineItem(line_item_id=macro_line_item.line_item_id, reason=reason)
                )
                logger.info(
                    "macro_line_item_skipped",
                    macro_id=macro.id,
                    line_item_id=macro_line_item.line_item_id,
                    reason=reason,
                )
                continue

            expansion.inputs.append(
                LineItemInput(
                    line_item_id=macro_line_item.line_item_id,
                    line_item=definition,
                    quantity_formula=macro_line_item.quantity_formula,
                    waste_factor=macro_line_item.waste_factor,
                    material_unit_cost=macro_line_item.material_cost_override,
                    labor_unit_cost=macro_line_item.labor_cost_override,
                    equipment_unit_cost=macro_line_item.equipment_cost_override,
                    is_included=macro_line_item.is_selected_by_default,
                    is_optional=macro_line_item.is_optional,
                    group_name=macro_line_item.group_name,
                    notes=macro_line_item.notes,
                )
            )

        return expansion

    def apply_macro(self, macro: Macro, variables: RoofVariables) -> List[LineItemInput]:
        """Turn a macro into the line item inputs ``calculate_estimate`` consumes."""
        return self.expand_macro(macro, variables).inputs

    def calculate_macro_estimate(
        self,
        macro: Union[Macro, str],
        variables: RoofVariables,
        options: Optional[EstimateOptions] = None,
    ) -> EstimateCalculation:
        """Expand a macro (or macro id) and calculate the resulting estimate.

        Raises:
            MacroNotFoundError: If a macro id is not indexed on this engine.
        """
        if isinstance(macro, str):
            macro_id = macro
            macro = self.get_macro(macro_id)
            if macro is None:
                raise MacroNotFoundError(macro_id)
        return self.calculate_estimate(self.apply_macro(macro, variables), variables, options)

    # =========================================================================
    # Catalog queries
    # =========================================================================

    def get_line_item(self, line_item_id: str) -> Optional[LineItem]:
        return self._line_items.get(line_item_id)

    def get_all_line_items(self) -> List[LineItem]:
        return list(self._line_items.values())

    def get_line_items_by_category(self, category: Union[LineItemCategory, str]) -> List[LineItem]:
        category = LineItemCategory(category)
        return [li for li in self._line_items.values() if li.category == category]

    def get_macro(self, macro_id: str) -> Optional[Macro]:
        return self._macros.get(macro_id)

    def get_all_macros(self) -> List[Macro]:
        return list(self._macros.values())


def create_default_engine() -> DetailedPricingEngine:
    """Engine with an empty catalog and no geographic adjustment.

    The catalog layer is expected to build engines from its own records;
    this is the starting point when none are available.
    """
    return DetailedPricingEngine([], None, [])
