"""Estimate Output Logger for RoofCost.

Configures structlog for console output and provides a highly visible
banner summary of a finished estimate for local runs and debugging.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import structlog

from roofcost.config.settings import settings
from roofcost.models.estimate import EstimateCalculation
from roofcost.services.estimate_helpers import format_currency, generate_estimate_summary

logger = structlog.get_logger(__name__)

BANNER_WIDTH = 80
ESTIMATE_BANNER_CHAR = "═"
SECTION_BANNER_CHAR = "─"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog with ISO timestamps and console rendering.

    Args:
        level: Log level name; defaults to ``settings.log_level``.
    """
    level_name = (level or settings.log_level).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def _create_banner(char: str, text: str, width: int = BANNER_WIDTH) -> str:
    """Create a centered banner with given character."""
    text_with_spaces = f" {text} "
    padding = (width - len(text_with_spaces)) // 2
    return char * padding + text_with_spaces + char * (width - padding - len(text_with_spaces))


def log_estimate_summary(calc: EstimateCalculation, estimate_id: Optional[str] = None) -> None:
    """Print a banner summary of an estimate and emit a structured event."""
    summary = generate_estimate_summary(calc)
    timestamp = datetime.now(timezone.utc).isoformat()

    print("\n")
    print(ESTIMATE_BANNER_CHAR * BANNER_WIDTH)
    print(_create_banner(ESTIMATE_BANNER_CHAR, "ROOFCOST ESTIMATE"))
    print(ESTIMATE_BANNER_CHAR * BANNER_WIDTH)
    print(f"║ Estimate ID : {estimate_id or 'unsaved'}")
    print(f"║ Timestamp   : {timestamp}")
    print(f"║ Line Items  : {summary.included_items_count} included, {summary.optional_items_count} optional")
    print(_create_banner(SECTION_BANNER_CHAR, "COSTS"))
    print(f"║ Material    : {format_currency(calc.total_material)}")
    print(f"║ Labor       : {format_currency(calc.total_labor)}")
    print(f"║ Equipment   : {format_currency(calc.total_equipment)}")
    print(f"║ Subtotal    : {format_currency(calc.subtotal)}")
    print(f"║ Overhead    : {format_currency(calc.overhead_amount)} ({calc.overhead_percent:g}%)")
    print(f"║ Profit      : {format_currency(calc.profit_amount)} ({calc.profit_percent:g}%)")
    print(f"║ Tax         : {format_currency(calc.tax_amount)} ({calc.tax_percent:g}%)")
    print(_create_banner(SECTION_BANNER_CHAR, "PRICE"))
    print(f"║ Low         : {format_currency(calc.price_low)}")
    print(f"║ Likely      : {format_currency(calc.price_likely)}")
    print(f"║ High        : {format_currency(calc.price_high)}")
    print(f"║ Per Square  : {format_currency(summary.cost_per_square)}")
    print(ESTIMATE_BANNER_CHAR * BANNER_WIDTH)
    print("\n")

    logger.info(
        "estimate_summary_logged",
        estimate_id=estimate_id,
        price_likely=calc.price_likely,
        cost_per_square=summary.cost_per_square,
        material_percentage=summary.material_percentage,
        labor_percentage=summary.labor_percentage,
    )
