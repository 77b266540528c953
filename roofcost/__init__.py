"""RoofCost Estimation Core.

This package contains the calculation side of the RoofCost detailed
estimate: quantity formulas evaluated against roof measurements and the
line-item pricing pipeline that turns them into a priced estimate.

Architecture:
- models: Roof variables, line item catalog, macros, estimate results
- services: Formula parser, quantity resolver, pricing engine, tiers
- validators: Sanity checks on measurement input
- config: Settings and error types
"""

__version__ = "1.0.0"
