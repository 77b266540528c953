"""RoofCost configuration.

This package contains:
- settings: Environment variables and configuration
- errors: Custom exceptions and error codes
"""

from roofcost.config.settings import settings
from roofcost.config.errors import RoofCostError

__all__ = [
    "settings",
    "RoofCostError",
]
