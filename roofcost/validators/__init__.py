"""Input validators for RoofCost."""
