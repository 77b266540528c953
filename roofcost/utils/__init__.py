"""Utility modules for RoofCost."""
