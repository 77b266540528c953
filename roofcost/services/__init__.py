"""Estimation services for RoofCost."""
