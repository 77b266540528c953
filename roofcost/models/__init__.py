"""Pydantic models for RoofCost."""
