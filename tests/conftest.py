"""Pytest configuration and shared fixtures for RoofCost tests."""

import os
import sys

import pytest


# ============================================================================
# Ensure local imports work (roofcost/, tests/fixtures/)
# ============================================================================
#
# Tests import `roofcost` and `tests.fixtures` absolutely; make sure the
# repository root is importable even when the package is not installed.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


from roofcost.services.pricing_engine import DetailedPricingEngine  # noqa: E402
from tests.fixtures.mock_estimation_data import (  # noqa: E402
    ASPHALT_REROOF_MACRO,
    COMPLEX_VARIABLES,
    EMPTY_VARIABLES,
    INACTIVE_LINE_ITEM,
    REPLACEMENT_LINE_ITEMS,
    SAMPLE_VARIABLES,
    SIMPLE_VARIABLES,
)


# ============================================================================
# Roof Variables
# ============================================================================

@pytest.fixture
def sample_variables():
    """25 SQ gable roof with two slopes."""
    return SAMPLE_VARIABLES


@pytest.fixture
def simple_variables():
    """20 SQ roof with no features or slopes."""
    return SIMPLE_VARIABLES


@pytest.fixture
def complex_variables():
    """40 SQ hip roof with four slopes."""
    return COMPLEX_VARIABLES


@pytest.fixture
def empty_variables():
    """All-zero variables."""
    return EMPTY_VARIABLES


# ============================================================================
# Pricing Engine
# ============================================================================

@pytest.fixture
def catalog():
    """Replacement catalog plus one inactive item."""
    return REPLACEMENT_LINE_ITEMS + [INACTIVE_LINE_ITEM]


@pytest.fixture
def engine(catalog):
    """Engine over the replacement catalog with no geographic adjustment."""
    return DetailedPricingEngine(catalog, None, [ASPHALT_REROOF_MACRO])
