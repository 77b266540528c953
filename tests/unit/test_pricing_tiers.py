"""
Unit tests for Good/Better/Best pricing tiers.

Tests cover:
- Tier multipliers per roof material
- Whole-dollar rounding of the price band
- Recommended tier selection
- Price difference and monthly payment helpers
"""

import pytest

from roofcost.models.estimate import EstimateCalculation
from roofcost.services.pricing_tiers import (
    DEFAULT_TIERS,
    TierLevel,
    calculate_monthly_payment,
    calculate_pricing_tiers,
    get_tier_configs,
    get_tier_price_difference,
)


def _base_estimate(likely: float, low: float, high: float) -> EstimateCalculation:
    return EstimateCalculation(
        total_material=0,
        total_labor=0,
        total_equipment=0,
        subtotal=0,
        overhead_percent=0,
        overhead_amount=0,
        profit_percent=0,
        profit_amount=0,
        taxable_amount=0,
        tax_percent=0,
        tax_amount=0,
        price_low=low,
        price_likely=likely,
        price_high=high,
    )


@pytest.fixture
def base_estimate():
    return _base_estimate(likely=10000, low=9000, high=11500)


# =============================================================================
# TIER CALCULATION
# =============================================================================


class TestCalculatePricingTiers:

    def test_three_tiers_in_order(self, base_estimate):
        result = calculate_pricing_tiers(base_estimate, "asphalt_shingle")

        assert [t.level for t in result.tiers] == [TierLevel.GOOD, TierLevel.BETTER, TierLevel.BEST]
        assert [t.name for t in result.tiers] == ["Essential", "Premium", "Elite"]

    def test_good_tier_is_base_price(self, base_estimate):
        good = calculate_pricing_tiers(base_estimate, "asphalt_shingle").get_tier("good")

        assert (good.price_low, good.price_likely, good.price_high) == (9000, 10000, 11500)

    def test_asphalt_multipliers(self, base_estimate):
        result = calculate_pricing_tiers(base_estimate, "asphalt_shingle")

        better = result.get_tier(TierLevel.BETTER)
        best = result.get_tier(TierLevel.BEST)
        assert (better.price_low, better.price_likely, better.price_high) == (10350, 11500, 13225)
        assert (best.price_low, best.price_likely, best.price_high) == (12150, 13500, 15525)
        assert better.material_name == "Architectural Shingles"

    def test_metal_multipliers(self, base_estimate):
        result = calculate_pricing_tiers(base_estimate, "metal")

        assert result.get_tier("better").price_likely == 12000
        assert result.get_tier("best").price_likely == 14000
        assert result.get_tier("best").manufacturer_warranty == "Lifetime Limited"

    def test_unknown_material_uses_default_table(self, base_estimate):
        assert get_tier_configs("tile") is DEFAULT_TIERS
        assert get_tier_configs(None) is DEFAULT_TIERS

        result = calculate_pricing_tiers(base_estimate, "tile")
        assert result.get_tier("better").material_name == "Premium Materials"

    def test_whole_dollar_rounding(self):
        result = calculate_pricing_tiers(_base_estimate(likely=1000.6, low=900.4, high=1150.5))

        good = result.get_tier("good")
        assert (good.price_low, good.price_likely, good.price_high) == (900, 1001, 1151)
        assert all(isinstance(t.price_likely, int) for t in result.tiers)

    def test_recommended_tier_defaults_to_better(self, base_estimate):
        result = calculate_pricing_tiers(base_estimate)

        assert result.selected_tier == TierLevel.BETTER
        assert [t.is_recommended for t in result.tiers] == [False, True, False]

    def test_recommended_tier_override(self, base_estimate):
        result = calculate_pricing_tiers(base_estimate, recommended_tier="best")

        assert result.selected_tier == TierLevel.BEST
        assert result.get_tier("best").is_recommended is True

    def test_workmanship_warranties(self, base_estimate):
        result = calculate_pricing_tiers(base_estimate, "metal")

        assert [t.workmanship_warranty for t in result.tiers] == ["5 Years", "7 Years", "10 Years"]

    def test_features_are_copies(self, base_estimate):
        result = calculate_pricing_tiers(base_estimate)
        result.tiers[0].features.append("extra")

        assert "extra" not in DEFAULT_TIERS[TierLevel.GOOD].features


# =============================================================================
# HELPERS
# =============================================================================


class TestTierHelpers:

    def test_price_difference(self, base_estimate):
        result = calculate_pricing_tiers(base_estimate, "asphalt_shingle")
        good, better = result.get_tier("good"), result.get_tier("better")

        assert get_tier_price_difference(good, better) == "$1,500"
        assert get_tier_price_difference(better, good) == "-$1,500"

    def test_monthly_payment_zero_rate(self):
        assert calculate_monthly_payment(12000, 60, 0) == 200

    def test_monthly_payment_amortised(self):
        # 6.99% APR over 60 months
        assert calculate_monthly_payment(12000) == 238

    def test_monthly_payment_shorter_term_costs_more(self):
        assert calculate_monthly_payment(12000, 36) > calculate_monthly_payment(12000, 60)
