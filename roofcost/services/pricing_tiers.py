"""
Pricing Tiers Service for RoofCost.

Generates Good/Better/Best tiers from a base estimate's price band so
customers can compare upgrade options. The base estimate is the "good"
tier; better and best apply a material-specific multiplier.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from roofcost.models.estimate import EstimateCalculation


class TierLevel(str, Enum):
    GOOD = "good"
    BETTER = "better"
    BEST = "best"


TIER_ORDER: List[TierLevel] = [TierLevel.GOOD, TierLevel.BETTER, TierLevel.BEST]

WORKMANSHIP_WARRANTY: Dict[TierLevel, str] = {
    TierLevel.GOOD: "5 Years",
    TierLevel.BETTER: "7 Years",
    TierLevel.BEST: "10 Years",
}


@dataclass(frozen=True)
class TierConfig:
    """Static description of one tier for a roof material."""

    name: str
    description: str
    price_multiplier: float
    material_name: str
    material_description: str
    warranty_years: int
    manufacturer_warranty: str
    features: List[str] = field(default_factory=list)


@dataclass
class PricingTier:
    """A priced tier presented to the customer."""

    level: TierLevel
    name: str
    description: str
    price_multiplier: float
    price_low: int
    price_likely: int
    price_high: int
    material_name: str
    material_warranty: str
    material_description: str
    features: List[str]
    workmanship_warranty: str
    manufacturer_warranty: str
    is_recommended: bool


@dataclass
class PricingTiersResult:
    tiers: List[PricingTier]
    selected_tier: TierLevel

    def get_tier(self, level: Union[TierLevel, str]) -> Optional[PricingTier]:
        level = TierLevel(level)
        return next((tier for tier in self.tiers if tier.level == level), None)


# =============================================================================
# TIER CONFIGURATIONS BY MATERIAL
# =============================================================================

ASPHALT_TIERS: Dict[TierLevel, TierConfig] = {
    TierLevel.GOOD: TierConfig(
        name="Essential",
        description="Quality protection at an affordable price",
        price_multiplier=1.0,
        material_name="3-Tab Shingles",
        material_description="Traditional 3-tab asphalt shingles - reliable and economical",
        warranty_years=25,
        manufacturer_warranty="25-Year Limited",
        features=[
            "Standard 3-tab shingles",
            "Synthetic underlayment",
            "Basic ridge vent",
            "5-year workmanship warranty",
        ],
    ),
    TierLevel.BETTER: TierConfig(
        name="Premium",
        description="Enhanced durability and curb appeal",
        price_multiplier=1.15,
        material_name="Architectural Shingles",
        material_description="Dimensional shingles with improved aesthetics and durability",
        warranty_years=30,
        manufacturer_warranty="30-Year Limited Lifetime",
        features=[
            "Architectural dimensional shingles",
            "Premium synthetic underlayment",
            "Enhanced ridge ventilation",
            "Upgraded drip edge",
            "7-year workmanship warranty",
        ],
    ),
    TierLevel.BEST: TierConfig(
        name="Elite",
        description="Maximum protection and premium aesthetics",
        price_multiplier=1.35,
        material_name="Designer Shingles",
        material_description="High-definition designer shingles with superior performance",
        warranty_years=50,
        manufacturer_warranty="50-Year or Lifetime",
        features=[
            "Designer high-definition shingles",
            "Ice & water shield at all valleys",
            "Premium ventilation system",
            "Copper or aluminum drip edge",
            "Starter strip protection",
            "10-year workmanship warranty",
            "Transferable warranty",
        ],
    ),
}

METAL_TIERS: Dict[TierLevel, TierConfig] = {
    TierLevel.GOOD: TierConfig(
        name="Essential",
        description="Quality metal roofing at a great value",
        price_multiplier=1.0,
        material_name="Corrugated Metal",
        material_description="Galvanized corrugated metal panels",
        warranty_years=25,
        manufacturer_warranty="25-Year Paint Warranty",
        features=[
            "Corrugated metal panels",
            "Standard underlayment",
            "Basic trim package",
            "5-year workmanship warranty",
        ],
    ),
    TierLevel.BETTER: TierConfig(
        name="Premium",
        description="Standing seam for superior performance",
        price_multiplier=1.20,
        material_name="Standing Seam",
        material_description="Concealed fastener standing seam metal roofing",
        warranty_years=40,
        manufacturer_warranty="40-Year Warranty",
        features=[
            "Standing seam panels",
            "High-temp synthetic underlayment",
            "Premium trim & flashing",
            "Color-matched accessories",
            "7-year workmanship warranty",
        ],
    ),
    TierLevel.BEST: TierConfig(
        name="Elite",
        description="Premium metal with maximum longevity",
        price_multiplier=1.40,
        material_name="Premium Standing Seam",
        material_description="Kynar/PVDF coated premium standing seam",
        warranty_years=50,
        manufacturer_warranty="Lifetime Limited",
        features=[
            "Kynar/PVDF coated panels",
            "Premium underlayment system",
            "Snow guards (if needed)",
            "Custom fabricated trim",
            "Color-matched ventilation",
            "10-year workmanship warranty",
            "Transferable warranty",
        ],
    ),
}

DEFAULT_TIERS: Dict[TierLevel, TierConfig] = {
    TierLevel.GOOD: TierConfig(
        name="Essential",
        description="Quality materials at an affordable price",
        price_multiplier=1.0,
        material_name="Standard Materials",
        material_description="Quality roofing materials from trusted manufacturers",
        warranty_years=25,
        manufacturer_warranty="25-Year Limited",
        features=[
            "Standard roofing materials",
            "Synthetic underlayment",
            "Basic ventilation",
            "5-year workmanship warranty",
        ],
    ),
    TierLevel.BETTER: TierConfig(
        name="Premium",
        description="Enhanced quality and durability",
        price_multiplier=1.15,
        material_name="Premium Materials",
        material_description="Upgraded materials with enhanced performance",
        warranty_years=30,
        manufacturer_warranty="30-Year Limited Lifetime",
        features=[
            "Premium roofing materials",
            "High-performance underlayment",
            "Enhanced ventilation system",
            "Upgraded accessories",
            "7-year workmanship warranty",
        ],
    ),
    TierLevel.BEST: TierConfig(
        name="Elite",
        description="Top-tier materials and maximum protection",
        price_multiplier=1.35,
        material_name="Elite Materials",
        material_description="Best-in-class materials with superior performance",
        warranty_years=50,
        manufacturer_warranty="50-Year or Lifetime",
        features=[
            "Premium designer materials",
            "Ice & water shield protection",
            "Premium ventilation package",
            "All upgraded accessories",
            "10-year workmanship warranty",
            "Transferable warranty",
        ],
    ),
}

TIERS_BY_MATERIAL: Dict[str, Dict[TierLevel, TierConfig]] = {
    "asphalt_shingle": ASPHALT_TIERS,
    "metal": METAL_TIERS,
}


def get_tier_configs(material: Optional[str]) -> Dict[TierLevel, TierConfig]:
    """Tier table for a roof material; unknown materials use the default table."""
    return TIERS_BY_MATERIAL.get(material or "", DEFAULT_TIERS)


def _round_dollars(value: float) -> int:
    # Half-up to whole dollars
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


# =============================================================================
# TIER CALCULATION
# =============================================================================


def calculate_pricing_tiers(
    base_estimate: EstimateCalculation,
    material: Optional[str] = None,
    recommended_tier: Union[TierLevel, str] = TierLevel.BETTER,
) -> PricingTiersResult:
    """Calculate Good/Better/Best tiers from a base estimate.

    Each tier scales the base price band by its multiplier and rounds to
    whole dollars.

    Args:
        base_estimate: Calculation whose price band is the "good" tier.
        material: Roof material key ("asphalt_shingle", "metal", ...).
        recommended_tier: Tier flagged as recommended.

    Returns:
        PricingTiersResult with tiers in good/better/best order.
    """
    configs = get_tier_configs(material)
    recommended_tier = TierLevel(recommended_tier)

    tiers = []
    for level in TIER_ORDER:
        config = configs[level]
        tiers.append(
            PricingTier(
                level=level,
                name=config.name,
                description=config.description,
                price_multiplier=config.price_multiplier,
                price_low=_round_dollars(base_estimate.price_low * config.price_multiplier),
                price_likely=_round_dollars(base_estimate.price_likely * config.price_multiplier),
                price_high=_round_dollars(base_estimate.price_high * config.price_multiplier),
                material_name=config.material_name,
                material_warranty=config.manufacturer_warranty,
                material_description=config.material_description,
                features=list(config.features),
                workmanship_warranty=WORKMANSHIP_WARRANTY[level],
                manufacturer_warranty=config.manufacturer_warranty,
                is_recommended=level == recommended_tier,
            )
        )

    return PricingTiersResult(tiers=tiers, selected_tier=recommended_tier)


def get_tier_price_difference(current_tier: PricingTier, upgrade_tier: PricingTier) -> str:
    """Likely-price difference between two tiers as whole-dollar currency."""
    diff = upgrade_tier.price_likely - current_tier.price_likely
    sign = "-" if diff < 0 else ""
    return f"{sign}${abs(diff):,.0f}"


def calculate_monthly_payment(
    price: float,
    term_months: int = 60,
    interest_rate: float = 0.0699,
) -> int:
    """Estimated monthly financing payment, rounded to whole dollars.

    Args:
        price: Amount financed.
        term_months: Loan term in months.
        interest_rate: Annual rate as a fraction (0.0699 = 6.99% APR).
    """
    if interest_rate == 0:
        return _round_dollars(price / term_months)

    monthly_rate = interest_rate / 12
    growth = (1 + monthly_rate) ** term_months
    payment = price * monthly_rate * growth / (growth - 1)
    return _round_dollars(payment)
