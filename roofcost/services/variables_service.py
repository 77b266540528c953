"""Roof Variables Service for RoofCost.

Calculates Xactimate-style variables (SQ, SF, P, EAVE, R, VAL, HIP, RAKE
plus per-slope variants) from sketches, simple dimensions, or rough
intake answers.
"""

import math
from typing import Dict, Optional, Sequence

import structlog

from roofcost.models.sketch import RoofSketch, RoofSlope
from roofcost.models.variables import RoofVariables, SlopeVariables

logger = structlog.get_logger(__name__)


# =============================================================================
# PITCH MULTIPLIERS
# =============================================================================

# Roof area increase for each rise per 12 run
PITCH_MULTIPLIERS: Dict[int, float] = {
    0: 1.00,    # Flat
    1: 1.003,
    2: 1.014,
    3: 1.031,
    4: 1.054,
    5: 1.083,
    6: 1.118,
    7: 1.158,
    8: 1.202,
    9: 1.250,
    10: 1.302,
    11: 1.357,
    12: 1.414,
    13: 1.474,
    14: 1.537,
    15: 1.601,
    16: 1.667,
    17: 1.734,
    18: 1.803,
}

MAX_TABLE_PITCH = 18

# Intake pitch answers mapped to rise per 12 run
INTAKE_PITCH_MAP: Dict[str, int] = {
    "flat": 1,
    "low": 3,
    "medium": 5,
    "steep": 8,
    "very_steep": 12,
    "unknown": 5,
}


def get_pitch_multiplier(pitch: float) -> float:
    """Pitch multiplier, linearly interpolated between whole pitches.

    Pitches at or below 0 return 1.0; at or above 18/12 return the
    18/12 multiplier.
    """
    if pitch <= 0:
        return 1.00
    if pitch >= MAX_TABLE_PITCH:
        return PITCH_MULTIPLIERS[MAX_TABLE_PITCH]

    lower = math.floor(pitch)
    upper = math.ceil(pitch)
    if lower == upper:
        return PITCH_MULTIPLIERS[lower]

    lower_mult = PITCH_MULTIPLIERS[lower]
    upper_mult = PITCH_MULTIPLIERS[upper]
    return lower_mult + (upper_mult - lower_mult) * (pitch - lower)


def calculate_sq_ft_with_pitch(length_ft: float, width_ft: float, pitch: float) -> float:
    """Plan area of a rectangle adjusted for pitch."""
    return length_ft * width_ft * get_pitch_multiplier(pitch)


def sq_ft_to_squares(sq_ft: float) -> float:
    return sq_ft / 100


def squares_to_sq_ft(squares: float) -> float:
    return squares * 100


# =============================================================================
# FROM SKETCH
# =============================================================================


def calculate_slope_variables(slope: RoofSlope) -> SlopeVariables:
    """Map one sketch facet onto slope variables."""
    return SlopeVariables(
        SQ=slope.squares,
        SF=slope.sqft,
        PITCH=slope.pitch,
        EAVE=slope.eave_lf,
        RIDGE=slope.ridge_lf,
        VALLEY=slope.valley_lf,
        HIP=slope.hip_lf,
        RAKE=slope.rake_lf,
    )


def calculate_roof_variables(
    sketch: RoofSketch,
    slopes: Optional[Sequence[RoofSlope]] = None,
) -> RoofVariables:
    """Build roof variables from sketch totals and its facets.

    Facets are labelled ``F<slope_number>`` (F1, F2, ...).
    """
    slope_variables = {
        f"F{slope.slope_number}": calculate_slope_variables(slope)
        for slope in (slopes or [])
    }

    logger.debug(
        "roof_variables_from_sketch",
        sketch_id=sketch.id,
        squares=sketch.total_squares,
        slope_count=len(slope_variables),
    )

    return RoofVariables(
        SQ=sketch.total_squares,
        SF=sketch.total_sqft,
        P=sketch.total_perimeter_lf,
        EAVE=sketch.total_eave_lf,
        R=sketch.total_ridge_lf,
        VAL=sketch.total_valley_lf,
        HIP=sketch.total_hip_lf,
        RAKE=sketch.total_rake_lf,
        SKYLIGHT_COUNT=sketch.skylight_count,
        CHIMNEY_COUNT=sketch.chimney_count,
        PIPE_COUNT=sketch.pipe_boot_count,
        VENT_COUNT=sketch.vent_count,
        GUTTER_LF=sketch.gutter_lf,
        DS_COUNT=sketch.downspout_count,
        slopes=slope_variables,
    )


# =============================================================================
# FROM DIMENSIONS / INTAKE
# =============================================================================


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def calculate_variables_from_dimensions(
    length_ft: float,
    width_ft: float,
    pitch: float,
    skylights: int = 0,
    chimneys: int = 0,
    pipe_boots: int = 2,
    vents: int = 0,
    gutter_lf: Optional[float] = None,
    downspouts: int = 2,
) -> RoofVariables:
    """Approximate variables for a simple gable roof from its footprint.

    Two eaves along the length, one ridge, two rakes across the width,
    no valleys or hips. The roof is split evenly into slopes F1 and F2.
    Gutter length defaults to the eave length.
    """
    actual_sq_ft = calculate_sq_ft_with_pitch(length_ft, width_ft, pitch)
    squares = sq_ft_to_squares(actual_sq_ft)

    perimeter = 2 * (length_ft + width_ft)
    eave = length_ft * 2
    ridge = length_ft
    rake = width_ft * 2
    gutter = gutter_lf if gutter_lf is not None else eave

    half_slope = SlopeVariables(
        SQ=_round_half_up(squares / 2, 2),
        SF=_round_half_up(actual_sq_ft / 2),
        PITCH=pitch,
        EAVE=_round_half_up(eave / 2),
        RIDGE=_round_half_up(ridge / 2),
        VALLEY=0,
        HIP=0,
        RAKE=_round_half_up(rake / 2),
    )

    return RoofVariables(
        SQ=_round_half_up(squares, 2),
        SF=_round_half_up(actual_sq_ft),
        P=_round_half_up(perimeter),
        EAVE=_round_half_up(eave),
        R=_round_half_up(ridge),
        VAL=0,
        HIP=0,
        RAKE=_round_half_up(rake),
        SKYLIGHT_COUNT=skylights,
        CHIMNEY_COUNT=chimneys,
        PIPE_COUNT=pipe_boots,
        VENT_COUNT=vents,
        GUTTER_LF=_round_half_up(gutter),
        DS_COUNT=downspouts,
        slopes={"F1": half_slope, "F2": half_slope},
    )


def calculate_variables_from_intake(
    roof_size_sqft: Optional[float] = None,
    roof_pitch: Optional[str] = None,
    stories: Optional[int] = None,
    has_skylights: bool = False,
    has_chimneys: bool = False,
) -> RoofVariables:
    """Rough variables from funnel intake answers.

    Assumes a square footprint of the given area (2,000 SF when unknown).
    """
    base_sq_ft = roof_size_sqft or 2000
    pitch = INTAKE_PITCH_MAP.get(roof_pitch or "medium", 5)
    stories = stories or 1
    side_length = math.sqrt(base_sq_ft)

    return calculate_variables_from_dimensions(
        length_ft=side_length,
        width_ft=side_length,
        pitch=pitch,
        skylights=1 if has_skylights else 0,
        chimneys=1 if has_chimneys else 0,
        pipe_boots=2 + stories,
        vents=math.ceil(base_sq_ft / 500),
        downspouts=math.ceil(side_length / 20),
    )


# =============================================================================
# DISPLAY
# =============================================================================


def _whole(value: float) -> str:
    return f"{value:.0f}"


def _count(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def format_variables_for_display(variables: RoofVariables) -> Dict[str, str]:
    """Human-readable labels and values for the variables panel."""
    return {
        "Total Squares": f"{variables.SQ:.2f} SQ",
        "Square Feet": f"{variables.SF:,.0f} SF",
        "Perimeter": f"{_whole(variables.P)} LF",
        "Eave Length": f"{_whole(variables.EAVE)} LF",
        "Ridge Length": f"{_whole(variables.R)} LF",
        "Valley Length": f"{_whole(variables.VAL)} LF",
        "Hip Length": f"{_whole(variables.HIP)} LF",
        "Rake Length": f"{_whole(variables.RAKE)} LF",
        "Skylights": _count(variables.SKYLIGHT_COUNT),
        "Chimneys": _count(variables.CHIMNEY_COUNT),
        "Pipe Boots": _count(variables.PIPE_COUNT),
        "Vents": _count(variables.VENT_COUNT),
        "Gutter Length": f"{_whole(variables.GUTTER_LF)} LF",
        "Downspouts": _count(variables.DS_COUNT),
    }


def get_empty_variables() -> RoofVariables:
    """All-zero variables with no slopes."""
    return RoofVariables()

