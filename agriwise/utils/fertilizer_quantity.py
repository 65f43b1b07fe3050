"""
Fertilizer quantity recommendation from the gap between measured soil NPK and
the optimal NPK of the intended crop.

Quantities are expressed in kg per acre. The deficit (mg/kg) is divided by the
nutrient fraction of the fertilizer and scaled by ``ACRE_FACTOR``; the same
divisor with ``SUPPLEMENT_FACTOR`` gives the top-up amount for secondary
deficiencies.
"""

import logging
import math
from typing import Dict, List

from agriwise.models.fertilizer import FertilizerInput, FertilizerRecommendation
from agriwise.utils.numbers import format_number

# Set up logging
logger = logging.getLogger(__name__)

# Optimal soil NPK per crop (mg/kg)
CROP_NPK_REQUIREMENTS = {
    "rice": {"N": 80, "P": 40, "K": 40},
    "wheat": {"N": 60, "P": 30, "K": 30},
    "maize": {"N": 100, "P": 50, "K": 50},
    "sugarcane": {"N": 150, "P": 60, "K": 60},
    "cotton": {"N": 80, "P": 40, "K": 40},
    "soybean": {"N": 20, "P": 40, "K": 40},
    "groundnut": {"N": 20, "P": 40, "K": 30},
    "potato": {"N": 100, "P": 80, "K": 100},
    "tomato": {"N": 80, "P": 60, "K": 80},
    "onion": {"N": 60, "P": 40, "K": 60},
}

DEFAULT_NPK_REQUIREMENT = {"N": 60, "P": 30, "K": 30}

ACRE_FACTOR = 2.2
SUPPLEMENT_FACTOR = 1.5

# Deficits at or below this are not worth a straight fertilizer
PRIMARY_THRESHOLD = 10
# Deficits above this get a supplemental line when not covered by the primary
SECONDARY_THRESHOLD = 20

MAINTENANCE_DOSE = 50

# Straight fertilizer per nutrient: label, nutrient fraction, full name
STRAIGHT_FERTILIZERS = {
    "N": {"short": "Urea", "name": "Urea (46-0-0)", "fraction": 0.46, "nutrient": "nitrogen"},
    "P": {"short": "DAP", "name": "DAP (18-46-0)", "fraction": 0.46, "nutrient": "phosphorus"},
    "K": {"short": "MOP", "name": "MOP (0-0-60)", "fraction": 0.60, "nutrient": "potassium"},
}

MAINTENANCE_FERTILIZER = "NPK Complex (10-26-26)"

APPLICATION_SCHEDULES = {
    "N": "Split application: 50% at sowing, 25% at 30 days, 25% at 60 days",
    "P": "Apply 100% as basal dose before sowing",
    "K": "Apply 50% at sowing, 50% at flowering stage",
    "maintenance": "Apply as basal dose at sowing time",
}

PRIMARY_NOTES = {
    "N": ["Nitrogen deficiency: {deficit} mg/kg below optimal",
          "Urea provides fast-release nitrogen for leafy growth"],
    "P": ["Phosphorus deficiency: {deficit} mg/kg below optimal",
          "DAP promotes root development and flowering"],
    "K": ["Potassium deficiency: {deficit} mg/kg below optimal",
          "MOP improves disease resistance and crop quality"],
    "maintenance": ["Soil nutrients are near optimal levels",
                    "Maintenance fertilization recommended"],
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def get_optimal_npk(crop: str) -> Dict[str, float]:
    """Optimal NPK for a crop, or the default when the crop is not tabulated."""
    optimal = CROP_NPK_REQUIREMENTS.get(crop.strip().lower())
    if optimal is None:
        logger.info(f"No NPK requirement for '{crop}', using default")
        return dict(DEFAULT_NPK_REQUIREMENT)
    return dict(optimal)


def calculate_npk_deficit(optimal: Dict[str, float], current: Dict[str, float]) -> Dict[str, float]:
    """
    Calculate how far each nutrient is below optimal.

    Args:
        optimal: Dictionary with optimal N, P, K in mg/kg
        current: Dictionary with measured N, P, K in mg/kg

    Returns:
        Dictionary of non-negative N, P, K deficits
    """
    return {nutrient: max(0, optimal[nutrient] - current[nutrient]) for nutrient in ("N", "P", "K")}


def select_primary_nutrient(deficit: Dict[str, float]) -> str:
    """Pick the nutrient the primary fertilizer should supply, or ``maintenance``."""
    n, p, k = deficit["N"], deficit["P"], deficit["K"]
    if n >= p and n >= k and n > PRIMARY_THRESHOLD:
        return "N"
    if p >= n and p >= k and p > PRIMARY_THRESHOLD:
        return "P"
    if k > PRIMARY_THRESHOLD:
        return "K"
    return "maintenance"


def fertilizer_quantity(nutrient: str, deficit: float, factor: float = ACRE_FACTOR) -> int:
    """Kg per acre of the straight fertilizer that covers ``deficit``."""
    fraction = STRAIGHT_FERTILIZERS[nutrient]["fraction"]
    return round_half_up((deficit / fraction) * factor)


def supplemental_notes(deficit: Dict[str, float], primary: str) -> List[str]:
    notes = []
    for nutrient, fertilizer in STRAIGHT_FERTILIZERS.items():
        if deficit[nutrient] > SECONDARY_THRESHOLD and nutrient != primary:
            quantity = fertilizer_quantity(nutrient, deficit[nutrient], SUPPLEMENT_FACTOR)
            notes.append(
                f"Also apply {fertilizer['short']}: {quantity} kg/acre for {fertilizer['nutrient']}"
            )
    return notes


def recommend_fertilizer(fertilizer_input: FertilizerInput) -> FertilizerRecommendation:
    """
    Master function that turns a soil reading into a fertilizer recommendation

    Args:
        fertilizer_input: Intended crop and current N, P, K levels

    Returns:
        Primary fertilizer, kg/acre, application schedule and explanatory details
    """
    optimal = get_optimal_npk(fertilizer_input.crop)
    current = {
        "N": fertilizer_input.current_n,
        "P": fertilizer_input.current_p,
        "K": fertilizer_input.current_k,
    }
    deficit = calculate_npk_deficit(optimal, current)
    primary = select_primary_nutrient(deficit)

    if primary == "maintenance":
        name = MAINTENANCE_FERTILIZER
        quantity = round_half_up(MAINTENANCE_DOSE * ACRE_FACTOR)
    else:
        name = STRAIGHT_FERTILIZERS[primary]["name"]
        quantity = fertilizer_quantity(primary, deficit[primary])

    shown_deficit = format_number(deficit.get(primary, 0))
    details = [note.format(deficit=shown_deficit) for note in PRIMARY_NOTES[primary]]
    details.extend(supplemental_notes(deficit, primary))

    logger.info(f"Fertilizer for {fertilizer_input.crop}: {name} at {quantity} kg/acre (deficit {deficit})")

    return FertilizerRecommendation(
        fertilizer_name=name,
        quantity_per_acre=quantity,
        schedule=APPLICATION_SCHEDULES[primary],
        details=details,
    )
