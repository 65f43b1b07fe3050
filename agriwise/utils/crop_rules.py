"""
Rule-based crop recommendation from soil NPK, pH and season.

Each rule is a set of inclusive bounds; every matching rule becomes a
candidate with a fixed score, and the best-scoring candidate wins. When no
rule matches, a fallback crop is chosen from the pH and nitrogen readings.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from agriwise.models.soil import CropRecommendation, Season, SoilSample

logger = logging.getLogger(__name__)

Bounds = Tuple[Optional[float], Optional[float]]


@dataclass(frozen=True)
class CropRule:
    crop: str
    score: int
    tips: Tuple[str, ...]
    nitrogen: Bounds = (None, None)
    phosphorus: Bounds = (None, None)
    potassium: Bounds = (None, None)
    ph: Bounds = (None, None)
    season: Optional[Season] = None

    def matches(self, sample: SoilSample) -> bool:
        if self.season is not None and sample.season != self.season:
            return False
        return (
            _within(sample.nitrogen, self.nitrogen)
            and _within(sample.phosphorus, self.phosphorus)
            and _within(sample.potassium, self.potassium)
            and _within(sample.ph_level, self.ph)
        )


def _within(value: float, bounds: Bounds) -> bool:
    low, high = bounds
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


# Order matters: it is the tie-break key between equal scores.
CROP_RULES = (
    CropRule("Rice", 85, ("Maintain waterlogged conditions", "Best planted in monsoon season"),
             nitrogen=(50, 100), phosphorus=(30, None), potassium=(30, None), ph=(5.5, 7.5)),
    CropRule("Wheat", 90, ("Requires cool weather", "Irrigate at critical stages"),
             nitrogen=(40, 80), phosphorus=(20, None), potassium=(20, None), ph=(6.0, 7.5),
             season=Season.WINTER),
    CropRule("Maize", 80, ("Needs well-drained soil", "Regular irrigation required"),
             nitrogen=(60, None), phosphorus=(25, None), potassium=(25, None), ph=(5.8, 7.0)),
    CropRule("Sugarcane", 75, ("Long growing season", "Heavy water requirement"),
             nitrogen=(80, None), phosphorus=(40, None), potassium=(40, None), ph=(6.0, 7.5)),
    CropRule("Cotton", 82, ("Warm climate preferred", "Moderate water needs"),
             nitrogen=(40, None), phosphorus=(20, None), potassium=(20, None), ph=(6.0, 8.0),
             season=Season.SUMMER),
    CropRule("Soybean", 78, ("Fixes nitrogen in soil", "Good rotation crop"),
             nitrogen=(30, None), phosphorus=(20, None), potassium=(30, None), ph=(6.0, 7.0)),
    CropRule("Groundnut", 77, ("Sandy loam soil preferred", "Moderate water needs"),
             nitrogen=(20, None), phosphorus=(30, None), potassium=(20, None), ph=(5.5, 7.0)),
)

ACIDIC_FALLBACK = CropRecommendation(
    crop="Potato", confidence=65,
    tips=["Acidic soil suitable for potatoes", "Consider adding lime to raise pH"],
)
LOW_NITROGEN_FALLBACK = CropRecommendation(
    crop="Legumes", confidence=70,
    tips=["Low nitrogen suggests legumes", "Will help fix nitrogen in soil"],
)
DEFAULT_FALLBACK = CropRecommendation(
    crop="Vegetables", confidence=60,
    tips=["Mixed vegetable cultivation", "Consider soil amendments"],
)


def matching_rules(sample: SoilSample, rules=CROP_RULES):
    """Return ``(position, rule)`` for every rule the sample satisfies."""
    return [(position, rule) for position, rule in enumerate(rules) if rule.matches(sample)]


def recommend_crop(sample: SoilSample, rules=CROP_RULES) -> CropRecommendation:
    """
    Recommend a crop for a soil sample.

    Args:
        sample: Measured soil nutrients, pH and season
        rules: Rule table, evaluated in order

    Returns:
        The highest-scoring matching crop, or a fallback when nothing matches
    """
    candidates = matching_rules(sample, rules)

    if not candidates:
        if sample.ph_level < 6.0:
            fallback = ACIDIC_FALLBACK
        elif sample.nitrogen < 40:
            fallback = LOW_NITROGEN_FALLBACK
        else:
            fallback = DEFAULT_FALLBACK
        logger.info(f"No crop rule matched, falling back to {fallback.crop}")
        return fallback.model_copy(deep=True)

    _, best = min(candidates, key=lambda candidate: (-candidate[1].score, candidate[0]))
    logger.debug(f"Crop candidates: {[rule.crop for _, rule in candidates]}, chose {best.crop}")
    return CropRecommendation(crop=best.crop, confidence=best.score, tips=list(best.tips))
