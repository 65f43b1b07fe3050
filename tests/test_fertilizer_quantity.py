"""
Tests for agriwise/utils/fertilizer_quantity.py.

What we test
------------
recommend_fertilizer():
  - Urea / DAP / MOP / NPK complex selection in priority order.
  - Quantities use the 2.2 acre factor and round halves up.
  - Supplemental lines only for deficits > 20 not covered by the primary.
  - Unknown crops use the default optimal levels.
  - Crop names are matched case-insensitively.
"""

from __future__ import annotations

from agriwise.models.fertilizer import FertilizerInput
from agriwise.utils.fertilizer_quantity import (
    DEFAULT_NPK_REQUIREMENT,
    calculate_npk_deficit,
    get_optimal_npk,
    recommend_fertilizer,
    round_half_up,
    select_primary_nutrient,
)


def _input(crop="rice", n=0.0, p=0.0, k=0.0) -> FertilizerInput:
    return FertilizerInput(crop=crop, current_n=n, current_p=p, current_k=k)


class TestDeficit:
    def test_deficit_never_negative(self):
        deficit = calculate_npk_deficit({"N": 80, "P": 40, "K": 40}, {"N": 10, "P": 60, "K": 40})
        assert deficit == {"N": 70, "P": 0, "K": 0}

    def test_unknown_crop_uses_default(self):
        assert get_optimal_npk("quinoa") == DEFAULT_NPK_REQUIREMENT

    def test_crop_lookup_ignores_case(self):
        assert get_optimal_npk("  Rice ") == {"N": 80, "P": 40, "K": 40}

    def test_primary_tie_prefers_nitrogen(self):
        assert select_primary_nutrient({"N": 30, "P": 30, "K": 0}) == "N"

    def test_small_deficits_mean_maintenance(self):
        assert select_primary_nutrient({"N": 10, "P": 10, "K": 10}) == "maintenance"

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(334.78) == 335


class TestRecommendation:
    def test_urea_for_nitrogen_deficit(self):
        result = recommend_fertilizer(_input("rice", n=10, p=40, k=40))
        assert result.fertilizer_name.startswith("Urea")
        assert result.quantity_per_acre == 335
        assert result.schedule == "Split application: 50% at sowing, 25% at 30 days, 25% at 60 days"
        assert result.details == [
            "Nitrogen deficiency: 70 mg/kg below optimal",
            "Urea provides fast-release nitrogen for leafy growth",
        ]

    def test_dap_with_potassium_supplement(self):
        result = recommend_fertilizer(_input("maize", n=100, p=10, k=20))
        assert result.fertilizer_name.startswith("DAP")
        assert result.quantity_per_acre == 191
        assert result.schedule == "Apply 100% as basal dose before sowing"
        assert result.details[-1] == "Also apply MOP: 75 kg/acre for potassium"

    def test_mop_when_only_potassium_is_low(self):
        result = recommend_fertilizer(_input("potato", n=100, p=80, k=40))
        assert result.fertilizer_name.startswith("MOP")
        assert result.quantity_per_acre == 220
        assert result.schedule == "Apply 50% at sowing, 50% at flowering stage"
        assert len(result.details) == 2

    def test_mop_when_potassium_is_not_the_largest_gap_alone(self):
        # N deficit 12 < K deficit 15, P deficit 0
        result = recommend_fertilizer(_input("quinoa", n=48, p=30, k=15))
        assert result.fertilizer_name.startswith("MOP")
        assert result.quantity_per_acre == 55

    def test_tied_deficit_adds_secondary_dap(self):
        result = recommend_fertilizer(_input("unknown", n=30, p=0, k=30))
        assert result.fertilizer_name.startswith("Urea")
        assert result.quantity_per_acre == 143
        assert "Also apply DAP: 98 kg/acre for phosphorus" in result.details
        assert not any("for nitrogen" in line for line in result.details)

    def test_maintenance_dose(self):
        result = recommend_fertilizer(_input("wheat", n=55, p=25, k=25))
        assert result.fertilizer_name == "NPK Complex (10-26-26)"
        assert result.quantity_per_acre == 110
        assert result.schedule == "Apply as basal dose at sowing time"
        assert result.details == [
            "Soil nutrients are near optimal levels",
            "Maintenance fertilization recommended",
        ]

    def test_supplements_follow_nutrient_order(self):
        result = recommend_fertilizer(_input("sugarcane", n=0, p=0, k=0))
        assert result.fertilizer_name.startswith("Urea")
        assert result.details[2:] == [
            "Also apply DAP: 196 kg/acre for phosphorus",
            "Also apply MOP: 150 kg/acre for potassium",
        ]

    def test_idempotent(self):
        fertilizer_input = _input("tomato", n=20, p=15, k=60)
        assert recommend_fertilizer(fertilizer_input) == recommend_fertilizer(fertilizer_input)

    def test_deficit_shown_with_full_precision(self):
        # 80 - 10.0078125 is exact in binary floating point
        result = recommend_fertilizer(_input("rice", n=10.0078125, p=40, k=40))
        assert result.details[0] == "Nitrogen deficiency: 69.9921875 mg/kg below optimal"
