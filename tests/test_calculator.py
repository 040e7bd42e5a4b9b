"""Tests for the plan calculator."""

from __future__ import annotations

from itertools import product

import pytest

from fastplan.engine import calculator
from fastplan.engine.calculator import (
    calculate_calorie_deficit,
    calculate_protein_per_kg,
    estimate_weekly_loss,
    generate_milestones,
    generate_plan,
    nutrition_summary,
    recommend_duration,
    recommend_preset,
)
from fastplan.engine.models import FastingGoal
from fastplan.engine.presets import FastingPreset
from tests.conftest import make_profile


def _profile_grid():
    """A broad sweep of profile combinations for invariant checks."""
    for age, sex, weight, activity, goal, stress, sleep, conditions in product(
        (18, 40, 70, 90),
        ("male", "female"),
        (40.0, 70.0, 95.0, 140.0),
        ("sedentary", "active", "intense"),
        ("fat_loss", "maintenance", "metabolic_reset"),
        ("normal", "high"),
        ("normal", "poor"),
        (frozenset(), frozenset({"diabetes"}), frozenset({"medication", "thyroid"})),
    ):
        yield make_profile(
            age=age,
            sex=sex,
            height_cm=165.0,
            weight_kg=weight,
            activity_level=activity,
            goal=goal,
            stress_level=stress,
            sleep_quality=sleep,
            health_conditions=conditions,
        )


# ---------------------------------------------------------------------------
# Worked scenarios
# ---------------------------------------------------------------------------

class TestOverweightFatLossScenario:
    """30y male, 175 cm / 90 kg (bmi ≈ 29.4), sedentary, fat loss."""

    @pytest.fixture()
    def plan(self):
        return generate_plan(make_profile(height_cm=175.0, weight_kg=90.0))

    def test_preset(self, plan):
        assert plan.recommended_preset is FastingPreset.sixteen8

    def test_duration(self, plan):
        assert plan.duration_weeks == 10

    def test_deficit_and_calories(self, plan):
        assert plan.calorie_deficit == 625
        # tdee = 1848.75 × 1.2 = 2218.5
        assert plan.daily_calorie_target == 2218 - 625

    def test_protein(self, plan):
        assert plan.protein_per_kg == pytest.approx(1.3)
        assert plan.protein_target_grams == 117

    def test_weekly_loss(self, plan):
        assert plan.expected_weekly_loss_kg == pytest.approx(625 * 7 / 7700 + 0.04)
        assert plan.expected_weekly_loss_kg == pytest.approx(0.608, abs=0.001)

    def test_milestones(self, plan):
        assert [m.week_number for m in plan.milestones] == [1, 2, 4, 8, 10]
        assert [m.id for m in plan.milestones] == [0, 1, 2, 3, 4]
        first_results = plan.milestones[2]
        assert first_results.title == "First Results"
        assert first_results.description_arg == "2.4"
        assert plan.milestones[3].description_arg == "4.9"

    def test_carb_fiber_ratio(self, plan):
        assert plan.carb_fiber_ratio == 8.0


class TestObeseIntenseScenario:
    def test_plan(self):
        p = make_profile(height_cm=170.0, weight_kg=95.0, activity_level="intense")
        assert p.bmi >= 30
        plan = generate_plan(p)
        assert plan.recommended_preset is FastingPreset.eighteen6
        assert plan.duration_weeks == 12
        assert plan.calorie_deficit == 750
        assert plan.protein_per_kg == 1.6
        assert plan.protein_target_grams == 152
        assert plan.daily_calorie_target == int(p.tdee) - 750


class TestElderlyMetabolicReset:
    def test_elderly_gets_sixteen8(self):
        p = make_profile(age=70, goal="metabolic_reset")
        assert recommend_preset(p) is FastingPreset.sixteen8

    def test_younger_gets_twenty4(self):
        p = make_profile(age=40, goal="metabolic_reset")
        assert recommend_preset(p) is FastingPreset.twenty4


class TestStressedMaintenance:
    def test_plan(self):
        p = make_profile(goal="maintenance", stress_level="high", sleep_quality="poor")
        plan = generate_plan(p)
        assert plan.duration_weeks == 6
        assert plan.calorie_deficit == 0
        assert plan.daily_calorie_target == int(p.tdee)
        assert plan.expected_weekly_loss_kg == 0


# ---------------------------------------------------------------------------
# Preset rules
# ---------------------------------------------------------------------------

class TestRecommendPreset:
    def test_maintenance(self):
        assert recommend_preset(make_profile(goal="maintenance")) is FastingPreset.sixteen8

    def test_condition_caps_obese_fat_loss(self):
        p = make_profile(height_cm=170.0, weight_kg=95.0, health_conditions={"diabetes"})
        assert recommend_preset(p) is FastingPreset.sixteen8

    @pytest.mark.parametrize("stress,sleep", [("high", "normal"), ("normal", "poor")])
    def test_stress_or_sleep_downgrades(self, stress, sleep):
        p = make_profile(age=40, goal="metabolic_reset", stress_level=stress, sleep_quality=sleep)
        assert recommend_preset(p) is FastingPreset.sixteen8

    def test_never_above_sixteen_hours_when_reduced_intensity(self):
        for p in _profile_grid():
            if p.needs_reduced_intensity:
                assert recommend_preset(p).fasting_hours <= 16


# ---------------------------------------------------------------------------
# Duration
# ---------------------------------------------------------------------------

class TestRecommendDuration:
    @pytest.mark.parametrize(
        "weight,weeks",
        [(95.0, 12), (80.0, 10), (60.0, 8)],
    )
    def test_fat_loss_by_bmi(self, weight, weeks):
        assert recommend_duration(make_profile(height_cm=170.0, weight_kg=weight)) == weeks

    def test_maintenance(self):
        assert recommend_duration(make_profile(goal="maintenance")) == 8

    def test_metabolic_reset(self):
        assert recommend_duration(make_profile(goal="metabolic_reset")) == 6

    def test_stress_cut(self):
        p = make_profile(height_cm=170.0, weight_kg=95.0, stress_level="high")
        assert recommend_duration(p) == 10

    def test_floor_at_four(self):
        p = make_profile(goal="metabolic_reset", sleep_quality="poor")
        assert recommend_duration(p) == 4

    def test_never_below_four(self):
        assert all(recommend_duration(p) >= 4 for p in _profile_grid())


# ---------------------------------------------------------------------------
# Protein
# ---------------------------------------------------------------------------

class TestProtein:
    @pytest.mark.parametrize(
        "activity,expected",
        [("sedentary", 1.2), ("active", 1.4), ("intense", 1.6)],
    )
    def test_base_by_activity(self, activity, expected):
        p = make_profile(goal="maintenance", activity_level=activity)
        assert calculate_protein_per_kg(p) == expected

    def test_fat_loss_bump(self):
        p = make_profile(activity_level="active")
        assert calculate_protein_per_kg(p) == pytest.approx(1.5)

    def test_fat_loss_ceiling(self):
        p = make_profile(activity_level="intense")
        assert calculate_protein_per_kg(p) == 1.6

    def test_elderly_floor(self):
        p = make_profile(age=80, goal="maintenance")
        assert calculate_protein_per_kg(p) >= 1.2

    def test_vegan_multiplier(self):
        plan = generate_plan(make_profile(goal="maintenance", weight_kg=70.0, diet_preference="vegan"))
        assert plan.protein_target_grams == 101  # round(70 × 1.2 × 1.2)


# ---------------------------------------------------------------------------
# Calories
# ---------------------------------------------------------------------------

class TestCalorieDeficit:
    @pytest.mark.parametrize(
        "weight,deficit",
        [(95.0, 750), (80.0, 625), (60.0, 500)],
    )
    def test_fat_loss_by_bmi(self, weight, deficit):
        assert calculate_calorie_deficit(make_profile(height_cm=170.0, weight_kg=weight)) == deficit

    def test_maintenance_zero(self):
        assert calculate_calorie_deficit(make_profile(goal="maintenance")) == 0

    def test_metabolic_reset(self):
        assert calculate_calorie_deficit(make_profile(goal="metabolic_reset")) == 500

    def test_high_stress_truncates(self):
        p = make_profile(height_cm=170.0, weight_kg=80.0, stress_level="high")
        assert calculate_calorie_deficit(p) == 468  # 625 × 0.75 = 468.75

    def test_poor_sleep_alone_keeps_deficit(self):
        p = make_profile(height_cm=170.0, weight_kg=80.0, sleep_quality="poor")
        assert calculate_calorie_deficit(p) == 625

    def test_floor_applies_to_small_profiles(self):
        p = make_profile(age=80, sex="female", height_cm=150.0, weight_kg=40.0)
        assert p.tdee - calculate_calorie_deficit(p) < 1200
        assert generate_plan(p).daily_calorie_target == 1200

    def test_never_below_floor(self):
        for p in _profile_grid():
            plan = generate_plan(p)
            assert plan.daily_calorie_target >= calculator.CALORIE_FLOOR
            assert plan.calorie_deficit >= 0


# ---------------------------------------------------------------------------
# Weekly loss
# ---------------------------------------------------------------------------

class TestEstimateWeeklyLoss:
    def test_zero_deficit(self):
        assert estimate_weekly_loss(0, FastingPreset.omad) == 0

    def test_negative_deficit(self):
        assert estimate_weekly_loss(-100, FastingPreset.sixteen8) == 0

    def test_with_fasting_bonus(self):
        assert estimate_weekly_loss(500, FastingPreset.omad) == pytest.approx(500 * 7 / 7700 + 0.11)

    def test_custom_uses_sixteen_hours(self):
        assert estimate_weekly_loss(500, FastingPreset.custom) == estimate_weekly_loss(500, FastingPreset.sixteen8)


# ---------------------------------------------------------------------------
# Milestones
# ---------------------------------------------------------------------------

class TestMilestones:
    @pytest.mark.parametrize(
        "weeks,expected",
        [
            (4, [1, 2, 4]),
            (6, [1, 2, 4, 6]),
            (8, [1, 2, 4, 8]),
            (10, [1, 2, 4, 8, 10]),
            (12, [1, 2, 4, 8, 12]),
        ],
    )
    def test_week_numbers(self, weeks, expected):
        milestones = generate_milestones(weeks, FastingGoal.fat_loss, 0.5)
        assert [m.week_number for m in milestones] == expected

    def test_final_is_plan_complete(self):
        milestones = generate_milestones(12, FastingGoal.maintenance, 0.0)
        assert milestones[-1].title == "Plan Complete"
        assert milestones[-1].description == "milestone_complete_desc"
        assert milestones[-1].icon == "flag.checkered"

    def test_consolidation_before_longer_finish(self):
        milestones = generate_milestones(16, FastingGoal.fat_loss, 0.5)
        assert [m.title for m in milestones] == [
            "Adaptation",
            "Metabolic Shift",
            "First Results",
            "Clinically Significant",
            "Consolidation",
            "Plan Complete",
        ]

    def test_ids_sequential(self):
        milestones = generate_milestones(16, FastingGoal.fat_loss, 0.5)
        assert [m.id for m in milestones] == list(range(len(milestones)))

    def test_only_loss_milestones_carry_args(self):
        milestones = generate_milestones(10, FastingGoal.fat_loss, 0.25)
        args = {m.title: m.description_arg for m in milestones}
        assert args["First Results"] == "1.0"
        assert args["Clinically Significant"] == "2.0"
        assert args["Adaptation"] is None

    def test_invariants_over_grid(self):
        for p in _profile_grid():
            plan = generate_plan(p)
            weeks = [m.week_number for m in plan.milestones]
            assert weeks
            assert all(a < b for a, b in zip(weeks, weeks[1:]))
            assert weeks[-1] == plan.duration_weeks


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------

class TestDeterminism:
    def test_same_profile_same_plan(self):
        p = make_profile(height_cm=175.0, weight_kg=90.0, health_conditions={"thyroid"})
        first = generate_plan(p).model_dump(exclude={"start_date"})
        second = generate_plan(p).model_dump(exclude={"start_date"})
        assert first == second


# ---------------------------------------------------------------------------
# Nutrition summary
# ---------------------------------------------------------------------------

class TestNutritionSummary:
    def test_lines_for_deficit_plan(self):
        p = make_profile(height_cm=175.0, weight_kg=90.0)
        plan = generate_plan(p)
        lines = nutrition_summary(p, plan)
        assert [line.key for line in lines] == [
            "nutrition_daily_calories",
            "nutrition_deficit",
            "nutrition_protein",
            "nutrition_carb_fiber",
            "nutrition_sodium",
            "nutrition_added_sugar",
        ]
        assert lines[1].params == [625, 2218]
        assert lines[2].params == [117, "1.3"]
        assert lines[3].params == [8]
        assert lines[5].params == [39]  # 1593 × 10% / 4 kcal per g

    def test_no_deficit_line_for_maintenance(self):
        p = make_profile(goal="maintenance")
        keys = [line.key for line in nutrition_summary(p, generate_plan(p))]
        assert "nutrition_deficit" not in keys

    def test_elderly_vegan_extra_lines(self):
        p = make_profile(age=70, diet_preference="vegan")
        keys = [line.key for line in nutrition_summary(p, generate_plan(p))]
        assert keys[-2:] == ["nutrition_sarcopenia_warning", "nutrition_vegan_supplements"]
