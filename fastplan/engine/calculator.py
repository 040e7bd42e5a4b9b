"""Plan calculator — turns a profile into a fasting plan.

Pure stateless functions, never raises for a valid profile. The same
intensity caps the safety screen reasons about are encoded here directly,
so a plan is never more aggressive than the profile allows even when the
caller skips safety_check().
"""

from __future__ import annotations

from fastplan.engine.models import (
    ActivityLevel,
    DietPreference,
    FastingGoal,
    FastingPlan,
    Milestone,
    NutritionLine,
    StressLevel,
    UserProfile,
)
from fastplan.engine.presets import FastingPreset

CALORIE_FLOOR = 1200  # kcal/day, never recommend less
KCAL_PER_KG_FAT = 7700
CARB_FIBER_RATIO = 8.0
SODIUM_LIMIT_MG = 2300

# Glycogen carries roughly the first 12 h; each hour beyond mobilises ~10 g fat/day.
GLYCOGEN_HOURS = 12
FASTING_BONUS_KG_PER_HOUR = 0.01

STRESS_DEFICIT_FACTOR = 0.75
MIN_DURATION_WEEKS = 4
STRESS_DURATION_CUT_WEEKS = 2

PROTEIN_BASE_PER_KG: dict[ActivityLevel, float] = {
    ActivityLevel.sedentary: 1.2,
    ActivityLevel.active: 1.4,
    ActivityLevel.intense: 1.6,
}
ELDERLY_PROTEIN_FLOOR = 1.2
FAT_LOSS_PROTEIN_BUMP = 0.1
PROTEIN_CEILING = 1.6


def generate_plan(profile: UserProfile) -> FastingPlan:
    """Assemble a full plan. Identical profiles give identical plans
    (start_date aside, which defaults to today)."""
    preset = recommend_preset(profile)
    duration_weeks = recommend_duration(profile)
    protein_per_kg = calculate_protein_per_kg(profile)
    protein_grams = protein_target_grams(profile, protein_per_kg)
    deficit = calculate_calorie_deficit(profile)
    weekly_loss = estimate_weekly_loss(deficit, preset)
    milestones = generate_milestones(duration_weeks, profile.goal, weekly_loss)

    return FastingPlan(
        recommended_preset=preset,
        duration_weeks=duration_weeks,
        daily_calorie_target=daily_calorie_target(profile, deficit),
        calorie_deficit=deficit,
        protein_target_grams=protein_grams,
        protein_per_kg=protein_per_kg,
        carb_fiber_ratio=CARB_FIBER_RATIO,
        expected_weekly_loss_kg=weekly_loss,
        milestones=milestones,
    )


# ---------------------------------------------------------------------------
# Preset & duration
# ---------------------------------------------------------------------------

def recommend_preset(profile: UserProfile) -> FastingPreset:
    """Goal-based pick, then safety cap, then stress/sleep downgrade."""
    if profile.goal == FastingGoal.fat_loss:
        preset = FastingPreset.eighteen6 if profile.bmi >= 30 else FastingPreset.sixteen8
    elif profile.goal == FastingGoal.maintenance:
        preset = FastingPreset.sixteen8
    else:
        preset = FastingPreset.sixteen8 if profile.is_elderly else FastingPreset.twenty4

    max_allowed = FastingPreset.sixteen8 if profile.needs_reduced_intensity else FastingPreset.omad
    if preset.fasting_hours > max_allowed.fasting_hours:
        preset = max_allowed

    if profile.is_stressed_or_sleep_deprived and preset.fasting_hours > 16:
        preset = FastingPreset.sixteen8

    return preset


def recommend_duration(profile: UserProfile) -> int:
    """Plan length in weeks, never below MIN_DURATION_WEEKS."""
    if profile.goal == FastingGoal.fat_loss:
        # 8-12 weeks is where loss becomes clinically meaningful
        if profile.bmi >= 30:
            weeks = 12
        elif profile.bmi >= 25:
            weeks = 10
        else:
            weeks = 8
    elif profile.goal == FastingGoal.maintenance:
        weeks = 8
    else:
        weeks = 6

    if profile.is_stressed_or_sleep_deprived:
        weeks = max(weeks - STRESS_DURATION_CUT_WEEKS, MIN_DURATION_WEEKS)
    return weeks


# ---------------------------------------------------------------------------
# Nutrition targets
# ---------------------------------------------------------------------------

def calculate_protein_per_kg(profile: UserProfile) -> float:
    """Protein g/kg/day: activity base, elderly floor, fat-loss bump."""
    base = PROTEIN_BASE_PER_KG[profile.activity_level]
    if profile.is_elderly:
        base = max(base, ELDERLY_PROTEIN_FLOOR)
    if profile.goal == FastingGoal.fat_loss:
        base = min(base + FAT_LOSS_PROTEIN_BUMP, PROTEIN_CEILING)
    return base


def protein_target_grams(profile: UserProfile, protein_per_kg: float) -> int:
    return round(profile.weight_kg * protein_per_kg * profile.diet_preference.protein_multiplier)


def calculate_calorie_deficit(profile: UserProfile) -> int:
    """Daily deficit in kcal; high stress scales it by 0.75, truncated."""
    if profile.goal == FastingGoal.fat_loss:
        if profile.bmi >= 30:
            deficit = 750
        elif profile.bmi >= 25:
            deficit = 625
        else:
            deficit = 500
    elif profile.goal == FastingGoal.maintenance:
        deficit = 0
    else:
        deficit = 500

    if profile.stress_level == StressLevel.high:
        deficit = int(deficit * STRESS_DEFICIT_FACTOR)
    return deficit


def daily_calorie_target(profile: UserProfile, deficit: int) -> int:
    return max(int(profile.tdee) - deficit, CALORIE_FLOOR)


def estimate_weekly_loss(deficit: int, preset: FastingPreset) -> float:
    """Expected kg lost per week from the deficit plus a fasting-window bonus."""
    if deficit <= 0:
        return 0.0
    deficit_loss = deficit * 7 / KCAL_PER_KG_FAT
    fasting_bonus = max(preset.fasting_hours - GLYCOGEN_HOURS, 0) * FASTING_BONUS_KG_PER_HOUR
    return deficit_loss + fasting_bonus


# ---------------------------------------------------------------------------
# Milestones
# ---------------------------------------------------------------------------

def generate_milestones(
    duration_weeks: int,
    goal: FastingGoal,
    weekly_loss: float,
) -> list[Milestone]:
    """Checkpoints in strictly increasing week order, ending at duration_weeks.

    A checkpoint that would land on the final week gives way to
    "Plan Complete", so week numbers never repeat. `goal` is accepted for
    parity with the other plan steps; the schedule depends only on length
    and expected loss.
    """
    checkpoints: list[tuple[int, str, str, str | None, str]] = [
        (1, "Adaptation", "milestone_adaptation_desc", None, "figure.walk"),
        (2, "Metabolic Shift", "milestone_metabolic_shift_desc", None, "bolt.fill"),
        (4, "First Results", "milestone_first_results_desc", f"{weekly_loss * 4:.1f}",
         "chart.line.uptrend.xyaxis"),
        (8, "Clinically Significant", "milestone_clinical_desc", f"{weekly_loss * 8:.1f}", "star.fill"),
        (12, "Consolidation", "milestone_consolidation_desc", None, "trophy.fill"),
    ]
    entries = [c for c in checkpoints if c[0] < duration_weeks]
    entries.append((duration_weeks, "Plan Complete", "milestone_complete_desc", None, "flag.checkered"))

    return [
        Milestone(id=idx, week_number=week, title=title, description=desc, description_arg=arg, icon=icon)
        for idx, (week, title, desc, arg, icon) in enumerate(entries)
    ]


# ---------------------------------------------------------------------------
# Nutrition summary
# ---------------------------------------------------------------------------

def nutrition_summary(profile: UserProfile, plan: FastingPlan) -> list[NutritionLine]:
    """Ordered summary lines as (key, params) for the presentation layer."""
    lines = [NutritionLine(key="nutrition_daily_calories", params=[plan.daily_calorie_target])]
    if plan.calorie_deficit > 0:
        lines.append(
            NutritionLine(key="nutrition_deficit", params=[plan.calorie_deficit, int(profile.tdee)])
        )
    lines.append(plan.protein_description)
    lines.append(NutritionLine(key="nutrition_carb_fiber", params=[int(plan.carb_fiber_ratio)]))
    lines.append(NutritionLine(key="nutrition_sodium", params=[SODIUM_LIMIT_MG]))
    # Added sugar capped at 10% of calories, 4 kcal/g
    lines.append(
        NutritionLine(key="nutrition_added_sugar", params=[int(plan.daily_calorie_target * 0.1 / 4)])
    )
    if profile.is_elderly:
        lines.append(NutritionLine(key="nutrition_sarcopenia_warning", params=[plan.protein_target_grams]))
    if profile.diet_preference == DietPreference.vegan:
        lines.append(NutritionLine(key="nutrition_vegan_supplements"))
    return lines
