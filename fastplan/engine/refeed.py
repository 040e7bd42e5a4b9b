"""Refeeding guidance keyed by how long the fast lasted."""

from __future__ import annotations

from dataclasses import dataclass

SHORT_FAST_HOURS = 18.0
EXTENDED_FAST_HOURS = 36.0


@dataclass(frozen=True, slots=True)
class RefeedStep:
    icon: str
    timing: str
    title: str
    foods: tuple[str, ...] = ()
    avoid: tuple[str, ...] = ()
    reason: str = ""


SHORT_FAST_STEPS: tuple[RefeedStep, ...] = (
    RefeedStep(
        icon="💧",
        timing="refeed_timing_first",
        title="refeed_water_title",
        foods=("refeed_food_warm_water", "refeed_food_lemon_water"),
        avoid=("refeed_avoid_cold_drinks",),
        reason="refeed_reason_hydration",
    ),
    RefeedStep(
        icon="🥬",
        timing="refeed_timing_15min",
        title="refeed_light_title",
        foods=("refeed_food_cooked_veg", "refeed_food_light_soup"),
        avoid=("refeed_avoid_raw_salad", "refeed_avoid_fried"),
        reason="refeed_reason_gentle_gut",
    ),
    RefeedStep(
        icon="🍽️",
        timing="refeed_timing_30min",
        title="refeed_meal_title",
        foods=("refeed_food_balanced_meal", "refeed_food_lean_protein"),
        avoid=("refeed_avoid_sugar", "refeed_avoid_processed"),
        reason="refeed_reason_nutrient_restore",
    ),
)

MEDIUM_FAST_STEPS: tuple[RefeedStep, ...] = (
    RefeedStep(
        icon="🍵",
        timing="refeed_timing_first",
        title="refeed_broth_title",
        foods=("refeed_food_bone_broth", "refeed_food_miso"),
        avoid=("refeed_avoid_solid_food", "refeed_avoid_caffeine"),
        reason="refeed_reason_electrolyte",
    ),
    RefeedStep(
        icon="🥣",
        timing="refeed_timing_30min",
        title="refeed_vegsoup_title",
        foods=("refeed_food_veg_soup", "refeed_food_steamed_veg"),
        avoid=("refeed_avoid_sugar", "refeed_avoid_dairy"),
        reason="refeed_reason_enzyme_wake",
    ),
    RefeedStep(
        icon="🐟",
        timing="refeed_timing_1h",
        title="refeed_protein_title",
        foods=("refeed_food_fish", "refeed_food_egg", "refeed_food_tofu"),
        avoid=("refeed_avoid_red_meat", "refeed_avoid_heavy_carb"),
        reason="refeed_reason_gradual_protein",
    ),
)

EXTENDED_FAST_STEPS: tuple[RefeedStep, ...] = (
    RefeedStep(
        icon="🍵",
        timing="refeed_timing_first",
        title="refeed_broth_title",
        foods=("refeed_food_bone_broth", "refeed_food_electrolyte"),
        avoid=("refeed_avoid_any_solid",),
        reason="refeed_reason_refeeding_risk",
    ),
    RefeedStep(
        icon="🥒",
        timing="refeed_timing_1h",
        title="refeed_fermented_title",
        foods=("refeed_food_kimchi", "refeed_food_yogurt_small"),
        avoid=("refeed_avoid_sugar", "refeed_avoid_large_portions"),
        reason="refeed_reason_microbiome",
    ),
    RefeedStep(
        icon="🥣",
        timing="refeed_timing_2h",
        title="refeed_millet_title",
        foods=("refeed_food_congee", "refeed_food_millet_porridge"),
        avoid=("refeed_avoid_wheat", "refeed_avoid_gluten"),
        reason="refeed_reason_gentle_carb",
    ),
    RefeedStep(
        icon="🐟",
        timing="refeed_timing_3h",
        title="refeed_protein_title",
        foods=("refeed_food_fish", "refeed_food_steamed_chicken"),
        avoid=("refeed_avoid_red_meat", "refeed_avoid_fried"),
        reason="refeed_reason_rebuild",
    ),
)


def refeed_phases(hours: float) -> list[RefeedStep]:
    if hours < SHORT_FAST_HOURS:
        steps = SHORT_FAST_STEPS
    elif hours < EXTENDED_FAST_HOURS:
        steps = MEDIUM_FAST_STEPS
    else:
        steps = EXTENDED_FAST_STEPS
    return list(steps)


def refeed_warnings(hours: float) -> list[str]:
    warnings = ["refeed_warn_no_sugar"]
    if hours >= SHORT_FAST_HOURS:
        warnings.append("refeed_warn_small_portions")
    if hours >= EXTENDED_FAST_HOURS:
        warnings.append("refeed_warn_insulin")
    return warnings
