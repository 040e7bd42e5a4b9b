"""Pre-plan safety screening — pure, never raises.

Reason codes are opaque tokens; the presentation layer maps them to text.
"""

from __future__ import annotations

from fastplan.engine.models import (
    UNDERWEIGHT_BMI,
    BlockedResult,
    CautionResult,
    HealthCondition,
    PlanSafetyResult,
    SafeResult,
    SleepQuality,
    StressLevel,
    UserProfile,
)

# Checked in order; the first match blocks plan generation.
BLOCKING_CONDITIONS: tuple[tuple[HealthCondition, str], ...] = (
    (HealthCondition.eating_disorder, "eating_disorder"),
    (HealthCondition.pregnant, "pregnant"),
)

CAUTION_CONDITIONS: tuple[tuple[HealthCondition, str], ...] = (
    (HealthCondition.diabetes, "diabetes"),
    (HealthCondition.thyroid, "thyroid"),
    (HealthCondition.heart_disease, "heart"),
    (HealthCondition.medication, "medication"),
)


def caution_reasons(profile: UserProfile) -> list[str]:
    """Ordered caution codes for a profile, ignoring contraindications."""
    reasons = [code for condition, code in CAUTION_CONDITIONS if condition in profile.health_conditions]
    if profile.is_elderly:
        reasons.append("elderly")
    if profile.bmi < UNDERWEIGHT_BMI:
        reasons.append("underweight")
    if profile.stress_level == StressLevel.high and profile.sleep_quality == SleepQuality.poor:
        reasons.append("stress_sleep")
    return reasons


def safety_check(profile: UserProfile) -> PlanSafetyResult:
    """Classify a profile as safe, caution(reasons) or blocked(reason)."""
    for condition, code in BLOCKING_CONDITIONS:
        if condition in profile.health_conditions:
            return BlockedResult(reason=code)

    reasons = caution_reasons(profile)
    if not reasons:
        return SafeResult()
    return CautionResult(reasons=reasons)
