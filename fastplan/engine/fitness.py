"""Exercise advice derived from a profile and its generated plan."""

from __future__ import annotations

from fastplan.engine.models import (
    ActivityLevel,
    FastingPlan,
    Priority,
    Recommendation,
    UserProfile,
)

# sessions per week, minutes per session
WEEKLY_EXERCISE_TARGETS: dict[ActivityLevel, tuple[int, int]] = {
    ActivityLevel.sedentary: (3, 30),
    ActivityLevel.active: (4, 45),
    ActivityLevel.intense: (5, 60),
}


def weekly_exercise_target(profile: UserProfile) -> tuple[int, int]:
    return WEEKLY_EXERCISE_TARGETS[profile.activity_level]


def recommendations(profile: UserProfile, plan: FastingPlan) -> list[Recommendation]:
    """Advisories sorted critical → important → optional.

    Equal priorities keep generation order (sorted() is stable).
    """
    recs: list[Recommendation] = []

    # Up to two thirds of deficit weight loss can be muscle without loading.
    if plan.calorie_deficit > 0:
        recs.append(Recommendation(
            title="Resistance Training",
            description="resistance_training_desc",
            icon="dumbbell.fill",
            priority=Priority.critical,
        ))

    recs.append(Recommendation(
        title="Exercise Timing",
        description="exercise_timing_desc",
        icon="clock.arrow.2.circlepath",
        priority=Priority.important,
    ))

    recs.append(Recommendation(
        title="Post-Workout Protein",
        description="post_workout_protein_desc",
        description_args=[plan.protein_target_grams // 3],
        icon="fork.knife",
        priority=Priority.important,
    ))

    if profile.is_elderly:
        recs.append(Recommendation(
            title="Sarcopenia Prevention",
            description="sarcopenia_desc",
            icon="figure.stand",
            priority=Priority.critical,
        ))

    recs.append(Recommendation(
        title="Fasted Walking",
        description="fasted_walking_desc",
        icon="figure.walk",
        priority=Priority.optional,
    ))

    recs.append(Recommendation(
        title="Hydration & Electrolytes",
        description="hydration_desc",
        icon="drop.fill",
        priority=Priority.important,
    ))

    sessions, minutes = weekly_exercise_target(profile)
    recs.append(Recommendation(
        title="Weekly Target",
        description="weekly_target_desc",
        description_args=[sessions, minutes],
        icon="target",
        priority=Priority.important,
    ))

    return sorted(recs, key=lambda r: r.priority)


def adjusted_tdee(base_tdee: float, exercise_kcal: float) -> float:
    return base_tdee + exercise_kcal


def net_balance(intake_kcal: int, base_tdee: float, exercise_kcal: float) -> float:
    """Intake minus total burn; negative means a deficit."""
    return intake_kcal - adjusted_tdee(base_tdee, exercise_kcal)
