"""Rule-based companion feedback during and after a fast.

Every function returns localization keys, not prose.
"""

from __future__ import annotations

from fastplan.engine.models import CompanionMessage, Mood, MoodSymptom

# (upper bound in hours, key prefix); first bound above `hours` wins
PHASE_MESSAGE_BUCKETS: list[tuple[float, str]] = [
    (2, "companion_phase_start"),
    (4, "companion_phase_digesting"),
    (8, "companion_phase_postabsorptive"),
    (12, "companion_phase_burning"),
    (14, "companion_phase_transition"),
    (16, "companion_phase_ketosis_light"),
    (20, "companion_phase_deep_ketosis"),
    (24, "companion_phase_autophagy"),
]
EXTENDED_PHASE_MESSAGE = "companion_phase_extended"

# Most actionable first
SYMPTOM_PRIORITY: list[MoodSymptom] = [
    MoodSymptom.dizzy,
    MoodSymptom.headache,
    MoodSymptom.anxious,
    MoodSymptom.foggy,
    MoodSymptom.irritable,
    MoodSymptom.hungry,
]

SAFETY_RED_LINE_HOURS = 14


def _phase_message_key(hours: float) -> str:
    for upper, key in PHASE_MESSAGE_BUCKETS:
        if hours < upper:
            return key
    return EXTENDED_PHASE_MESSAGE


def hour_bucket(hours: float) -> str:
    if hours < 4:
        return "early"
    if hours < 12:
        return "mid"
    if hours < 18:
        return "late"
    return "extended"


def phase_message(hours: float) -> CompanionMessage:
    key = _phase_message_key(hours)
    return CompanionMessage(title=f"{key}_title", body=f"{key}_body")


def symptom_advice(symptoms: list[MoodSymptom]) -> str | None:
    negative = [s for s in symptoms if s.is_negative]
    if not negative:
        return None
    main = next((s for s in SYMPTOM_PRIORITY if s in negative), negative[0])
    return f"symptom_advice_{main.value}"


def positive_reinforcement(symptoms: list[MoodSymptom]) -> str | None:
    positive = {s for s in symptoms if not s.is_negative}
    if not positive:
        return None
    if MoodSymptom.energetic in positive and MoodSymptom.clear_minded in positive:
        return "companion_positive_both"
    if MoodSymptom.energetic in positive:
        return "companion_positive_energy"
    return "companion_positive_clarity"


def safety_prompt(mood: Mood, symptoms: list[MoodSymptom], hours: float) -> str | None:
    """Suggest ending the fast when mood and symptoms cross the red lines."""
    if mood == Mood.struggling and (MoodSymptom.dizzy in symptoms or MoodSymptom.anxious in symptoms):
        return "companion_safety_stop"
    if hours >= SAFETY_RED_LINE_HOURS and mood in (Mood.tough, Mood.struggling):
        return "companion_safety_14h"
    return None


def mood_response(mood: Mood, hours: float, symptoms: list[MoodSymptom]) -> list[str]:
    """Ordered message keys: base mood, symptom advice, reinforcement, safety."""
    parts = [f"companion_{mood.value}_{hour_bucket(hours)}"]
    for key in (
        symptom_advice(symptoms),
        positive_reinforcement(symptoms),
        safety_prompt(mood, symptoms, hours),
    ):
        if key is not None:
            parts.append(key)
    return parts


def completion_message(hours: float, goal_achieved: bool) -> CompanionMessage:
    prefix = "companion_complete" if goal_achieved else "companion_incomplete"
    return CompanionMessage(title=f"{prefix}_title", body=f"{prefix}_body", body_args=[int(hours)])
