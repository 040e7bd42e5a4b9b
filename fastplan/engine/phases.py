"""Physiological fasting phases — static table plus hour-based lookups."""

from __future__ import annotations

import math
from dataclasses import dataclass

# The open-ended last phase is measured against a one-week fast.
LAST_PHASE_FULL_HOURS = 168.0


@dataclass(frozen=True, slots=True)
class FastingPhase:
    id: int
    name: str  # localization key
    icon: str
    start_hour: float
    end_hour: float  # math.inf for the last phase
    key_events: tuple[str, ...] = ()


PHASES: tuple[FastingPhase, ...] = (
    FastingPhase(
        id=0,
        name="phase_glycogen_depletion",
        icon="flame",
        start_hour=0.0,
        end_hour=12.0,
        key_events=("event_insulin_drops", "event_liver_glycogen", "event_fat_mobilization"),
    ),
    FastingPhase(
        id=1,
        name="phase_ketosis_initiation",
        icon="bolt.fill",
        start_hour=12.0,
        end_hour=24.0,
        key_events=("event_ketone_production", "event_blood_sugar_drop", "event_autophagy_begins", "event_digestive_rest"),
    ),
    FastingPhase(
        id=2,
        name="phase_metabolic_switch",
        icon="brain.head.profile",
        start_hour=24.0,
        end_hour=48.0,
        key_events=("event_full_ketosis", "event_bdnf_surge", "event_autophagy_accelerates", "event_mental_clarity"),
    ),
    FastingPhase(
        id=3,
        name="phase_peak_autophagy",
        icon="sparkles",
        start_hour=48.0,
        end_hour=72.0,
        key_events=("event_autophagy_peak", "event_immune_reset", "event_stable_brain"),
    ),
    FastingPhase(
        id=4,
        name="phase_deep_remodeling",
        icon="leaf.fill",
        start_hour=72.0,
        end_hour=math.inf,
        key_events=("event_new_homeostasis", "event_microbiome_shift", "event_muscle_risk"),
    ),
)


def current_phase(hours: float) -> FastingPhase:
    """Latest phase whose start has been reached; the first phase otherwise."""
    reached = [p for p in PHASES if hours >= p.start_hour]
    return reached[-1] if reached else PHASES[0]


def phase_progress(hours: float) -> float:
    """Progress through the current phase, 0–1."""
    phase = current_phase(hours)
    if math.isinf(phase.end_hour):
        elapsed = hours - phase.start_hour
        return min(elapsed / (LAST_PHASE_FULL_HOURS - phase.start_hour), 1.0)

    length = phase.end_hour - phase.start_hour
    elapsed = hours - phase.start_hour
    return min(max(elapsed / length, 0.0), 1.0)


def unlocked_phases(hours: float) -> list[FastingPhase]:
    return [p for p in PHASES if hours >= p.start_hour]


def next_phase(hours: float) -> FastingPhase | None:
    return next((p for p in PHASES if hours < p.start_hour), None)


def hours_to_next_phase(hours: float) -> float | None:
    nxt = next_phase(hours)
    if nxt is None:
        return None
    return max(nxt.start_hour - hours, 0.0)
