"""Engine HTTP router — presets, safety, plans, companion."""

from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query

from fastplan.auth import verify_api_key
from fastplan.config import settings
from fastplan.engine import calculator, companion, fitness, phases, refeed
from fastplan.engine.models import (
    BlockedResult,
    CautionResult,
    CompanionMessage,
    MoodCheckIn,
    PlanEnvelope,
    PlanSafetyResult,
    ProfileMetrics,
    UserProfile,
)
from fastplan.engine.presets import PresetInfo, get_preset, list_presets
from fastplan.engine.safety import safety_check

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/engine", tags=["engine"])


def _preset_dict(info: PresetInfo) -> dict:
    return {
        "id": info.preset.value,
        "label": info.label,
        "description": info.description,
        "fasting_hours": info.fasting_hours,
        "eating_window": info.preset.eating_window,
    }


def _phase_dict(phase: phases.FastingPhase | None) -> dict | None:
    if phase is None:
        return None
    return {
        "id": phase.id,
        "name": phase.name,
        "icon": phase.icon,
        "start_hour": phase.start_hour,
        # JSON has no infinity; an open-ended phase has no end
        "end_hour": None if math.isinf(phase.end_hour) else phase.end_hour,
        "key_events": phase.key_events,
    }


# ---------------------------------------------------------------------------
# /engine/presets
# ---------------------------------------------------------------------------


@router.get("/presets")
async def presets_list(
    _: str = Depends(verify_api_key),
) -> list[dict]:
    return [_preset_dict(p) for p in list_presets()]


@router.get("/presets/{preset_id}")
async def preset_detail(
    preset_id: str,
    _: str = Depends(verify_api_key),
) -> dict:
    info = get_preset(preset_id)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {preset_id}")
    return _preset_dict(info)


# ---------------------------------------------------------------------------
# /engine/profile, /engine/safety, /engine/plan
# ---------------------------------------------------------------------------


@router.get("/profile/default")
async def default_profile(
    _: str = Depends(verify_api_key),
) -> dict:
    profile = UserProfile(
        age=settings.user_age,
        sex=settings.user_sex,
        height_cm=settings.user_height_cm,
        weight_kg=settings.user_weight_kg,
        activity_level=settings.user_activity_level,
        goal=settings.user_goal,
        diet_preference=settings.user_diet_preference,
    )
    return {
        "profile": profile.model_dump(mode="json"),
        "metrics": ProfileMetrics.from_profile(profile).model_dump(),
    }


@router.post("/safety", response_model=PlanSafetyResult)
async def check_safety(
    profile: UserProfile,
    _: str = Depends(verify_api_key),
) -> PlanSafetyResult:
    return safety_check(profile)


@router.post("/plan", response_model=PlanEnvelope)
async def create_plan(
    profile: UserProfile,
    _: str = Depends(verify_api_key),
) -> PlanEnvelope:
    safety = safety_check(profile)
    if isinstance(safety, BlockedResult):
        logger.info("Plan generation blocked: reason=%s", safety.reason)
        raise HTTPException(status_code=409, detail={"status": "blocked", "reason": safety.reason})
    if isinstance(safety, CautionResult):
        logger.info("Plan generated with cautions: %s", ",".join(safety.reasons))

    plan = calculator.generate_plan(profile)
    return PlanEnvelope(
        plan=plan,
        safety=safety,
        metrics=ProfileMetrics.from_profile(profile),
        recommendations=fitness.recommendations(profile, plan),
        nutrition=calculator.nutrition_summary(profile, plan),
    )


# ---------------------------------------------------------------------------
# /engine/phases, /engine/refeed, /engine/companion
# ---------------------------------------------------------------------------


@router.get("/phases")
async def phase_status(
    _: str = Depends(verify_api_key),
    hours: float = Query(..., ge=0, description="Hours fasted so far"),
) -> dict:
    return {
        "current": _phase_dict(phases.current_phase(hours)),
        "progress": round(phases.phase_progress(hours), 4),
        "next": _phase_dict(phases.next_phase(hours)),
        "hours_to_next": phases.hours_to_next_phase(hours),
        "unlocked": [p.id for p in phases.unlocked_phases(hours)],
    }


@router.get("/refeed")
async def refeed_guide(
    _: str = Depends(verify_api_key),
    hours: float = Query(..., ge=0, description="Length of the completed fast in hours"),
) -> dict:
    return {
        "steps": refeed.refeed_phases(hours),
        "warnings": refeed.refeed_warnings(hours),
    }


@router.get("/companion/phase", response_model=CompanionMessage)
async def companion_phase(
    _: str = Depends(verify_api_key),
    hours: float = Query(..., ge=0),
) -> CompanionMessage:
    return companion.phase_message(hours)


@router.post("/companion/mood")
async def companion_mood(
    check_in: MoodCheckIn,
    _: str = Depends(verify_api_key),
) -> dict:
    messages = companion.mood_response(check_in.mood, check_in.hours, check_in.symptoms)
    if companion.safety_prompt(check_in.mood, check_in.symptoms, check_in.hours) is not None:
        logger.info("Companion safety prompt raised at %.1fh (mood=%s)", check_in.hours, check_in.mood.value)
    return {"messages": messages}


@router.get("/companion/complete", response_model=CompanionMessage)
async def companion_complete(
    _: str = Depends(verify_api_key),
    hours: float = Query(..., ge=0),
    goal_achieved: bool = Query(...),
) -> CompanionMessage:
    return companion.completion_message(hours, goal_achieved)
