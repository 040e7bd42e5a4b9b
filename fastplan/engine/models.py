"""Engine contract — Pydantic v2 models.

Enums carry their numeric behaviour through lookup tables keyed by member, so
adding a member without a table entry fails loudly on first use.
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum, IntEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from fastplan.engine.presets import FastingPreset


# ---------------------------------------------------------------------------
# Profile enums
# ---------------------------------------------------------------------------

class BiologicalSex(str, Enum):
    male = "male"
    female = "female"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    active = "active"
    intense = "intense"

    @property
    def multiplier(self) -> float:
        return ACTIVITY_MULTIPLIERS[self]


class FastingGoal(str, Enum):
    fat_loss = "fat_loss"
    maintenance = "maintenance"
    metabolic_reset = "metabolic_reset"


class DietPreference(str, Enum):
    omnivore = "omnivore"
    vegetarian = "vegetarian"
    vegan = "vegan"

    @property
    def protein_multiplier(self) -> float:
        return PROTEIN_MULTIPLIERS[self]


class HealthCondition(str, Enum):
    eating_disorder = "eating_disorder"
    pregnant = "pregnant"
    diabetes = "diabetes"
    thyroid = "thyroid"
    heart_disease = "heart_disease"
    medication = "medication"

    @property
    def is_fasting_contraindication(self) -> bool:
        return self in CONTRAINDICATIONS

    @property
    def requires_reduced_intensity(self) -> bool:
        return self in REDUCED_INTENSITY_CONDITIONS


class StressLevel(str, Enum):
    normal = "normal"
    high = "high"


class SleepQuality(str, Enum):
    normal = "normal"
    poor = "poor"


ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.sedentary: 1.2,
    ActivityLevel.active: 1.55,
    ActivityLevel.intense: 1.725,
}

# Plant protein has lower bioavailability, so the gram target is scaled up.
PROTEIN_MULTIPLIERS: dict[DietPreference, float] = {
    DietPreference.omnivore: 1.0,
    DietPreference.vegetarian: 1.1,
    DietPreference.vegan: 1.2,
}

CONTRAINDICATIONS = frozenset({HealthCondition.eating_disorder, HealthCondition.pregnant})

REDUCED_INTENSITY_CONDITIONS = frozenset({
    HealthCondition.diabetes,
    HealthCondition.thyroid,
    HealthCondition.heart_disease,
    HealthCondition.medication,
})

ELDERLY_AGE = 65
UNDERWEIGHT_BMI = 18.5


# ---------------------------------------------------------------------------
# UserProfile
# ---------------------------------------------------------------------------

class UserProfile(BaseModel):
    """Immutable snapshot of the user's body metrics and circumstances.

    bmi / bmr / tdee are properties, recomputed from the fields on every read.
    """

    model_config = ConfigDict(frozen=True)

    age: int = Field(default=30, ge=0)
    sex: BiologicalSex = BiologicalSex.male
    height_cm: float = Field(default=170.0, gt=0)
    weight_kg: float = Field(default=70.0, gt=0)
    activity_level: ActivityLevel = ActivityLevel.sedentary
    goal: FastingGoal = FastingGoal.fat_loss
    diet_preference: DietPreference = DietPreference.omnivore
    health_conditions: frozenset[HealthCondition] = frozenset()
    stress_level: StressLevel = StressLevel.normal
    sleep_quality: SleepQuality = SleepQuality.normal

    @property
    def bmi(self) -> float:
        height_m = self.height_cm / 100
        return self.weight_kg / (height_m * height_m)

    @property
    def bmi_category(self) -> str:
        bmi = self.bmi
        if bmi < UNDERWEIGHT_BMI:
            return "underweight"
        if bmi < 25:
            return "normal"
        if bmi < 30:
            return "overweight"
        return "obese"

    @property
    def bmr(self) -> float:
        """Mifflin-St Jeor basal metabolic rate, kcal/day."""
        base = 10 * self.weight_kg + 6.25 * self.height_cm - 5 * self.age
        if self.sex == BiologicalSex.male:
            return base + 5
        return base - 161

    @property
    def tdee(self) -> float:
        return self.bmr * self.activity_level.multiplier

    @property
    def is_elderly(self) -> bool:
        return self.age >= ELDERLY_AGE

    @property
    def is_stressed_or_sleep_deprived(self) -> bool:
        return self.stress_level == StressLevel.high or self.sleep_quality == SleepQuality.poor

    @property
    def has_fasting_contraindication(self) -> bool:
        return any(c.is_fasting_contraindication for c in self.health_conditions)

    @property
    def needs_reduced_intensity(self) -> bool:
        return (
            self.is_stressed_or_sleep_deprived
            or self.has_fasting_contraindication
            or any(c.requires_reduced_intensity for c in self.health_conditions)
        )


# ---------------------------------------------------------------------------
# Safety verdict (tagged by `status`)
# ---------------------------------------------------------------------------

class SafeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["safe"] = "safe"


class CautionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["caution"] = "caution"
    reasons: list[str]


class BlockedResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["blocked"] = "blocked"
    reason: str


PlanSafetyResult = Annotated[
    Union[SafeResult, CautionResult, BlockedResult],
    Field(discriminator="status"),
]


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------

class Milestone(BaseModel):
    id: int
    week_number: int
    title: str
    description: str  # localization key
    description_arg: str | None = None
    icon: str
    is_completed: bool = False


class FastingPlan(BaseModel):
    """Generated plan. start_date and is_active belong to the caller."""

    recommended_preset: FastingPreset
    duration_weeks: int = Field(gt=0)
    daily_calorie_target: int
    calorie_deficit: int
    protein_target_grams: int
    protein_per_kg: float
    carb_fiber_ratio: float = 8.0
    expected_weekly_loss_kg: float = 0.0
    milestones: list[Milestone] = Field(default_factory=list)
    start_date: date = Field(default_factory=date.today)
    is_active: bool = True

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(weeks=self.duration_weeks)

    def weeks_elapsed(self, as_of: date) -> int:
        return max((as_of - self.start_date).days // 7, 0)

    def progress(self, as_of: date) -> float:
        """Fraction of the plan's weeks elapsed, capped at 1.0."""
        return min(self.weeks_elapsed(as_of) / self.duration_weeks, 1.0)

    def is_completed(self, as_of: date) -> bool:
        return as_of >= self.end_date

    @property
    def protein_description(self) -> NutritionLine:
        """Protein target as grams plus the per-kg rate to one decimal."""
        return NutritionLine(
            key="nutrition_protein",
            params=[self.protein_target_grams, f"{self.protein_per_kg:.1f}"],
        )


class NutritionLine(BaseModel):
    key: str
    params: list[int | float | str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Fitness advice
# ---------------------------------------------------------------------------

class Priority(IntEnum):
    critical = 0
    important = 1
    optional = 2


class Recommendation(BaseModel):
    title: str
    description: str
    description_args: list[int] = Field(default_factory=list)
    icon: str
    priority: Priority


# ---------------------------------------------------------------------------
# Companion
# ---------------------------------------------------------------------------

class Mood(str, Enum):
    great = "great"
    good = "good"
    neutral = "neutral"
    tough = "tough"
    struggling = "struggling"


class MoodSymptom(str, Enum):
    headache = "headache"
    irritable = "irritable"
    foggy = "foggy"
    hungry = "hungry"
    energetic = "energetic"
    clear_minded = "clear_minded"
    dizzy = "dizzy"
    anxious = "anxious"

    @property
    def is_negative(self) -> bool:
        return self not in (MoodSymptom.energetic, MoodSymptom.clear_minded)


class CompanionMessage(BaseModel):
    title: str
    body: str
    body_args: list[int] = Field(default_factory=list)


class MoodCheckIn(BaseModel):
    mood: Mood
    hours: float = Field(ge=0)
    symptoms: list[MoodSymptom] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------

class ProfileMetrics(BaseModel):
    bmi: float
    bmi_category: str
    bmr: float
    tdee: float
    is_elderly: bool
    needs_reduced_intensity: bool

    @classmethod
    def from_profile(cls, profile: UserProfile) -> ProfileMetrics:
        return cls(
            bmi=round(profile.bmi, 1),
            bmi_category=profile.bmi_category,
            bmr=round(profile.bmr, 1),
            tdee=round(profile.tdee, 1),
            is_elderly=profile.is_elderly,
            needs_reduced_intensity=profile.needs_reduced_intensity,
        )


class PlanEnvelope(BaseModel):
    """Everything the onboarding summary screen needs, in one response."""

    plan: FastingPlan
    safety: PlanSafetyResult
    metrics: ProfileMetrics
    recommendations: list[Recommendation] = Field(default_factory=list)
    nutrition: list[NutritionLine] = Field(default_factory=list)
