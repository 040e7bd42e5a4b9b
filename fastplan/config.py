from pydantic import Field
from pydantic_settings import BaseSettings

from fastplan.engine.models import ActivityLevel, BiologicalSex, DietPreference, FastingGoal


class Settings(BaseSettings):
    engine_api_key: str | None = None
    log_level: str = "INFO"

    # Default user profile (served by /engine/profile/default). Override via env.
    user_age: int = Field(default=30, ge=0)
    user_sex: BiologicalSex = BiologicalSex.male
    user_height_cm: float = Field(default=170.0, gt=0)
    user_weight_kg: float = Field(default=70.0, gt=0)
    user_activity_level: ActivityLevel = ActivityLevel.sedentary
    user_goal: FastingGoal = FastingGoal.fat_loss
    user_diet_preference: DietPreference = DietPreference.omnivore

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
