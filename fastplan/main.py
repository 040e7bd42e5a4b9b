import logging

from fastapi import FastAPI

from fastplan.config import settings
from fastplan.engine.router import router as engine_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="FastPlan", version="0.1.0")
app.include_router(engine_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "engine": {
            "presets": "/engine/presets",
            "presets_detail": "/engine/presets/{id}",
            "default_profile": "/engine/profile/default",
            "safety": "/engine/safety",
            "plan": "/engine/plan",
            "phases": "/engine/phases?hours=",
            "refeed": "/engine/refeed?hours=",
            "companion_phase": "/engine/companion/phase?hours=",
            "companion_mood": "/engine/companion/mood",
            "companion_complete": "/engine/companion/complete?hours=&goal_achieved=",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
