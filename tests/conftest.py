"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from fastplan.config import settings
from fastplan.engine.models import UserProfile
from fastplan.main import app


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def no_api_key(monkeypatch):
    """Make sure routes run unauthenticated regardless of the local .env."""
    monkeypatch.setattr(settings, "engine_api_key", None)


@pytest.fixture()
async def client(no_api_key):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_profile(**overrides: Any) -> UserProfile:
    """Helper to build a healthy 30-year-old baseline profile (bmi ≈ 22.9)."""
    defaults: dict[str, Any] = dict(
        age=30,
        sex="male",
        height_cm=175.0,
        weight_kg=70.0,
        activity_level="sedentary",
        goal="fat_loss",
        diet_preference="omnivore",
        health_conditions=frozenset(),
        stress_level="normal",
        sleep_quality="normal",
    )
    defaults.update(overrides)
    return UserProfile(**defaults)


def profile_payload(**overrides: Any) -> dict[str, Any]:
    """JSON body for POST routes, built from make_profile()."""
    return make_profile(**overrides).model_dump(mode="json")
