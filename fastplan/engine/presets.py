"""Fasting schedule presets — configuration only."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FastingPreset(str, Enum):
    sixteen8 = "16:8"
    eighteen6 = "18:6"
    twenty4 = "20:4"
    omad = "OMAD"
    custom = "Custom"

    @property
    def fasting_hours(self) -> int:
        return PRESETS[self].fasting_hours

    @property
    def eating_window(self) -> int:
        return 24 - self.fasting_hours


@dataclass(frozen=True, slots=True)
class PresetInfo:
    preset: FastingPreset
    fasting_hours: int
    label: str  # display key, resolved by the presentation layer
    description: str


PRESETS: dict[FastingPreset, PresetInfo] = {
    FastingPreset.sixteen8: PresetInfo(
        preset=FastingPreset.sixteen8,
        fasting_hours=16,
        label="16:8",
        description="preset_16_8_desc",
    ),
    FastingPreset.eighteen6: PresetInfo(
        preset=FastingPreset.eighteen6,
        fasting_hours=18,
        label="18:6",
        description="preset_18_6_desc",
    ),
    FastingPreset.twenty4: PresetInfo(
        preset=FastingPreset.twenty4,
        fasting_hours=20,
        label="20:4",
        description="preset_20_4_desc",
    ),
    FastingPreset.omad: PresetInfo(
        preset=FastingPreset.omad,
        fasting_hours=23,
        label="OMAD",
        description="preset_omad_desc",
    ),
    # Custom schedules start from the 16:8 default until the user edits them.
    FastingPreset.custom: PresetInfo(
        preset=FastingPreset.custom,
        fasting_hours=16,
        label="preset_custom_name",
        description="preset_custom_desc",
    ),
}


def list_presets() -> list[PresetInfo]:
    return list(PRESETS.values())


def get_preset(preset_id: str) -> PresetInfo | None:
    try:
        return PRESETS[FastingPreset(preset_id)]
    except ValueError:
        return None
