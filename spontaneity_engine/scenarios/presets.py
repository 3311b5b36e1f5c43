from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class MotivationCategory(str, Enum):
    recharge_and_unwind = "RechargeAndUnwind"
    connect_and_socialize = "ConnectAndSocialize"
    discover_and_create = "DiscoverAndCreate"


# Declaration order doubles as the tie-break order when ranking.
CATEGORY_ORDER: tuple[MotivationCategory, ...] = tuple(MotivationCategory)

CATEGORY_NAMES: dict[MotivationCategory, str] = {
    MotivationCategory.recharge_and_unwind: "Recharge & Unwind",
    MotivationCategory.connect_and_socialize: "Connect & Socialize",
    MotivationCategory.discover_and_create: "Discover & Create",
}

Budget = Literal["low", "medium", "high"]


class PresetParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    vibe: str = ""
    time: str = ""
    location: str = ""
    budget: Budget | None = None
    outdoor: bool = False
    group_activity: bool = False
    creative: bool = False
    relaxing: bool = False


class ScenarioPreset(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    motivation_category: MotivationCategory
    parameters: PresetParameters


class FilterState(BaseModel):
    vibe: str | None = None
    time: str | None = None
    location: str | None = None
    budget: Budget | Literal[""] | None = None
    outdoor: bool = False
    group_activity: bool = False
    creative: bool = False
    relaxing: bool = False


def _preset(id_: str, name: str, category: MotivationCategory, **params) -> ScenarioPreset:
    return ScenarioPreset(
        id=id_, name=name, motivation_category=category, parameters=PresetParameters(**params),
    )


_R = MotivationCategory.recharge_and_unwind
_C = MotivationCategory.connect_and_socialize
_D = MotivationCategory.discover_and_create

SCENARIOS: tuple[ScenarioPreset, ...] = (
    _preset("unplugged-hour", "The Unplugged Hour", _R,
            vibe="Relaxed", time="1 hour", budget="low", relaxing=True),
    _preset("slow-paced-wander", "Slow-Paced Wander", _R,
            vibe="Relaxed", time="2 hours", location="Outdoor", budget="low", outdoor=True, relaxing=True),
    _preset("personal-reset", "The Personal Reset", _R,
            vibe="Relaxed", time="3-4 hours", budget="medium", creative=True, relaxing=True),
    _preset("after-work-mixer", "After-Work Quick-Mixer", _C,
            vibe="Social", time="2 hours", budget="medium", group_activity=True),
    _preset("group-challenge", "Group Challenge (4+)", _C,
            vibe="Social, Adventurous", time="2-3 hours", location="Outdoor", budget="low",
            outdoor=True, group_activity=True),
    _preset("couples-date", "Couple's Spontaneous Date", _C,
            vibe="Social, Creative", time="3-4 hours", budget="medium",
            group_activity=True, creative=True, relaxing=True),
    _preset("hidden-gem-seeker", "The Hidden Gem Seeker", _D,
            vibe="Adventurous, Creative", time="2-3 hours", budget="low", creative=True),
    _preset("local-skill-taster", "Local Skill Taster (90 min)", _D,
            vibe="Creative", time="1 hour", budget="medium", creative=True),
    _preset("architecture-explorer", "Architecture Explorer", _D,
            vibe="Creative, Adventurous", time="2-3 hours", location="Outdoor", budget="low",
            outdoor=True, creative=True),
)


def presets_by_category() -> dict[MotivationCategory, list[ScenarioPreset]]:
    grouped: dict[MotivationCategory, list[ScenarioPreset]] = {c: [] for c in CATEGORY_ORDER}
    for preset in SCENARIOS:
        grouped[preset.motivation_category].append(preset)
    return grouped


class ScenarioSection(BaseModel):
    category: MotivationCategory
    display_name: str
    presets: list[ScenarioPreset] = Field(default_factory=list)


def ordered_sections(categories: list[MotivationCategory]) -> list[ScenarioSection]:
    grouped = presets_by_category()
    return [
        ScenarioSection(category=c, display_name=CATEGORY_NAMES[c], presets=grouped[c])
        for c in categories
    ]


def _normalize_vibes(vibes: str | None) -> list[str]:
    if not vibes:
        return []
    return sorted(v.strip().lower() for v in vibes.split(",") if v.strip())


def check_for_active_scenario(state: FilterState, preset: ScenarioPreset) -> bool:
    """True when the current filters exactly match ``preset`` (vibe order ignored)."""
    params = preset.parameters
    return (
        _normalize_vibes(state.vibe) == _normalize_vibes(params.vibe)
        and (state.time or "") == params.time
        and (state.location or "").strip().lower() == params.location.strip().lower()
        and (state.budget or None) == params.budget
        and state.outdoor == params.outdoor
        and state.group_activity == params.group_activity
        and state.creative == params.creative
        and state.relaxing == params.relaxing
    )


def find_active_scenario(state: FilterState) -> ScenarioPreset | None:
    return next((p for p in SCENARIOS if check_for_active_scenario(state, p)), None)
