from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..trust.models import TrustMetadata


# Out-of-range generation options are clamped rather than rejected.
_BOUNDS: dict[str, tuple[float, float]] = {
    "temperature": (0.0, 2.0),
    "max_tokens": (1, 4096),
    "top_p": (0.0, 1.0),
}


class GenerationConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float = 0.7
    max_tokens: int = Field(default=600, alias="maxTokens")
    top_p: float = Field(default=1.0, alias="topP")

    @field_validator("temperature", "max_tokens", "top_p")
    @classmethod
    def _clamp(cls, value: float, info: ValidationInfo) -> float:
        low, high = _BOUNDS[info.field_name]
        return min(max(value, low), high)


class RecommendationRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_input: str = Field(..., alias="userInput")
    config: GenerationConfig = Field(default_factory=GenerationConfig)
    backends: list[str] | None = Field(
        default=None,
        description='Preferred backends in order, e.g. ["openai", "groq"]',
    )

    @field_validator("user_input")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("userInput is required and must be a non-empty string")
        return value


class RealtimeStatus(str, Enum):
    open = "open"
    closed = "closed"
    unknown = "unknown"


class Setting(str, Enum):
    indoor = "indoor"
    outdoor = "outdoor"
    mixed = "mixed"


class Activity(BaseModel):
    name: str | None = None
    type: str | None = None
    duration: str | None = None
    description: str | None = None


class RecommendationCandidate(BaseModel):
    recommendation_id: str | None = None
    title: str = ""
    description: str = ""
    duration: str | None = None
    cost: str | None = None
    location: str | None = None
    vibe: str | None = None
    setting: Setting | None = None
    group_friendly: bool | None = None
    status: RealtimeStatus | None = None
    unavailable: bool = False
    activities: list[Activity] = Field(default_factory=list)


class RecommendationResult(RecommendationCandidate):
    """A validated, trust-annotated candidate as handed to the caller."""

    model_config = ConfigDict(frozen=True)

    recommendation_id: str
    trust: TrustMetadata
    why_now: str | None = None
    activity_timestamp: str | None = None


class RecommendationResponse(BaseModel):
    success: bool = True
    result: RecommendationResult


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


def dump_result(result: RecommendationResult) -> dict[str, Any]:
    """Serialise a result, omitting optional disclosure fields that do not apply."""
    data = result.model_dump(mode="json")
    for key in ("why_now", "activity_timestamp"):
        if data.get(key) is None:
            data.pop(key, None)
    return data
