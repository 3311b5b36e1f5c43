from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TrustBadge(str, Enum):
    ai_curated = "ai_curated"
    community_signal = "community_signal"
    recently_active = "recently_active"
    verified_context = "verified_context"


class ConfidenceLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]


_CONFIDENCE_RANK = {
    ConfidenceLevel.low: 0,
    ConfidenceLevel.medium: 1,
    ConfidenceLevel.high: 2,
}


class TrustSignals(BaseModel):
    model_config = ConfigDict(frozen=True)

    ai_generated: bool = False
    ugc_influenced: bool = False
    recent_activity: bool = False
    context_verified: bool = False


class TrustMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    badge: TrustBadge
    label: str
    detail: str
    confidence_level: ConfidenceLevel
    signals: TrustSignals
    generated_at: str  # ISO-8601


class TrustPolicy(BaseModel):
    """Partner-controlled trust thresholds, fixed per deployment."""

    model_config = ConfigDict(frozen=True)

    allow_ugc: bool = True
    min_activity_recency_hours: float = Field(default=72, ge=0)
    require_verified_context: bool = False
    confidence_floor: ConfidenceLevel = ConfidenceLevel.low


class WhyNowContext(BaseModel):
    location: str | None = None
    time: str | None = None
    vibe: str | None = None
