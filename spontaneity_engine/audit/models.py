from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ..trust.models import ConfidenceLevel, TrustBadge, TrustSignals


class AuditEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    recommendation_id: str
    input_context_hash: str
    sanitized_input: str
    trust_badge: TrustBadge
    confidence_level: ConfidenceLevel
    signals_summary: TrustSignals
    policy_applied: str
    policy: dict[str, Any]
    policy_passed: bool = True
    partner_id: str | None = None
    adapter_used: str | None = None
    model_version: str
    generated_at: str  # ISO-8601
