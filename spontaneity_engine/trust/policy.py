from __future__ import annotations

import logging
import math
import os

from ..llm import config as _llm_config  # noqa: F401  (loads .env before reading env vars)
from .models import ConfidenceLevel, TrustPolicy

logger = logging.getLogger(__name__)

DEFAULT_TRUST_POLICY = TrustPolicy(
    allow_ugc=True,
    min_activity_recency_hours=72,
    require_verified_context=False,
    confidence_floor=ConfidenceLevel.low,
)

# The anonymous demo never mixes in community content and is lenient on
# verification.
DEMO_TRUST_POLICY = TrustPolicy(
    allow_ugc=False,
    min_activity_recency_hours=48,
    require_verified_context=False,
    confidence_floor=ConfidenceLevel.low,
)

_TRUE = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


def _env_hours(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        hours: float | None = float(raw)
    except ValueError:
        hours = None
    if hours is None or math.isnan(hours) or hours < 0:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return hours


def _env_confidence(name: str, default: ConfidenceLevel) -> ConfidenceLevel:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return ConfidenceLevel(raw.strip().lower())
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default.value)
        return default


def load_trust_policy(base: TrustPolicy = DEMO_TRUST_POLICY) -> TrustPolicy:
    """Build the deployment policy from ``TRUST_*`` environment variables.

    Unparseable values are logged and replaced by the matching field of ``base``.
    """
    return TrustPolicy(
        allow_ugc=_env_bool("TRUST_ALLOW_UGC", base.allow_ugc),
        min_activity_recency_hours=_env_hours(
            "TRUST_MIN_RECENCY_HOURS", base.min_activity_recency_hours,
        ),
        require_verified_context=_env_bool("TRUST_REQUIRE_VERIFIED", base.require_verified_context),
        confidence_floor=_env_confidence("TRUST_CONFIDENCE_FLOOR", base.confidence_floor),
    )


def policy_identifier(policy: TrustPolicy, partner_id: str | None = None) -> str:
    if partner_id:
        return f"partner_{partner_id}_policy"
    return "default_partner_policy" if policy == DEFAULT_TRUST_POLICY else "custom_policy"
