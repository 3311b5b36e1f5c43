from __future__ import annotations

import logging
import random
import secrets
import time
from datetime import datetime, timezone

from ..audit.logger import record_audit
from ..audit.store import AuditSink
from ..llm.base import BackendAdapter
from ..llm.registry import build_adapters, select_adapters
from ..trust.disclosure import (
    BACKEND_SIGNALS,
    OFFLINE_SIGNALS,
    generate_trust_metadata,
    generate_why_now,
    validate_trust_policy,
)
from ..trust.models import TrustPolicy, WhyNowContext
from ..trust.policy import load_trust_policy
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .dispatcher import dispatch
from .models import RecommendationRequest, RecommendationResult
from .text import extract_context
from .validation import validate_candidate

logger = logging.getLogger(__name__)

_policy: TrustPolicy | None = None


def get_trust_policy() -> TrustPolicy:
    global _policy
    if _policy is None:
        _policy = load_trust_policy()
    return _policy


def generate_recommendation_id() -> str:
    return f"rec_{int(time.time() * 1000)}_{secrets.token_hex(4)}"


def get_recommendation(
    request: RecommendationRequest,
    *,
    adapters: list[BackendAdapter] | None = None,
    engine_config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    policy: TrustPolicy | None = None,
    audit_sink: AuditSink | None = None,
    rng: random.Random | None = None,
) -> RecommendationResult:
    """
    Run the full pipeline for one request.

    dispatch -> validate / sanitize -> trust annotation -> audit (background)

    Always returns a usable result; backend, validation and audit failures
    are absorbed along the way.
    """
    policy = policy or get_trust_policy()
    if adapters is None:
        adapters = build_adapters(engine_config.backend_priority)
    adapters = select_adapters(adapters, request.backends)

    recommendation_id = generate_recommendation_id()
    dispatched = dispatch(
        request, adapters, deadline_seconds=engine_config.deadline_seconds, rng=rng,
    )
    dispatched_at = datetime.now(timezone.utc)
    candidate = dispatched.candidate.model_copy(update={"recommendation_id": recommendation_id})

    outcome = validate_candidate(candidate, request.user_input, rng=rng)
    candidate = outcome.candidate
    from_backend = not dispatched.is_offline and not outcome.replaced
    source = dispatched.source if from_backend else "offline"

    signals = BACKEND_SIGNALS if from_backend else OFFLINE_SIGNALS
    trust = generate_trust_metadata(signals)
    activity_timestamp = dispatched_at.isoformat() if signals.recent_activity else None

    extracted = extract_context(request.user_input)
    why_now = generate_why_now(signals, WhyNowContext(
        location=candidate.location or extracted.location,
        time=candidate.duration or extracted.time,
        vibe=candidate.vibe or extracted.vibe,
    ))

    # Evaluated and recorded, but not enforced: every policy is permissive here.
    policy_passed = validate_trust_policy(trust, policy, activity_timestamp)
    if not policy_passed:
        logger.info("Recommendation %s does not meet the active trust policy", recommendation_id)

    record_audit(
        recommendation_id,
        request.user_input,
        trust,
        policy,
        engine_config.partner_id,
        sink=audit_sink,
        adapter_used=source,
        policy_passed=policy_passed,
    )

    logger.info(
        "Recommendation %s ready (source=%s, validation=%s)",
        recommendation_id, source, outcome.action.value,
    )
    return RecommendationResult(
        **candidate.model_dump(exclude={"recommendation_id"}),
        recommendation_id=recommendation_id,
        trust=trust,
        why_now=why_now,
        activity_timestamp=activity_timestamp,
    )
