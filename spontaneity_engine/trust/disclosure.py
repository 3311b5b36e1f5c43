"""
Trust metadata and disclosure text.

Badge resolution follows a fixed priority order:

1. ``community_signal``: user-generated content influenced the result
2. ``recently_active``: the result reflects recent / live activity
3. ``verified_context``: contextual facts were independently verified
4. ``ai_curated``: default fallback

Labels and detail sentences live in one lookup table so the caller and the
UI never derive them on their own.
"""
from __future__ import annotations

from datetime import datetime, timezone

from .models import (
    ConfidenceLevel,
    TrustBadge,
    TrustMetadata,
    TrustPolicy,
    TrustSignals,
    WhyNowContext,
)


BADGE_TEXT: dict[TrustBadge, tuple[str, str]] = {
    TrustBadge.ai_curated: (
        "AI Curated",
        "This suggestion was assembled from your vibe, time and location.",
    ),
    TrustBadge.community_signal: (
        "Community Signal",
        "This recommendation reflects moderated suggestions from people nearby.",
    ),
    TrustBadge.recently_active: (
        "Recently Active Nearby",
        "This recommendation is generated using real-time context and recent local activity.",
    ),
    TrustBadge.verified_context: (
        "Verified Context",
        "Location and timing details for this recommendation were checked before it was shown.",
    ),
}

# Fixed signal sets per source: the offline path makes no claims at all.
OFFLINE_SIGNALS = TrustSignals()
BACKEND_SIGNALS = TrustSignals(
    ai_generated=True,
    ugc_influenced=False,
    recent_activity=True,
    context_verified=True,
)


def resolve_trust_badge(signals: TrustSignals) -> TrustBadge:
    if signals.ugc_influenced:
        return TrustBadge.community_signal
    if signals.recent_activity:
        return TrustBadge.recently_active
    if signals.context_verified:
        return TrustBadge.verified_context
    return TrustBadge.ai_curated


def calculate_confidence_level(signals: TrustSignals) -> ConfidenceLevel:
    score = (
        int(signals.ai_generated)
        + 2 * int(signals.ugc_influenced)
        + int(signals.recent_activity)
        + int(signals.context_verified)
    )
    if score >= 4:
        return ConfidenceLevel.high
    if score >= 2:
        return ConfidenceLevel.medium
    return ConfidenceLevel.low


def generate_trust_metadata(signals: TrustSignals, *, now: datetime | None = None) -> TrustMetadata:
    badge = resolve_trust_badge(signals)
    label, detail = BADGE_TEXT[badge]
    generated_at = (now or datetime.now(timezone.utc)).isoformat()
    return TrustMetadata(
        badge=badge,
        label=label,
        detail=detail,
        confidence_level=calculate_confidence_level(signals),
        signals=signals,
        generated_at=generated_at,
    )


def generate_why_now(signals: TrustSignals, context: WhyNowContext | None = None) -> str | None:
    """Return a single-sentence "why this now" explanation, or ``None``.

    Only recent activity or verified context justify a "now"; everything
    else gets no explanation. The sentence reflects the strongest signal
    and never lists several reasons.
    """
    if not (signals.recent_activity or signals.context_verified):
        return None

    ctx = context or WhyNowContext()
    where = f" in {ctx.location}" if ctx.location else " nearby"

    if signals.ugc_influenced:
        return f"It's based on recent community suggestions{where} and matches your preferences."

    if signals.recent_activity:
        when = f" and fits your {ctx.time}" if ctx.time else ""
        return f"It's active right now{where}{when}."

    vibe = f" and matches your {ctx.vibe} vibe" if ctx.vibe else ""
    location = f" in {ctx.location}" if ctx.location else ""
    return f"It's verified and available{location}{vibe}."


def _parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_trust_policy(
    metadata: TrustMetadata,
    policy: TrustPolicy,
    activity_timestamp: str | None = None,
    *,
    now: datetime | None = None,
) -> bool:
    """Return True if the recommendation satisfies ``policy``.

    Checks UGC allowance, activity recency (only when a timestamp is known),
    the verified-context requirement and the confidence floor.
    """
    signals = metadata.signals

    if not policy.allow_ugc and signals.ugc_influenced:
        return False

    if signals.recent_activity and activity_timestamp:
        activity_time = _parse_timestamp(activity_timestamp)
        if activity_time is not None:
            current = now or datetime.now(timezone.utc)
            hours_since = (current - activity_time).total_seconds() / 3600
            if hours_since > policy.min_activity_recency_hours:
                return False

    if policy.require_verified_context and not signals.context_verified:
        return False

    return metadata.confidence_level.rank >= policy.confidence_floor.rank
