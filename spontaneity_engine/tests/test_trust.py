from datetime import datetime, timedelta, timezone

import pytest

from spontaneity_engine.trust.disclosure import (
    BACKEND_SIGNALS,
    OFFLINE_SIGNALS,
    calculate_confidence_level,
    generate_trust_metadata,
    generate_why_now,
    resolve_trust_badge,
    validate_trust_policy,
)
from spontaneity_engine.trust.models import (
    ConfidenceLevel,
    TrustBadge,
    TrustPolicy,
    TrustSignals,
    WhyNowContext,
)
from spontaneity_engine.trust.policy import (
    DEFAULT_TRUST_POLICY,
    DEMO_TRUST_POLICY,
    load_trust_policy,
    policy_identifier,
)

NOW = datetime(2026, 10, 18, 18, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "signals, badge",
    [
        (TrustSignals(), TrustBadge.ai_curated),
        (TrustSignals(ai_generated=True), TrustBadge.ai_curated),
        (TrustSignals(context_verified=True), TrustBadge.verified_context),
        (TrustSignals(recent_activity=True, context_verified=True), TrustBadge.recently_active),
        (TrustSignals(ugc_influenced=True, recent_activity=True), TrustBadge.community_signal),
    ],
)
def test_badge_priority(signals, badge):
    assert resolve_trust_badge(signals) is badge


def test_confidence_levels():
    assert calculate_confidence_level(OFFLINE_SIGNALS) is ConfidenceLevel.low
    assert calculate_confidence_level(TrustSignals(ai_generated=True)) is ConfidenceLevel.low
    assert calculate_confidence_level(TrustSignals(ugc_influenced=True)) is ConfidenceLevel.medium
    assert calculate_confidence_level(BACKEND_SIGNALS) is ConfidenceLevel.medium
    everything = TrustSignals(
        ai_generated=True, ugc_influenced=True, recent_activity=True, context_verified=True,
    )
    assert calculate_confidence_level(everything) is ConfidenceLevel.high


def test_offline_metadata_makes_no_claims():
    meta = generate_trust_metadata(OFFLINE_SIGNALS, now=NOW)
    assert meta.badge is TrustBadge.ai_curated
    assert meta.label == "AI Curated"
    assert meta.signals.ai_generated is False
    assert meta.generated_at == NOW.isoformat()


def test_backend_metadata_is_recently_active():
    meta = generate_trust_metadata(BACKEND_SIGNALS)
    assert meta.badge is TrustBadge.recently_active
    assert meta.signals.ai_generated is True
    assert meta.detail


class TestWhyNow:
    def test_absent_without_recent_or_verified(self):
        assert generate_why_now(OFFLINE_SIGNALS) is None
        assert generate_why_now(TrustSignals(ai_generated=True, ugc_influenced=True)) is None

    def test_recent_activity_mentions_place_and_time(self):
        text = generate_why_now(
            TrustSignals(recent_activity=True),
            WhyNowContext(location="Denver", time="2 hours"),
        )
        assert text == "It's active right now in Denver and fits your 2 hours."

    def test_recent_activity_defaults_to_nearby(self):
        assert generate_why_now(TrustSignals(recent_activity=True)) == "It's active right now nearby."

    def test_verified_context_mentions_vibe(self):
        text = generate_why_now(
            TrustSignals(context_verified=True),
            WhyNowContext(location="Austin", vibe="relaxed"),
        )
        assert text == "It's verified and available in Austin and matches your relaxed vibe."

    def test_community_signal_wins(self):
        text = generate_why_now(TrustSignals(ugc_influenced=True, recent_activity=True))
        assert text.startswith("It's based on recent community suggestions")

    def test_single_sentence(self):
        text = generate_why_now(BACKEND_SIGNALS, WhyNowContext(location="Denver", time="1 hour"))
        assert text.count(".") == 1
        assert text.endswith(".")


class TestPolicy:
    def test_default_policy_accepts_offline(self):
        meta = generate_trust_metadata(OFFLINE_SIGNALS)
        assert validate_trust_policy(meta, DEFAULT_TRUST_POLICY)

    def test_ugc_disallowed(self):
        meta = generate_trust_metadata(TrustSignals(ugc_influenced=True))
        assert not validate_trust_policy(meta, DEMO_TRUST_POLICY)
        assert validate_trust_policy(meta, DEFAULT_TRUST_POLICY)

    def test_stale_activity_fails_recency(self):
        meta = generate_trust_metadata(BACKEND_SIGNALS)
        stale = (NOW - timedelta(hours=49)).isoformat()
        fresh = (NOW - timedelta(hours=1)).isoformat()
        assert not validate_trust_policy(meta, DEMO_TRUST_POLICY, stale, now=NOW)
        assert validate_trust_policy(meta, DEMO_TRUST_POLICY, fresh, now=NOW)

    def test_verified_context_required(self):
        policy = TrustPolicy(require_verified_context=True)
        assert not validate_trust_policy(generate_trust_metadata(OFFLINE_SIGNALS), policy)
        assert validate_trust_policy(generate_trust_metadata(BACKEND_SIGNALS), policy)

    def test_confidence_floor(self):
        policy = TrustPolicy(confidence_floor=ConfidenceLevel.medium)
        assert not validate_trust_policy(generate_trust_metadata(OFFLINE_SIGNALS), policy)
        assert validate_trust_policy(generate_trust_metadata(BACKEND_SIGNALS), policy)

    def test_load_from_environment(self, monkeypatch):
        monkeypatch.setenv("TRUST_ALLOW_UGC", "true")
        monkeypatch.setenv("TRUST_MIN_RECENCY_HOURS", "12")
        monkeypatch.setenv("TRUST_CONFIDENCE_FLOOR", "High")
        monkeypatch.delenv("TRUST_REQUIRE_VERIFIED", raising=False)
        policy = load_trust_policy()
        assert policy.allow_ugc is True
        assert policy.min_activity_recency_hours == 12
        assert policy.confidence_floor is ConfidenceLevel.high
        assert policy.require_verified_context is False

    def test_load_uses_demo_defaults(self, monkeypatch):
        for name in ("TRUST_ALLOW_UGC", "TRUST_MIN_RECENCY_HOURS",
                     "TRUST_REQUIRE_VERIFIED", "TRUST_CONFIDENCE_FLOOR"):
            monkeypatch.delenv(name, raising=False)
        assert load_trust_policy() == DEMO_TRUST_POLICY

    @pytest.mark.parametrize(
        "name, value",
        [
            ("TRUST_CONFIDENCE_FLOOR", "extreme"),
            ("TRUST_MIN_RECENCY_HOURS", "two days"),
            ("TRUST_MIN_RECENCY_HOURS", "-5"),
            ("TRUST_MIN_RECENCY_HOURS", "nan"),
        ],
    )
    def test_invalid_values_fall_back_to_base(self, monkeypatch, name, value):
        for other in ("TRUST_ALLOW_UGC", "TRUST_MIN_RECENCY_HOURS",
                      "TRUST_REQUIRE_VERIFIED", "TRUST_CONFIDENCE_FLOOR"):
            monkeypatch.delenv(other, raising=False)
        monkeypatch.setenv(name, value)
        assert load_trust_policy() == DEMO_TRUST_POLICY

    def test_policy_identifier(self):
        assert policy_identifier(DEMO_TRUST_POLICY, "acme") == "partner_acme_policy"
        assert policy_identifier(DEFAULT_TRUST_POLICY) == "default_partner_policy"
        assert policy_identifier(DEMO_TRUST_POLICY) == "custom_policy"
