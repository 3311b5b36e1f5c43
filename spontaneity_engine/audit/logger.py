from __future__ import annotations

import hashlib
import logging
import os
import re
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone

from ..llm import config as _llm_config  # noqa: F401  (loads .env before reading env vars)
from ..recommendations.text import strip_context_markers
from ..trust.models import TrustMetadata, TrustPolicy
from ..trust.policy import policy_identifier
from .models import AuditEvent
from .store import AuditSink, get_default_sink

logger = logging.getLogger(__name__)

MAX_INPUT_CHARS = 500

_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
# 3-3-4 digit grouping with an optional country code.
_PHONE_RE = re.compile(
    r"(?<![\w+])(?:\+\d{1,3}[\s.-]?)?(?:\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}(?!\w)"
)

# One worker: writes land in submission order without any locking.
_writer = ThreadPoolExecutor(max_workers=1, thread_name_prefix="audit")


def hash_input_context(user_input: str) -> str:
    return hashlib.sha256(user_input.strip().lower().encode("utf-8")).hexdigest()


def sanitize_input(user_input: str) -> str:
    """Drop internal context and obvious contact details, then truncate."""
    text = strip_context_markers(user_input)
    text = _EMAIL_RE.sub("[email]", text)
    text = _PHONE_RE.sub("[phone]", text)
    return text[:MAX_INPUT_CHARS]


def create_audit_event(
    recommendation_id: str,
    user_input: str,
    trust_metadata: TrustMetadata,
    policy: TrustPolicy,
    partner_id: str | None = None,
    *,
    adapter_used: str | None = None,
    policy_passed: bool = True,
) -> AuditEvent:
    return AuditEvent(
        recommendation_id=recommendation_id,
        input_context_hash=hash_input_context(user_input),
        sanitized_input=sanitize_input(user_input),
        trust_badge=trust_metadata.badge,
        confidence_level=trust_metadata.confidence_level,
        signals_summary=trust_metadata.signals,
        policy_applied=policy_identifier(policy, partner_id),
        policy=policy.model_dump(mode="json"),
        policy_passed=policy_passed,
        partner_id=partner_id,
        adapter_used=adapter_used,
        model_version=os.getenv("MODEL_VERSION", "engine-v1.0"),
        generated_at=datetime.now(timezone.utc).isoformat(),
    )


def _write(event: AuditEvent, sink: AuditSink) -> bool:
    try:
        sink.append(event)
        return True
    except Exception:
        logger.warning("Failed to store audit event %s", event.recommendation_id, exc_info=True)
        return False


def submit_audit_event(event: AuditEvent, sink: AuditSink | None = None) -> Future[bool]:
    """Queue ``event`` for a background write and return immediately.

    The returned future resolves to ``False`` on failure; it never raises.
    """
    return _writer.submit(_write, event, sink or get_default_sink())


def record_audit(
    recommendation_id: str,
    user_input: str,
    trust_metadata: TrustMetadata,
    policy: TrustPolicy,
    partner_id: str | None = None,
    *,
    sink: AuditSink | None = None,
    adapter_used: str | None = None,
    policy_passed: bool = True,
) -> Future[bool] | None:
    """Build and submit an audit event. Failures are logged, never raised."""
    try:
        event = create_audit_event(
            recommendation_id,
            user_input,
            trust_metadata,
            policy,
            partner_id,
            adapter_used=adapter_used,
            policy_passed=policy_passed,
        )
        return submit_audit_event(event, sink)
    except Exception:
        logger.warning("Audit logging failed for %s", recommendation_id, exc_info=True)
        return None
