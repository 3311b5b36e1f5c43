from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from .models import RealtimeStatus, RecommendationCandidate
from .offline import generate_offline
from .text import contains_leakage, content_words, count_marker_blocks, strip_context_markers

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3
MIN_CONTENT_WORDS = 2
MAX_MARKER_BLOCKS = 1


class ValidationAction(str, Enum):
    accepted = "accepted"
    sanitized = "sanitized"
    replaced = "replaced"


@dataclass
class ValidationOutcome:
    candidate: RecommendationCandidate
    action: ValidationAction
    reasons: list[str] = field(default_factory=list)

    @property
    def replaced(self) -> bool:
        return self.action is ValidationAction.replaced


def sanitize_title(title: str) -> str | None:
    """Strip context markers from a title; ``None`` if nothing usable is left.

    A cleaned title is rejected when it is shorter than three characters,
    has fewer than two content words, or the original was dominated by more
    than one marker block.
    """
    if count_marker_blocks(title) > MAX_MARKER_BLOCKS:
        return None
    cleaned = strip_context_markers(title)
    if len(cleaned) < MIN_TITLE_LENGTH or len(content_words(cleaned)) < MIN_CONTENT_WORDS:
        return None
    return cleaned


def is_unavailable(candidate: RecommendationCandidate) -> bool:
    return candidate.status is RealtimeStatus.closed or candidate.unavailable


def validate_candidate(
    candidate: RecommendationCandidate,
    user_input: str,
    *,
    rng: random.Random | None = None,
) -> ValidationOutcome:
    """
    Check a candidate for context leakage and closed / unavailable status.

    - Leaked markers are stripped from the title (and description) when the
      remaining title is still meaningful.
    - An empty or unsalvageable title, or a closed / unavailable venue,
      discards the candidate for a fresh offline one with the same id.
    """
    reasons: list[str] = []
    title = candidate.title.strip()
    cleaned_title: str | None = title

    if not title:
        reasons.append("empty_title")
        cleaned_title = None
    elif contains_leakage(title):
        reasons.append("title_leakage")
        cleaned_title = sanitize_title(title)
        if cleaned_title is None:
            reasons.append("unsanitizable_title")
    if contains_leakage(candidate.description):
        reasons.append("description_leakage")

    if is_unavailable(candidate):
        reasons.append("closed" if candidate.status is RealtimeStatus.closed else "unavailable")

    if cleaned_title is None or is_unavailable(candidate):
        logger.warning(
            "Discarding candidate %s (%s), substituting offline result",
            candidate.recommendation_id, ", ".join(reasons),
        )
        replacement = generate_offline(
            user_input, rng=rng, recommendation_id=candidate.recommendation_id,
        )
        return ValidationOutcome(replacement, ValidationAction.replaced, reasons)

    if not reasons:
        return ValidationOutcome(candidate, ValidationAction.accepted)

    logger.info("Sanitized leaked context from candidate %s", candidate.recommendation_id)
    updates: dict = {"title": cleaned_title}
    if contains_leakage(candidate.description):
        updates["description"] = strip_context_markers(candidate.description)
    if candidate.status is None:
        updates["status"] = RealtimeStatus.open
    return ValidationOutcome(candidate.model_copy(update=updates), ValidationAction.sanitized, reasons)
