"""
Best-effort text utilities shared by the offline generator, the validator
and the audit logger.

Free-text requests are usually composed client-side as
``"Vibe: relaxed, Time: 2 hours, Location: Denver [Context: Role=Local, Mood=Tired]"``.
The bracketed block and the ``key=value`` fragments are internal context
and must never surface in user-visible text.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

_BLOCK_RE = re.compile(r"\[\s*(?:context|role|mood|group)\s*:[^\]]*(?:\]|$)", re.IGNORECASE)
_KEY_VALUE_RE = re.compile(r"\b(?:role|mood|group)\s*=\s*[^\s,\[\]]*", re.IGNORECASE)
_BRACKET_GROUP_RE = re.compile(r"\[[^\[\]]*(?:\]|$)")
_STRAY_BRACKETS_RE = re.compile(r"[\[\]]")
_EMPTY_SEPARATORS_RE = re.compile(r"\s*([,;:|])(?:\s*[,;:|])+")
_WHITESPACE_RE = re.compile(r"\s+")
_TRIM_CHARS = " \t-–—:;,|/."
_WORD_RE = re.compile(r"\w", re.UNICODE)

_LOCATION_LABEL_RE = re.compile(r"\blocation\b[:\s]+([^,\n]+)", re.IGNORECASE)
_LOCATION_IN_RE = re.compile(r"\bin\s+([A-Z][\w'-]*(?:\s+[A-Z][\w'-]*)*)")
_TIME_LABEL_RE = re.compile(r"\btime\b[:\s]+([^,\n]+)", re.IGNORECASE)
_TIME_AMOUNT_RE = re.compile(
    r"(\d+(?:\.\d+)?\s*(?:hours?|hrs?|minutes?|mins?))\b", re.IGNORECASE
)
_VIBE_LABEL_RE = re.compile(r"\bvibes?\b[:\s]+([^,\n]+)", re.IGNORECASE)


@dataclass(frozen=True)
class ExtractedContext:
    location: str | None = None
    time: str | None = None
    vibe: str | None = None


def contains_leakage(text: str | None) -> bool:
    if not text:
        return False
    return bool(_BLOCK_RE.search(text) or _KEY_VALUE_RE.search(text))


def count_marker_blocks(text: str) -> int:
    """Number of bracketed groups that carry context metadata."""
    return sum(1 for group in _BRACKET_GROUP_RE.findall(text) if contains_leakage(group))


def strip_context_markers(text: str | None) -> str:
    if not text:
        return ""
    cleaned = _BLOCK_RE.sub(" ", text)
    cleaned = _KEY_VALUE_RE.sub(" ", cleaned)
    cleaned = _STRAY_BRACKETS_RE.sub(" ", cleaned)
    cleaned = _EMPTY_SEPARATORS_RE.sub(r"\1", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip(_TRIM_CHARS)


def content_words(text: str) -> list[str]:
    return [w for w in text.split() if _WORD_RE.search(w)]


def _clean_fragment(value: str | None) -> str | None:
    if value is None:
        return None
    value = _WHITESPACE_RE.sub(" ", value).strip(_TRIM_CHARS)
    return value or None


def _first_match(text: str, *patterns: re.Pattern[str]) -> str | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            value = _clean_fragment(match.group(1))
            if value:
                return value
    return None


def extract_context(text: str | None) -> ExtractedContext:
    """Pull location / time / vibe fragments out of free text.

    Labelled fragments (``Location: ...``) win over loose patterns
    (``in Denver``, ``2 hours``). Anything not found is ``None``.
    """
    plain = strip_context_markers(text)
    if not plain:
        return ExtractedContext()
    return ExtractedContext(
        location=_first_match(plain, _LOCATION_LABEL_RE, _LOCATION_IN_RE),
        time=_first_match(plain, _TIME_LABEL_RE, _TIME_AMOUNT_RE),
        vibe=_first_match(plain, _VIBE_LABEL_RE),
    )
