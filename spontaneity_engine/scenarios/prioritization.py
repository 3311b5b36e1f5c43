"""
Context-aware ranking of the three motivation categories.

Each category gets a score from three independent signals:

* **time of day** - weekend evenings and holidays favour socialising,
  Sunday / early mornings favour recharging, weekday daytime favours
  discovery;
* **history** - frequency share plus a 72h half-life recency term, with a
  bump for explicitly preferred categories and relaxed moods;
* **location** - a coarse keyword heuristic that only nudges the order.

Categories are sorted by score, ties broken by the fixed declaration order,
so the result is always a full permutation and identical inputs always give
identical output.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .presets import CATEGORY_ORDER, MotivationCategory

_R = MotivationCategory.recharge_and_unwind
_C = MotivationCategory.connect_and_socialize
_D = MotivationCategory.discover_and_create

RECENCY_HALF_LIFE_HOURS = 72.0
FREQUENCY_WEIGHT = 0.5
RECENCY_WEIGHT = 0.5
PREFERRED_BONUS = 0.3
RELAXED_MOOD_BONUS = 0.5

# (month, day)
PUBLIC_HOLIDAYS = {(12, 24), (12, 25), (12, 26), (1, 1), (7, 4)}

LOCATION_KEYWORDS: dict[MotivationCategory, tuple[str, ...]] = {
    _R: ("park", "beach", "lake", "trail", "garden", "river", "forest", "outdoor", "spa"),
    _C: ("downtown", "bar", "pub", "club", "campus", "plaza", "center", "centre", "nightlife"),
    _D: ("museum", "gallery", "market", "studio", "old town", "historic", "library", "art"),
}
_LOCATION_PATTERNS: dict[MotivationCategory, re.Pattern[str]] = {
    category: re.compile(r"\b(?:" + "|".join(map(re.escape, words)) + r")s?\b")
    for category, words in LOCATION_KEYWORDS.items()
}
_NO_PLACE = {"", "home", "nearby", "here", "anywhere", "your area"}
NAMED_PLACE_BONUS = 0.1
LOCATION_BONUS = 0.2


class UserHistory(BaseModel):
    category_counts: dict[MotivationCategory, int] = Field(default_factory=dict)
    last_engaged: dict[MotivationCategory, datetime] = Field(default_factory=dict)
    preferred_categories: list[MotivationCategory] = Field(default_factory=list)
    mood_history: list[str] = Field(default_factory=list)
    recent_scenarios: list[str] = Field(default_factory=list)


def _time_affinity(now: datetime) -> dict[MotivationCategory, float]:
    scores = dict.fromkeys(CATEGORY_ORDER, 0.0)
    weekday, hour = now.weekday(), now.hour  # Monday == 0
    evening = 17 <= hour < 23

    if (evening and weekday in (4, 5)) or (now.month, now.day) in PUBLIC_HOLIDAYS:
        scores[_C] += 1.0
    elif evening:
        scores[_C] += 0.6

    if weekday == 6 and 6 <= hour < 12:
        scores[_R] += 1.0
    elif 5 <= hour < 9:
        scores[_R] += 0.6
    elif hour >= 23 or hour < 5:
        scores[_R] += 0.4

    if weekday < 5 and 9 <= hour < 17:
        scores[_D] += 0.4
    return scores


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _history_affinity(history: UserHistory, now: datetime) -> dict[MotivationCategory, float]:
    scores = dict.fromkeys(CATEGORY_ORDER, 0.0)

    total = sum(max(0, n) for n in history.category_counts.values())
    if total:
        for category, count in history.category_counts.items():
            scores[category] += FREQUENCY_WEIGHT * max(0, count) / total

    for category, when in history.last_engaged.items():
        hours = max(0.0, (_as_aware(now) - _as_aware(when)).total_seconds() / 3600)
        scores[category] += RECENCY_WEIGHT * 0.5 ** (hours / RECENCY_HALF_LIFE_HOURS)

    for category in set(history.preferred_categories):
        scores[category] += PREFERRED_BONUS

    if any("relax" in mood.lower() for mood in history.mood_history):
        scores[_R] += RELAXED_MOOD_BONUS
    return scores


def _location_affinity(location: str | None) -> dict[MotivationCategory, float]:
    scores = dict.fromkeys(CATEGORY_ORDER, 0.0)
    place = (location or "").strip().lower()
    if place in _NO_PLACE:
        return scores

    matched = False
    for category, pattern in _LOCATION_PATTERNS.items():
        if pattern.search(place):
            scores[category] += LOCATION_BONUS
            matched = True
    if not matched:
        scores[_D] += NAMED_PLACE_BONUS
    return scores


def score_categories(
    user_history: UserHistory | None = None,
    now: datetime | None = None,
    location: str | None = None,
) -> dict[MotivationCategory, float]:
    now = now or datetime.now()
    parts = [_time_affinity(now), _location_affinity(location)]
    if user_history is not None:
        parts.append(_history_affinity(user_history, now))
    return {c: round(sum(p[c] for p in parts), 6) for c in CATEGORY_ORDER}


def prioritize_categories(
    user_history: UserHistory | None = None,
    now: datetime | None = None,
    location: str | None = None,
) -> list[MotivationCategory]:
    """Return all three categories, most relevant first."""
    scores = score_categories(user_history, now, location)
    return sorted(CATEGORY_ORDER, key=lambda c: (-scores[c], CATEGORY_ORDER.index(c)))
