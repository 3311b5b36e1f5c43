"""
Single normalization step between a backend reply and validation.

Backends disagree on key names (``title`` vs ``activityName``, ``status``
vs ``activityRealtimeStatus`` ...). Every alias is resolved here and
nowhere else; downstream code only ever sees ``RecommendationCandidate``.
"""
from __future__ import annotations

from typing import Any

from ..llm.errors import MalformedResponseError
from .models import Activity, RealtimeStatus, RecommendationCandidate, Setting

TITLE_KEYS = ("title", "activityName", "activity_name", "name")
DESCRIPTION_KEYS = ("description", "recommendation", "summary")
DURATION_KEYS = ("duration", "activityDurationEstimate", "activity_duration_estimate", "time")
COST_KEYS = ("cost", "budget", "price", "cost_tier")
LOCATION_KEYS = ("location", "area", "venue", "address")
VIBE_KEYS = ("vibe", "mood_tag")
SETTING_KEYS = ("setting", "indoorOutdoor", "indoor_outdoor")
GROUP_KEYS = ("groupFriendly", "group_friendly")
STATUS_KEYS = (
    "status",
    "activityRealtimeStatus",
    "activity_realtime_status",
    "realtime_status",
    "realtimeStatus",
    "venue_status",
)
UNAVAILABLE_KEYS = ("unavailable", "isUnavailable", "is_unavailable", "isClosed", "is_closed", "closed")
AVAILABLE_KEYS = ("available", "isAvailable", "is_available")
ACTIVITY_KEYS = ("activities", "activity_list", "suggestions")

_OPEN_VALUES = {"open", "open now", "opened"}
_TRUE_STRINGS = {"true", "yes", "1", "y"}


def _first(raw: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v) for v in value if v is not None)
    text = str(value).strip()
    return text or None


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def normalize_status(value: Any) -> RealtimeStatus | None:
    text = _text(value)
    if text is None:
        return None
    folded = text.casefold()
    if folded == "closed":
        return RealtimeStatus.closed
    if folded in _OPEN_VALUES:
        return RealtimeStatus.open
    return RealtimeStatus.unknown


def _setting(value: Any) -> Setting | None:
    text = _text(value)
    if text is None:
        return None
    folded = text.casefold()
    if "indoor" in folded and "outdoor" in folded:
        return Setting.mixed
    for setting in Setting:
        if setting.value in folded:
            return setting
    return Setting.mixed if folded in {"both", "either"} else None


def _activities(value: Any) -> list[Activity]:
    if not isinstance(value, list):
        return []
    activities: list[Activity] = []
    for item in value:
        if isinstance(item, dict):
            activities.append(Activity(
                name=_text(_first(item, ("name", "title", "activity"))),
                type=_text(item.get("type")),
                duration=_text(item.get("duration")),
                description=_text(item.get("description")),
            ))
        elif _text(item):
            activities.append(Activity(name=_text(item)))
    return activities


def _unwrap(raw: dict[str, Any]) -> dict[str, Any]:
    """Use the first entry of a ``{"recommendations": [...]}`` style reply."""
    if _first(raw, TITLE_KEYS) is None:
        nested = raw.get("recommendations")
        if isinstance(nested, list) and nested and isinstance(nested[0], dict):
            return nested[0]
    return raw


def normalize_candidate(raw: Any) -> RecommendationCandidate:
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"expected a JSON object, got {type(raw).__name__}")
    raw = _unwrap(raw)

    unavailable = any(_flag(raw[k]) for k in UNAVAILABLE_KEYS if k in raw)
    unavailable = unavailable or any(
        raw[k] is not None and not _flag(raw[k]) for k in AVAILABLE_KEYS if k in raw
    )

    group = _first(raw, GROUP_KEYS)
    return RecommendationCandidate(
        recommendation_id=_text(raw.get("recommendation_id")),
        title=_text(_first(raw, TITLE_KEYS)) or "",
        description=_text(_first(raw, DESCRIPTION_KEYS)) or "",
        duration=_text(_first(raw, DURATION_KEYS)),
        cost=_text(_first(raw, COST_KEYS)),
        location=_text(_first(raw, LOCATION_KEYS)),
        vibe=_text(_first(raw, VIBE_KEYS)),
        setting=_setting(_first(raw, SETTING_KEYS)),
        group_friendly=None if group is None else _flag(group),
        status=normalize_status(_first(raw, STATUS_KEYS)),
        unavailable=unavailable,
        activities=_activities(_first(raw, ACTIVITY_KEYS)),
    )
