from __future__ import annotations

import json
from typing import Any

from .errors import MalformedResponseError

SYSTEM_PROMPT = (
    "You are a spontaneous activity recommendation engine. "
    "Given a user's vibe, available time and location, suggest ONE concrete, "
    "currently open activity they can do right now.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    "{"
    '"title": "<short activity name>", '
    '"description": "<two or three friendly sentences>", '
    '"duration": "<e.g. 2 hours>", '
    '"cost": "<Free | $ | $$ | $$$>", '
    '"location": "<area or venue>", '
    '"indoorOutdoor": "<indoor | outdoor | mixed>", '
    '"groupFriendly": true, '
    '"activityRealtimeStatus": "<open | closed | unknown>", '
    '"activities": [{"name": "...", "type": "...", "duration": "...", "description": "..."}]'
    "}\n"
    "Never copy bracketed context such as [Context: ...] or Role=/Mood=/Group= "
    "values into the title. Only recommend places that are open now."
)


MAX_PROMPT_INPUT_CHARS = 2000


def build_user_message(user_input: str) -> str:
    lines = [
        "## User Request",
        user_input[:MAX_PROMPT_INPUT_CHARS],
        "",
        "## Consider",
        "- Current time and context",
        "- User preferences (if available)",
        "- Weather and location context",
        "- Activity duration and intensity",
        "- Novelty and spontaneity",
    ]
    return "\n".join(lines)


def build_messages(user_input: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_message(user_input)},
    ]


def parse_json_object(content: str | None, backend: str) -> dict[str, Any]:
    """Decode a chat completion body, insisting on a top-level JSON object."""
    try:
        parsed = json.loads(content or "")
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"{backend} returned invalid JSON", backend=backend) from exc
    if not isinstance(parsed, dict):
        raise MalformedResponseError(f"{backend} returned a non-object JSON value", backend=backend)
    return parsed
