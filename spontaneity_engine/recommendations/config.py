from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..llm import config as _llm_config  # noqa: F401  (loads .env before reading env vars)


def _priority_from_env() -> tuple[str, ...]:
    raw = os.getenv("BACKEND_PRIORITY", "groq,openai")
    return tuple(p.strip().lower() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class EngineConfig:
    deadline_seconds: float = float(os.getenv("ENGINE_DEADLINE_SECONDS", "30"))
    backend_priority: tuple[str, ...] = field(default_factory=_priority_from_env)
    partner_id: str = os.getenv("AUDIT_PARTNER_ID", "demo_partner_id")


DEFAULT_ENGINE_CONFIG = EngineConfig()
