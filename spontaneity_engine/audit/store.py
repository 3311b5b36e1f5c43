from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Protocol

from ..llm import config as _llm_config  # noqa: F401  (loads .env before reading env vars)
from .models import AuditEvent


class AuditSink(Protocol):
    def append(self, event: AuditEvent) -> None:
        ...


class InMemoryAuditSink:
    """Process-local ledger. Events are only ever appended."""

    def __init__(self) -> None:
        self._events: list[AuditEvent] = []

    def append(self, event: AuditEvent) -> None:
        self._events.append(event)

    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()


class JsonlAuditSink:
    """Appends one JSON document per line to ``path``."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def append(self, event: AuditEvent) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(event.model_dump(mode="json"), sort_keys=True) + "\n")


_default_sink: AuditSink | None = None


def get_default_sink() -> AuditSink:
    """Return the process-wide sink: a JSONL file if ``AUDIT_LOG_PATH`` is set."""
    global _default_sink
    if _default_sink is None:
        path = os.getenv("AUDIT_LOG_PATH")
        _default_sink = JsonlAuditSink(path) if path else InMemoryAuditSink()
    return _default_sink
