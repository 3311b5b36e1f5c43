from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_PLACEHOLDER_PREFIX = "your_"


@dataclass(frozen=True)
class LLMConfig:
    name: str
    api_key: str = ""
    model: str = ""
    enabled: bool = True

    @property
    def has_credentials(self) -> bool:
        """True when a real key is configured (template placeholders don't count)."""
        key = self.api_key.strip()
        return bool(key) and not key.startswith(_PLACEHOLDER_PREFIX)


GROQ_CONFIG = LLMConfig(
    name="groq",
    api_key=os.getenv("GROQ_API_KEY", ""),
    model=os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile"),
)

OPENAI_CONFIG = LLMConfig(
    name="openai",
    api_key=os.getenv("OPENAI_API_KEY", ""),
    model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
)

BACKEND_CONFIGS: dict[str, LLMConfig] = {
    GROQ_CONFIG.name: GROQ_CONFIG,
    OPENAI_CONFIG.name: OPENAI_CONFIG,
}
