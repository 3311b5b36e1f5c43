from __future__ import annotations

import logging
from typing import Callable

from .base import BackendAdapter
from .config import BACKEND_CONFIGS, LLMConfig
from .groq_client import GroqAdapter
from .openai_client import OpenAIAdapter

logger = logging.getLogger(__name__)

ADAPTER_FACTORIES: dict[str, Callable[[LLMConfig], BackendAdapter]] = {
    "groq": GroqAdapter,
    "openai": OpenAIAdapter,
}


def build_adapters(
    priority: tuple[str, ...] | list[str],
    configs: dict[str, LLMConfig] | None = None,
) -> list[BackendAdapter]:
    """Instantiate every credentialed backend, in priority order.

    Missing credentials are not an error: an empty list simply routes every
    request through the offline generator.
    """
    configs = BACKEND_CONFIGS if configs is None else configs
    adapters: list[BackendAdapter] = []
    for name in priority:
        config = configs.get(name)
        factory = ADAPTER_FACTORIES.get(name)
        if config is None or factory is None:
            logger.warning("Unknown backend %r in priority list, skipping", name)
            continue
        if not config.enabled or not config.has_credentials:
            continue
        adapters.append(factory(config))
    return adapters


def select_adapters(
    adapters: list[BackendAdapter],
    hints: list[str] | None,
) -> list[BackendAdapter]:
    """Restrict to hinted backends (in hint order); fall back to all of them."""
    if not hints:
        return list(adapters)
    by_name = {a.name: a for a in adapters}
    selected = [by_name[h] for h in dict.fromkeys(h.strip().lower() for h in hints) if h in by_name]
    return selected or list(adapters)
