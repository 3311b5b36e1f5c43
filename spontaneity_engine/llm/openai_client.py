from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from openai import OpenAI

from .config import OPENAI_CONFIG, LLMConfig
from .prompts import build_messages, parse_json_object

if TYPE_CHECKING:
    from ..recommendations.models import RecommendationRequest

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    def __init__(self, config: LLMConfig = OPENAI_CONFIG) -> None:
        self.config = config
        self.name = config.name

    def generate(self, request: RecommendationRequest, timeout: float) -> dict[str, Any]:
        # max_retries=0: a 429 must fall through to the next backend, not sleep here.
        client = OpenAI(api_key=self.config.api_key, timeout=timeout, max_retries=0)
        response = client.chat.completions.create(
            model=self.config.model,
            messages=build_messages(request.user_input),
            max_tokens=request.config.max_tokens,
            temperature=request.config.temperature,
            top_p=request.config.top_p,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content
        logger.debug("OpenAI replied with %d characters", len(content or ""))
        return parse_json_object(content, self.name)
