from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..recommendations.models import RecommendationRequest


class BackendAdapter(Protocol):
    """Anything that can turn a request into a raw recommendation object.

    Adapters raise on failure; the dispatcher decides what happens next.
    """

    name: str

    def generate(self, request: RecommendationRequest, timeout: float) -> dict[str, Any]:
        ...
