from __future__ import annotations

from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .llm.registry import build_adapters
from .recommendations.config import DEFAULT_ENGINE_CONFIG
from .recommendations.models import (
    ErrorResponse,
    RecommendationRequest,
    RecommendationResponse,
    dump_result,
)
from .recommendations.pipeline import get_recommendation
from .scenarios.presets import SCENARIOS, ScenarioPreset, ScenarioSection, ordered_sections
from .scenarios.prioritization import UserHistory, prioritize_categories


app = FastAPI(title="Spontaneity Engine API", version="1.0.0")


def _describe_validation_error(exc: RequestValidationError) -> str:
    for error in exc.errors():
        loc = error.get("loc", ())
        if "userInput" in loc or "user_input" in loc or loc in (("body",), ()):
            return "Invalid request. userInput is required and must be a non-empty string."
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:]) or "body"
    return f"Invalid request. {field}: {first.get('msg', 'invalid value')}"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed input is the only error a caller ever sees.
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=_describe_validation_error(exc)).model_dump(),
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    adapters = build_adapters(DEFAULT_ENGINE_CONFIG.backend_priority)
    return {"status": "ok", "backends": [a.name for a in adapters]}


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> JSONResponse:
    result = get_recommendation(body)
    return JSONResponse(status_code=200, content={"success": True, "result": dump_result(result)})


# ── Scenario endpoints ───────────────────────────────────────────────────


class PrioritizeRequest(BaseModel):
    history: UserHistory | None = None
    location: str | None = None
    now: datetime | None = None


class PrioritizeResponse(BaseModel):
    categories: list[str]
    sections: list[ScenarioSection]


@app.get("/scenarios", response_model=list[ScenarioPreset])
def scenarios() -> list[ScenarioPreset]:
    return list(SCENARIOS)


@app.post("/scenarios/prioritize", response_model=PrioritizeResponse)
def prioritize(body: PrioritizeRequest) -> PrioritizeResponse:
    categories = prioritize_categories(body.history, body.now, body.location)
    return PrioritizeResponse(
        categories=[c.value for c in categories],
        sections=ordered_sections(categories),
    )
