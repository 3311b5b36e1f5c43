import random
import time

from spontaneity_engine.llm.errors import FailureKind, QuotaExceededError
from spontaneity_engine.recommendations.dispatcher import OFFLINE_SOURCE, dispatch
from spontaneity_engine.recommendations.models import RealtimeStatus, RecommendationRequest

REQUEST = RecommendationRequest(userInput="Vibe: relaxed, Time: 2 hours, Location: Denver")


class StubAdapter:
    def __init__(self, name, reply=None, error=None, delay=0.0):
        self.name = name
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = 0

    def generate(self, request, timeout):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


class RateLimitError(Exception):
    status_code = 429


def test_quota_error_falls_through_to_next_adapter():
    first = StubAdapter("groq", error=QuotaExceededError("quota exceeded"))
    second = StubAdapter("openai", reply={"title": "Sunset Kayak Tour", "status": "Open"})

    result = dispatch(REQUEST, [first, second])

    assert result.source == "openai"
    assert result.candidate.title == "Sunset Kayak Tour"
    assert result.candidate.status is RealtimeStatus.open
    assert first.calls == 1  # never retried
    assert [f.kind for f in result.failures] == [FailureKind.quota]


def test_http_429_is_treated_as_quota():
    first = StubAdapter("groq", error=RateLimitError("slow down"))
    second = StubAdapter("openai", reply={"title": "Museum Late Night"})

    result = dispatch(REQUEST, [first, second])

    assert result.source == "openai"
    assert result.failures[0].kind is FailureKind.quota


def test_first_success_stops_dispatch():
    first = StubAdapter("groq", reply={"title": "Rooftop Stargazing"})
    second = StubAdapter("openai", reply={"title": "Never Used"})

    result = dispatch(REQUEST, [first, second])

    assert result.source == "groq"
    assert second.calls == 0


def test_all_failures_fall_back_to_offline():
    adapters = [
        StubAdapter("groq", error=ConnectionError("network down")),
        StubAdapter("openai", reply=["not", "an", "object"]),
    ]

    result = dispatch(REQUEST, adapters, rng=random.Random(0))

    assert result.source == OFFLINE_SOURCE
    assert result.is_offline
    assert result.candidate.title
    assert [f.kind for f in result.failures] == [FailureKind.error, FailureKind.malformed]


def test_no_adapters_uses_offline():
    result = dispatch(REQUEST, [])
    assert result.is_offline
    assert result.failures == []
    assert result.candidate.status is RealtimeStatus.open


def test_shared_deadline_stops_further_attempts():
    slow = StubAdapter("groq", reply={"title": "Too Late"}, delay=0.5)
    never = StubAdapter("openai", reply={"title": "Unreached"})

    started = time.monotonic()
    result = dispatch(REQUEST, [slow, never], deadline_seconds=0.1)

    assert time.monotonic() - started < 0.4
    assert result.is_offline
    assert result.failures[0].kind is FailureKind.timeout
    assert never.calls == 0


def test_remaining_budget_is_passed_to_adapter():
    seen = {}

    class Recording:
        name = "groq"

        def generate(self, request, timeout):
            seen["timeout"] = timeout
            return {"title": "Quick Coffee Crawl"}

    dispatch(REQUEST, [Recording()], deadline_seconds=12.0)

    assert 0 < seen["timeout"] <= 12.0
