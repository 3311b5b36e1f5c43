from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Callable

from ..llm.base import BackendAdapter
from ..llm.errors import FailureKind, classify_failure
from .models import RecommendationCandidate, RecommendationRequest
from .normalize import normalize_candidate
from .offline import generate_offline

logger = logging.getLogger(__name__)

OFFLINE_SOURCE = "offline"

# Attempts run on worker threads so a hung SDK call can be abandoned once
# the shared deadline passes. Abandoned calls finish on their own, bounded
# by the client timeout they were given.
_executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="backend")


@dataclass(frozen=True)
class AttemptFailure:
    backend: str
    kind: FailureKind
    message: str


@dataclass
class DispatchResult:
    candidate: RecommendationCandidate
    source: str
    failures: list[AttemptFailure] = field(default_factory=list)

    @property
    def is_offline(self) -> bool:
        return self.source == OFFLINE_SOURCE


def dispatch(
    request: RecommendationRequest,
    adapters: list[BackendAdapter],
    *,
    deadline_seconds: float = 30.0,
    rng: random.Random | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> DispatchResult:
    """
    Try each adapter in order under one shared deadline.

    The first adapter that returns a well-formed object wins. Quota /
    rate-limit failures and every other error move straight on to the next
    adapter (an adapter is never retried). When nothing is left, or the
    deadline has passed, the offline generator answers instead.

    Never raises.
    """
    deadline = clock() + deadline_seconds
    failures: list[AttemptFailure] = []

    for adapter in adapters:
        remaining = deadline - clock()
        if remaining <= 0:
            logger.warning("Dispatch deadline of %.1fs exhausted before %s", deadline_seconds, adapter.name)
            break

        future = _executor.submit(adapter.generate, request, remaining)
        try:
            raw = future.result(timeout=remaining)
            candidate = normalize_candidate(raw)
        except FutureTimeoutError:
            future.cancel()
            failures.append(AttemptFailure(adapter.name, FailureKind.timeout, f"no reply within {remaining:.1f}s"))
            logger.warning("Backend %s timed out", adapter.name)
            continue
        except Exception as exc:
            kind = classify_failure(exc)
            failures.append(AttemptFailure(adapter.name, kind, str(exc)))
            if kind is FailureKind.quota:
                logger.warning("Backend %s is over quota / rate limited, trying next", adapter.name)
            else:
                logger.warning("Backend %s failed (%s), trying next", adapter.name, kind.value, exc_info=True)
            continue

        logger.info("Recommendation served by %s", adapter.name)
        return DispatchResult(candidate=candidate, source=adapter.name, failures=failures)

    if adapters:
        logger.warning("All %d backend(s) failed, using offline generator", len(adapters))
    else:
        logger.info("No backends configured, using offline generator")
    return DispatchResult(
        candidate=generate_offline(request.user_input, rng=rng),
        source=OFFLINE_SOURCE,
        failures=failures,
    )
