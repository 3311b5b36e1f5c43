from __future__ import annotations

import re
from enum import Enum


class FailureKind(str, Enum):
    quota = "quota"
    timeout = "timeout"
    malformed = "malformed"
    error = "error"


class BackendError(Exception):
    """Raised by an adapter when its backend did not yield a usable reply."""

    quota_exceeded = False

    def __init__(self, message: str, *, backend: str | None = None) -> None:
        super().__init__(message)
        self.backend = backend


class QuotaExceededError(BackendError):
    quota_exceeded = True


class MalformedResponseError(BackendError):
    pass


_TOO_MANY_REQUESTS = 429
_QUOTA_RE = re.compile(
    r"quota|rate[\s_-]?limit|too many requests|resource[\s_-]?exhausted",
    re.IGNORECASE,
)


def _status_code(exc: BaseException) -> int | None:
    code = getattr(exc, "status_code", None)
    if code is None:
        response = getattr(exc, "response", None)
        code = getattr(response, "status_code", None)
    try:
        return int(code) if code is not None else None
    except (TypeError, ValueError):
        return None


def is_quota_error(exc: BaseException) -> bool:
    """Detect a quota-exceeded / rate-limit failure from any backend SDK.

    Checks, in order: a structured flag on the exception, the HTTP status
    (429, directly or on ``exc.response``) and finally the message text.
    """
    if getattr(exc, "quota_exceeded", False) or getattr(exc, "is_quota_error", False):
        return True
    if _status_code(exc) == _TOO_MANY_REQUESTS:
        return True
    return bool(_QUOTA_RE.search(str(exc)))


def classify_failure(exc: BaseException) -> FailureKind:
    if is_quota_error(exc):
        return FailureKind.quota
    if isinstance(exc, MalformedResponseError):
        return FailureKind.malformed
    if isinstance(exc, TimeoutError) or "timed out" in str(exc).lower():
        return FailureKind.timeout
    return FailureKind.error
