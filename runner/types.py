from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Check:
    """One GET request and the body it is expected to return."""

    name: str
    path: str
    expected_body: str


@dataclass
class CheckResult:
    """Outcome of running a single Check against a live server."""

    check: Check
    status_code: int
    content_type: str | None
    body: str
    elapsed_ms: float

    @property
    def ok(self) -> bool:
        return (
            self.status_code == 200
            and (self.content_type or "").startswith("text/html")
            and self.body == self.check.expected_body
        )


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., health never ready)."""


class HealthTimeoutError(SmokeError):
    """Raised when /health does not report ok before the deadline."""


class CheckError(SmokeError):
    """Raised when a check request fails after retries."""
