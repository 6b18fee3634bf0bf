from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable

import httpx

from responders.logging_conf import get_logger
from runner.types import Check, CheckError, CheckResult, HealthTimeoutError

logger = get_logger("runner.client")


async def wait_for_health(
    base_url: str,
    timeout_s: float = 20.0,
    *,
    poll_interval_s: float = 0.25,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Ping /health until it returns ok or raise after a timeout.

    Connection errors and non-JSON bodies count as "not ready yet".
    """
    deadline = time.monotonic() + timeout_s
    async with httpx.AsyncClient(base_url=base_url, timeout=5.0, transport=transport) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/health")
                if r.status_code == 200 and r.json().get("ok") is True:
                    logger.info("health.ok", extra={"event": "health_ok"})
                    return
            except (httpx.HTTPError, ValueError) as e:
                logger.debug("health.wait", extra={"event": "health_wait", "error": str(e)})
            await asyncio.sleep(poll_interval_s)
    raise HealthTimeoutError("Health check did not pass within timeout")


async def run_check(client: httpx.AsyncClient, check: Check, *, retries: int = 3) -> CheckResult:
    """GET the check's path and capture status, content type and body, with retry.

    Only transport errors are retried; any HTTP status is a result, not a failure.
    """
    last_err: Exception | None = None
    for attempt in range(retries):
        start = time.perf_counter()
        try:
            r = await client.get(check.path)
        except httpx.TransportError as e:
            last_err = e
            logger.warning(
                "check.retry",
                extra={
                    "event": "check_retry",
                    "check": check.name,
                    "attempt": attempt + 1,
                    "error": str(e),
                },
            )
            continue
        return CheckResult(
            check=check,
            status_code=r.status_code,
            content_type=r.headers.get("content-type"),
            body=r.text,
            elapsed_ms=round((time.perf_counter() - start) * 1000.0, 2),
        )
    raise CheckError(f"{check.name}: {last_err}")


async def run_checks(
    base_url: str,
    checks: Iterable[Check],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[CheckResult]:
    """Run checks concurrently and return their results in input order."""
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0, transport=transport) as client:
        return list(await asyncio.gather(*(run_check(client, c) for c in checks)))
