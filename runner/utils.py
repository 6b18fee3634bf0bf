from __future__ import annotations

from urllib.parse import quote

from runner.types import Check, CheckResult


def build_checks(
    *,
    hello_path: str,
    simple_path: str,
    greeting: str,
    fallback: str,
    params: list[tuple[str, str]] | None = None,
    missing_key: str | None = None,
) -> list[Check]:
    """Expand CLI expectations into the list of requests to make."""
    checks = [
        Check(name="hello", path=hello_path, expected_body=greeting),
        Check(name="hello.repeat", path=hello_path, expected_body=greeting),
        Check(name="simple.root", path=simple_path, expected_body=fallback),
        Check(name="simple.slash", path=simple_path + "/", expected_body=fallback),
    ]
    for key, value in params or []:
        checks.append(
            Check(name=f"simple.param.{key}", path=f"{simple_path}/{quote(key)}", expected_body=value)
        )
    if missing_key:
        checks.append(
            Check(
                name="simple.missing",
                path=f"{simple_path}/{quote(missing_key)}",
                expected_body="",
            )
        )
    return checks


def summarize(results: list[CheckResult]) -> tuple[dict, int]:
    """Compute summary dict and an exit code from check results."""
    failures = [
        {
            "check": r.check.name,
            "path": r.check.path,
            "status_code": r.status_code,
            "content_type": r.content_type,
            "expected": r.check.expected_body,
            "actual": r.body,
        }
        for r in results
        if not r.ok
    ]
    timings = [r.elapsed_ms for r in results]
    summary = {
        "component": "runner",
        "event": "summary",
        "checks": len(results),
        "passed": len(results) - len(failures),
        "failed": len(failures),
        "max_ms": max(timings) if timings else 0.0,
        "failures": failures,
    }
    exit_code = 0 if results and not failures else 1
    return summary, exit_code
