#!/usr/bin/env python3
"""End-to-end smoke run against a live responders service.

Steps:
- wait for server health
- GET the hello mount (twice) and the simple mount with and without keys
- compare status, content type and body with expectations
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys

import httpx

from responders.logging_conf import get_logger, setup_logging
from runner.cli import parse_args
from runner.client import run_checks, wait_for_health
from runner.utils import build_checks, summarize

setup_logging()
logger = get_logger("runner")


async def run_smoke(
    *,
    base_url: str,
    hello_path: str,
    simple_path: str,
    greeting: str,
    fallback: str,
    params: list[tuple[str, str]] | None = None,
    missing_key: str | None = None,
    timeout_s: float = 20.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    await wait_for_health(base_url, timeout_s=timeout_s, transport=transport)
    checks = build_checks(
        hello_path=hello_path,
        simple_path=simple_path,
        greeting=greeting,
        fallback=fallback,
        params=params,
        missing_key=missing_key,
    )
    results = await run_checks(base_url, checks, transport=transport)
    summary, exit_code = summarize(results)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    code = asyncio.run(
        run_smoke(
            base_url=args.base_url,
            hello_path=args.hello_path,
            simple_path=args.simple_path,
            greeting=args.greeting,
            fallback=args.fallback,
            params=args.params,
            missing_key=args.missing_key,
            timeout_s=args.timeout,
        )
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
