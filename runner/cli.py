from __future__ import annotations

import argparse
import os


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    return key, value


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the smoke runner."""
    parser = argparse.ArgumentParser(description="Static responders smoke runner")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:8000"))
    parser.add_argument("--hello-path", default=os.getenv("HELLO_PATH", "/hello"))
    parser.add_argument("--simple-path", default=os.getenv("SIMPLE_PATH", "/simple"))
    parser.add_argument("--greeting", default=os.getenv("GREETING_MESSAGE", "Hello World"))
    parser.add_argument("--fallback", default=os.getenv("FALLBACK_BODY", "default"))
    parser.add_argument(
        "--param",
        action="append",
        type=_key_value,
        default=[],
        dest="params",
        metavar="KEY=VALUE",
        help="expect GET <simple-path>/KEY to return VALUE (repeatable)",
    )
    parser.add_argument(
        "--missing-key",
        default=None,
        help="a key known to be absent; expect an empty body for it",
    )
    parser.add_argument("--timeout", type=float, default=20.0)
    return parser.parse_args(argv)
