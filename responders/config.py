from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .domain.config_store import InitParams

__all__ = [
    "ConfigError",
    "Settings",
    "get_init_params_from_env",
    "get_port_from_env",
    "load_settings",
]


class ConfigError(ValueError):
    """Raised when environment configuration cannot be parsed."""


# Routes the app serves itself; a responder mounted here would be shadowed.
RESERVED_PATHS = frozenset({"/health", "/_mounts"})


class Settings(BaseModel):
    """Everything the app factory needs to wire the responders."""

    model_config = ConfigDict(frozen=True)

    greeting_message: str = "Hello World"
    fallback_body: str = "default"
    init_params: InitParams = Field(default_factory=InitParams)
    hello_path: str = "/hello"
    simple_path: str = "/simple"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    app_version: str = "0.1.0"

    @field_validator("hello_path", "simple_path")
    @classmethod
    def _check_mount(cls, v: str) -> str:
        if not v.startswith("/") or v == "/" or v.endswith("/"):
            raise ValueError("mount path must start with '/' and not end with '/'")
        return v

    @model_validator(mode="after")
    def _check_mounts_disjoint(self) -> Settings:
        mounts = {"hello_path": self.hello_path, "simple_path": self.simple_path}
        for field, path in mounts.items():
            for reserved in RESERVED_PATHS:
                if _overlaps(path, reserved):
                    raise ValueError(f"{field} {path!r} collides with built-in route {reserved!r}")
        if _overlaps(self.hello_path, self.simple_path):
            raise ValueError(
                f"hello_path {self.hello_path!r} and simple_path {self.simple_path!r} overlap"
            )
        return self


def _overlaps(a: str, b: str) -> bool:
    """True if the paths are equal or one is mounted below the other."""
    return a == b or a.startswith(b + "/") or b.startswith(a + "/")


def _parse_params_json(raw: str, source: str) -> InitParams:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{source} is not valid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{source} must be a JSON object")
    try:
        return InitParams.from_mapping(data)
    except ValidationError as e:
        raise ConfigError(f"{source} values must all be strings") from e


def get_init_params_from_env() -> InitParams:
    """Read init parameters from INIT_PARAMS_FILE, else INIT_PARAMS, else empty."""
    path = os.getenv("INIT_PARAMS_FILE")
    if path:
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot read INIT_PARAMS_FILE {path}: {e}") from e
        return _parse_params_json(raw, "INIT_PARAMS_FILE")
    return _parse_params_json(os.getenv("INIT_PARAMS", "{}"), "INIT_PARAMS")


def get_port_from_env() -> int:
    """Return PORT from environment, defaulting to 8000."""
    raw = os.getenv("PORT", "8000")
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError("PORT must be an integer") from e


def load_settings() -> Settings:
    """Build Settings from the process environment."""
    try:
        return Settings(
            greeting_message=os.getenv("GREETING_MESSAGE", "Hello World"),
            fallback_body=os.getenv("FALLBACK_BODY", "default"),
            init_params=get_init_params_from_env(),
            hello_path=os.getenv("HELLO_PATH", "/hello"),
            simple_path=os.getenv("SIMPLE_PATH", "/simple"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=get_port_from_env(),
            app_version=os.getenv("APP_VERSION", "0.1.0"),
        )
    except ValidationError as e:
        raise ConfigError(str(e)) from e
