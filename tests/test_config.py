from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from responders.config import ConfigError, Settings, get_init_params_from_env, load_settings
from responders.domain.config_store import InitParams

_ENV = (
    "GREETING_MESSAGE",
    "FALLBACK_BODY",
    "INIT_PARAMS",
    "INIT_PARAMS_FILE",
    "HELLO_PATH",
    "SIMPLE_PATH",
    "HOST",
    "PORT",
    "APP_VERSION",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = load_settings()
    assert s.greeting_message == "Hello World"
    assert s.fallback_body == "default"
    assert len(s.init_params) == 0
    assert (s.hello_path, s.simple_path) == ("/hello", "/simple")
    assert s.port == 8000


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GREETING_MESSAGE", "Hi there")
    monkeypatch.setenv("FALLBACK_BODY", "nothing here")
    monkeypatch.setenv("INIT_PARAMS", json.dumps({"foo": "bar"}))
    monkeypatch.setenv("SIMPLE_PATH", "/config")
    monkeypatch.setenv("PORT", "9090")
    s = load_settings()
    assert s.greeting_message == "Hi there"
    assert s.fallback_body == "nothing here"
    assert s.init_params.get_init_parameter("foo") == "bar"
    assert s.simple_path == "/config"
    assert s.port == 9090


def test_init_params_file_overrides_inline(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    f = tmp_path / "params.json"
    f.write_text(json.dumps({"from": "file"}), encoding="utf-8")
    monkeypatch.setenv("INIT_PARAMS", json.dumps({"from": "env"}))
    monkeypatch.setenv("INIT_PARAMS_FILE", str(f))
    assert get_init_params_from_env().get_init_parameter("from") == "file"


def test_missing_init_params_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("INIT_PARAMS_FILE", str(tmp_path / "nope.json"))
    with pytest.raises(ConfigError, match="INIT_PARAMS_FILE"):
        get_init_params_from_env()


@pytest.mark.parametrize(
    "raw, match",
    [
        ("{not json", "not valid JSON"),
        ("[1, 2]", "JSON object"),
        ('{"n": 1}', "strings"),
    ],
)
def test_bad_init_params(monkeypatch: pytest.MonkeyPatch, raw: str, match: str) -> None:
    monkeypatch.setenv("INIT_PARAMS", raw)
    with pytest.raises(ConfigError, match=match):
        load_settings()


def test_bad_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ConfigError):
        load_settings()


@pytest.mark.parametrize("path", ["hello", "/", "/hello/"])
def test_bad_mount_path(monkeypatch: pytest.MonkeyPatch, path: str) -> None:
    monkeypatch.setenv("HELLO_PATH", path)
    with pytest.raises(ConfigError):
        load_settings()


def test_init_params_reject_non_strings() -> None:
    with pytest.raises(ValidationError):
        InitParams.from_mapping({"n": 1})  # type: ignore[dict-item]


def test_init_params_lookup() -> None:
    p = InitParams.from_mapping({"b": "2", "a": "1"})
    assert p.get_init_parameter("a") == "1"
    assert p.get_init_parameter("zzz") is None
    assert "b" in p
    assert p.names() == ["a", "b"]


def test_settings_are_frozen() -> None:
    s = Settings()
    with pytest.raises(ValidationError):
        s.greeting_message = "changed"  # type: ignore[misc]


@pytest.mark.parametrize(
    "hello, simple",
    [
        ("/health", "/simple"),
        ("/hello", "/_mounts"),
        ("/health/extra", "/simple"),
        ("/same", "/same"),
        ("/simple/hello", "/simple"),
        ("/hello", "/hello/nested"),
    ],
)
def test_colliding_mount_paths(monkeypatch: pytest.MonkeyPatch, hello: str, simple: str) -> None:
    monkeypatch.setenv("HELLO_PATH", hello)
    monkeypatch.setenv("SIMPLE_PATH", simple)
    with pytest.raises(ConfigError):
        load_settings()


def test_prefix_sharing_mounts_are_not_nested() -> None:
    s = Settings(hello_path="/a", simple_path="/ab")
    assert (s.hello_path, s.simple_path) == ("/a", "/ab")


def test_settings_model_rejects_reserved_path() -> None:
    with pytest.raises(ValidationError, match="built-in route"):
        Settings(hello_path="/health")
