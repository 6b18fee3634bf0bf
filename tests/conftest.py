from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from responders.config import Settings
from responders.domain.config_store import InitParams
from responders.main import create_app


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        greeting_message="Hello World",
        fallback_body="default",
        init_params=InitParams.from_mapping({"foo": "bar", "greeting": "<b>hi</b>"}),
    )


@pytest.fixture
def make_app() -> Callable[..., FastAPI]:
    def _make(**overrides) -> FastAPI:
        return create_app(Settings(**overrides))

    return _make


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    # Entering the context runs the lifespan, i.e. initialize() before serving.
    with TestClient(create_app(settings)) as c:
        yield c
