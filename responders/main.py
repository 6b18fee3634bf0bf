"""FastAPI app factory: hosts the responders and owns their lifecycle."""
from __future__ import annotations

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request, Response

from responders.api import mount_responder, mounts_router
from responders.api import router as api_router
from responders.config import Settings, load_settings
from responders.domain.responders import FixedResponder, Initializable, PathKeyedResponder
from responders.logging_conf import get_logger, setup_logging

# Configure logging before anything else.
setup_logging()
logger = get_logger("app")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    # Fresh instances per app: each is initialized exactly once by its own lifespan.
    hello = FixedResponder(settings.greeting_message)
    simple = PathKeyedResponder(settings.fallback_body)

    responder_router = APIRouter()
    mounts = [
        mount_responder(responder_router, settings.hello_path, hello, name="hello"),
        mount_responder(responder_router, settings.simple_path, simple, name="simple"),
    ]

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        # Runs before the first request is accepted.
        for responder in (hello, simple):
            if isinstance(responder, Initializable):
                responder.initialize(settings.init_params)
        logger.info(
            "startup",
            extra={
                "event": "startup",
                "mounts": [m.path for m in mounts],
                "init_params": settings.init_params.names(),
            },
        )
        yield
        logger.info("shutdown", extra={"event": "shutdown"})

    app = FastAPI(
        title="Static Responders",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.responders = {"hello": hello, "simple": simple}

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """JSON request logging with a correlation id.

        - Propagates an incoming X-Request-ID, otherwise mints one
        - Logs start and end events with method/path/status/elapsed_ms
        - Echoes X-Request-ID on the response
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "path": request.url.path,
                    "method": request.method,
                    "request_id": request_id,
                },
            )
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    app.include_router(api_router)
    app.include_router(mounts_router(mounts))
    app.include_router(responder_router)

    return app


# ASGI entrypoint for uvicorn: `uvicorn responders.main:app --port 8000`
app = create_app()
