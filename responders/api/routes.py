from __future__ import annotations

from fastapi import APIRouter, Response

from ..domain.exchange import Exchange
from ..domain.responders import Responder
from ..logging_conf import get_logger
from .models import HealthResponse, MountInfo, MountsResponse

router = APIRouter()
logger = get_logger("api")


@router.get("/health", response_model=HealthResponse, summary="Liveness/readiness check")
async def health() -> HealthResponse:
    return HealthResponse()


def _to_response(exchange: Exchange) -> Response:
    return Response(
        content=exchange.body_bytes(),
        status_code=exchange.status_code,
        media_type=exchange.content_type,
    )


def mount_responder(router: APIRouter, prefix: str, responder: Responder, *, name: str) -> MountInfo:
    """Register GET routes serving `responder` at `prefix` and everything below it.

    `prefix` itself gives path_info None; `prefix/rest` gives path_info "/rest"
    (so `prefix/` gives "/").
    """

    def serve(path_info: str | None) -> Response:
        exchange = Exchange(path_info)
        responder.handle(exchange)
        logger.debug(
            "responder.handled",
            extra={
                "event": "responder_handled",
                "responder": name,
                "path_info": path_info,
                "status_code": exchange.status_code,
                "bytes": len(exchange.body_bytes()),
            },
        )
        return _to_response(exchange)

    # Sync endpoints run in the threadpool, one call per concurrent request.
    def at_mount() -> Response:
        return serve(None)

    def below_mount(rest: str) -> Response:
        return serve("/" + rest)

    router.add_api_route(
        prefix,
        at_mount,
        methods=["GET"],
        name=f"{name}_root",
        summary=f"Serve {name} at its mount point",
        response_class=Response,
    )
    router.add_api_route(
        prefix + "/{rest:path}",
        below_mount,
        methods=["GET"],
        name=f"{name}_path",
        summary=f"Serve {name} below its mount point",
        response_class=Response,
    )
    return MountInfo(name=name, path=prefix, responder=type(responder).__name__)


def mounts_router(mounts: list[MountInfo]) -> APIRouter:
    """Router listing what is mounted, for operators and the smoke runner."""
    r = APIRouter()

    @r.get("/_mounts", response_model=MountsResponse, summary="List mounted responders")
    async def list_mounts() -> MountsResponse:
        return MountsResponse(items=list(mounts))

    return r
