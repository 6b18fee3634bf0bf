from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness payload."""
    ok: bool = True


class MountInfo(BaseModel):
    """One responder mounted on the app."""
    name: str
    path: str
    responder: str


class MountsResponse(BaseModel):
    """Responders mounted on this app, in registration order."""
    items: list[MountInfo]
