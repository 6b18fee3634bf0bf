from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = [
    "RequestContext",
    "Exchange",
]


@runtime_checkable
class RequestContext(Protocol):
    """What a responder needs from one HTTP exchange.

    The host owns parsing and transport; responders only read `path_info` and
    write status, content type and body.
    """

    path_info: str | None
    status_code: int
    content_type: str | None

    def write(self, text: str) -> None: ...


class Exchange:
    """In-memory request/response pair handed to a responder.

    Body text is buffered and encoded as UTF-8 when the host sends it.
    Multiple writes are allowed and concatenated; `writes` counts them.
    """

    def __init__(self, path_info: str | None = None) -> None:
        self.path_info = path_info
        self.status_code = 200
        self.content_type: str | None = None
        self.writes = 0
        self._chunks: list[str] = []

    def write(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"body must be str, got {type(text).__name__}")
        self._chunks.append(text)
        self.writes += 1

    @property
    def body(self) -> str:
        return "".join(self._chunks)

    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8")

    def __repr__(self) -> str:
        return (
            f"Exchange(path_info={self.path_info!r}, status_code={self.status_code}, "
            f"content_type={self.content_type!r}, writes={self.writes})"
        )
