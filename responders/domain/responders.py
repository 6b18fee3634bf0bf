from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from ..logging_conf import get_logger
from .config_store import ConfigStore, InitParams
from .exchange import RequestContext

__all__ = [
    "CONTENT_TYPE",
    "STATUS_OK",
    "MISSING_VALUE",
    "Responder",
    "Initializable",
    "ResponderError",
    "AlreadyInitializedError",
    "FixedResponder",
    "PathKeyedResponder",
]

CONTENT_TYPE = "text/html"
STATUS_OK = 200
# Written when an init parameter is absent: nothing.
MISSING_VALUE = ""

logger = get_logger("domain.responders")


# ------------------------
# Errors
# ------------------------
class ResponderError(RuntimeError):
    """Base class for responder lifecycle errors.

    The `code` attribute gives the host a stable machine code to log.
    """

    code: str = "responder_error"


class AlreadyInitializedError(ResponderError):
    code = "already_initialized"


# ------------------------
# Capabilities
# ------------------------
@runtime_checkable
class Responder(Protocol):
    def handle(self, request: RequestContext) -> None: ...


@runtime_checkable
class Initializable(Protocol):
    def initialize(self, config: ConfigStore | Mapping[str, str]) -> None: ...


def _start_response(request: RequestContext) -> None:
    request.content_type = CONTENT_TYPE
    request.status_code = STATUS_OK


# ------------------------
# Responders
# ------------------------
class FixedResponder:
    """Writes the same message for every request."""

    __slots__ = ("_message",)

    def __init__(self, message: str) -> None:
        if not isinstance(message, str):
            raise TypeError("message must be a string")
        self._message = message

    @property
    def message(self) -> str:
        return self._message

    def handle(self, request: RequestContext) -> None:
        _start_response(request)
        request.write(self._message)

    def __repr__(self) -> str:
        return f"FixedResponder(message={self._message!r})"


class PathKeyedResponder:
    """Writes an init parameter named by the path suffix, or a fallback body.

    `initialize` must run once before the first `handle`; the host lifecycle
    guarantees that ordering. A second `initialize` raises
    AlreadyInitializedError and keeps the first configuration.

    Branches of `handle`:
      - path_info like "/name" (length > 1) and initialized -> value of "name",
        or MISSING_VALUE if there is no such parameter
      - anything else -> fallback body
    """

    def __init__(self, fallback_body: str) -> None:
        if not isinstance(fallback_body, str):
            raise TypeError("fallback_body must be a string")
        self._fallback_body = fallback_body
        self._config: ConfigStore | None = None
        self._initialized = False
        self._init_lock = threading.Lock()

    @property
    def fallback_body(self) -> str:
        return self._fallback_body

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self, config: ConfigStore | Mapping[str, str]) -> None:
        if isinstance(config, Mapping):
            config = InitParams.from_mapping(config)
        elif not callable(getattr(config, "get_init_parameter", None)):
            raise TypeError(
                f"config must be a mapping or a ConfigStore, got {type(config).__name__}"
            )
        with self._init_lock:
            if self._initialized:
                raise AlreadyInitializedError("PathKeyedResponder is already initialized")
            self._config = config
            self._initialized = True
        logger.info(
            "responder.initialized",
            extra={
                "event": "responder_initialized",
                "responder": type(self).__name__,
                "param_count": len(config) if hasattr(config, "__len__") else None,
            },
        )

    def _lookup_key(self, path_info: str | None) -> str | None:
        if path_info is not None and len(path_info) > 1 and path_info[0] == "/":
            return path_info[1:]
        return None

    def handle(self, request: RequestContext) -> None:
        _start_response(request)

        config = self._config
        key = self._lookup_key(request.path_info)
        if key is not None and config is not None:
            value = config.get_init_parameter(key)
            logger.debug(
                "responder.lookup",
                extra={"event": "responder_lookup", "key": key, "hit": value is not None},
            )
            request.write(MISSING_VALUE if value is None else value)
        else:
            request.write(self._fallback_body)

    def __repr__(self) -> str:
        return (
            f"PathKeyedResponder(fallback_body={self._fallback_body!r}, "
            f"initialized={self.is_initialized})"
        )
