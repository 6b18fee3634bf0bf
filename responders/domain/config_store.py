from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from pydantic import BaseModel, ConfigDict, StrictStr

__all__ = [
    "ConfigStore",
    "InitParams",
]


class ConfigStore(Protocol):
    """Read-only init-parameter lookup supplied by the host."""

    def get_init_parameter(self, name: str) -> str | None: ...


class InitParams(BaseModel):
    """Immutable name -> value init parameters.

    Keys and values must be strings; anything else fails validation.
    Lookup of an absent name returns None rather than raising.
    """

    model_config = ConfigDict(frozen=True)

    params: dict[StrictStr, StrictStr] = {}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str] | None = None) -> InitParams:
        # dict() copies, so later edits to the caller's mapping are not seen
        return cls(params=dict(mapping or {}))

    def get_init_parameter(self, name: str) -> str | None:
        return self.params.get(name)

    def names(self) -> list[str]:
        return sorted(self.params)

    def __contains__(self, name: object) -> bool:
        return name in self.params

    def __len__(self) -> int:
        return len(self.params)
