"""Static responders: a fixed greeting and a path-keyed init-parameter lookup.

Exposes __version__ from installed package metadata when available.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("static-responders")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
