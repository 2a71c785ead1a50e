"""Core package for mixed-language compilation and dependency bookkeeping."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mixed-build")
except PackageNotFoundError:  # pragma: no cover - package metadata absent in dev mode
    __version__ = "0.0.0"

__all__ = ["__version__"]
