"""Source set construction and partitioning by language."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from mixed_build.config import CompileOrder

SourceSet = frozenset[Path]


def source_set(paths: Iterable[str | Path]) -> SourceSet:
    """Canonicalize ``paths`` into a set of unique absolute paths."""

    return frozenset(Path(path).expanduser().resolve() for path in paths)


def _with_extension(sources: Iterable[Path], extension: str) -> SourceSet:
    return frozenset(path for path in sources if path.name.endswith(extension))


def partition_sources(
    sources: Iterable[Path],
    order: CompileOrder,
    *,
    primary_extension: str = ".scala",
    secondary_extension: str = ".java",
) -> tuple[SourceSet, SourceSet]:
    """
    Split ``sources`` into ``(secondary, primary)`` partitions.

    Under :attr:`CompileOrder.MIXED` the primary compiler receives every source, secondary
    language files included, so it can read their declarations. Otherwise each compiler only
    gets files with its own extension and anything else is compiled by neither.
    """

    sources = frozenset(sources)
    secondary = _with_extension(sources, secondary_extension)
    if order is CompileOrder.MIXED:
        primary = sources
    else:
        primary = _with_extension(sources, primary_extension)
    return secondary, primary
