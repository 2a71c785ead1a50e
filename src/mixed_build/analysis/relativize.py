"""Rewrite absolute dependency events into build-relative, classified events."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Protocol, Sequence

from mixed_build.analysis.events import (
    Api,
    BeginSource,
    ClassDependency,
    DependencyEvent,
    EndSource,
    ExternalClassDependency,
    FoundApplication,
    FoundSubclass,
    GeneratedClass,
    JarDependency,
    ProductDependency,
    SourceDependency,
    SuperclassNotFound,
)

_SOURCE_ONLY = (
    BeginSource,
    EndSource,
    FoundSubclass,
    FoundApplication,
    Api,
    JarDependency,
    ExternalClassDependency,
    ProductDependency,
)


class AnalysisCallback(Protocol):
    """Consumer of dependency events, typically a persistent analysis store."""

    @property
    def superclass_names(self) -> Sequence[str]:
        ...

    def record(self, event: DependencyEvent) -> None:
        ...


def relativize_or_absolute(base: Path, path: Path) -> Path:
    """Return ``path`` relative to ``base`` when it lies at or under it, else ``path`` itself."""

    path = Path(path)
    if not path.is_absolute():
        return path
    try:
        return path.resolve().relative_to(Path(base).resolve())
    except ValueError:
        return path


def relativize_event(event: DependencyEvent, base_directory: Path, output_directory: Path) -> DependencyEvent:
    """
    Rewrite the path fields of ``event`` for the analysis store.

    Source paths become relative to ``base_directory`` and generated class files relative to
    ``output_directory``. A :class:`ClassDependency` is reclassified: class files under the
    output directory are products of this build, anything else is an external class.
    Paths that cannot be relativized are kept absolute. Jars are never relativized.
    """

    def src(path: Path) -> Path:
        return relativize_or_absolute(base_directory, path)

    if isinstance(event, ClassDependency):
        class_file = relativize_or_absolute(output_directory, event.class_file)
        if class_file.is_absolute():
            return ExternalClassDependency(event.class_file, src(event.source))
        return ProductDependency(class_file, src(event.source))
    if isinstance(event, _SOURCE_ONLY):
        return replace(event, source=src(event.source))
    if isinstance(event, SourceDependency):
        return SourceDependency(src(event.depends_on), src(event.source))
    if isinstance(event, GeneratedClass):
        return GeneratedClass(src(event.source), relativize_or_absolute(output_directory, event.class_file))
    if isinstance(event, SuperclassNotFound):
        return event
    raise TypeError(f"Unsupported dependency event: {event!r}")


@dataclass(frozen=True, slots=True)
class RelativizingSink:
    """Event sink handed to the primary compiler; forwards rewritten events to ``delegate``."""

    delegate: AnalysisCallback
    base_directory: Path
    output_directory: Path

    @property
    def superclass_names(self) -> Sequence[str]:
        return tuple(self.delegate.superclass_names)

    def record(self, event: DependencyEvent) -> None:
        self.delegate.record(relativize_event(event, self.base_directory, self.output_directory))
