"""Dependency events reported by the primary compiler while it analyses sources.

Path fields hold absolute paths when the compiler emits an event and build-relative paths
once the event has passed through :mod:`mixed_build.analysis.relativize`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class BeginSource:
    source: Path


@dataclass(frozen=True, slots=True)
class EndSource:
    source: Path


@dataclass(frozen=True, slots=True)
class FoundSubclass:
    source: Path
    subclass_name: str
    superclass_name: str
    is_module: bool


@dataclass(frozen=True, slots=True)
class SuperclassNotFound:
    superclass_name: str


@dataclass(frozen=True, slots=True)
class SourceDependency:
    depends_on: Path
    source: Path


@dataclass(frozen=True, slots=True)
class JarDependency:
    jar: Path
    source: Path


@dataclass(frozen=True, slots=True)
class ClassDependency:
    """Raw dependency on a class file; reclassified before it reaches the analysis store."""

    class_file: Path
    source: Path


@dataclass(frozen=True, slots=True)
class ExternalClassDependency:
    """Dependency on a class file outside the output directory, e.g. a library class."""

    class_file: Path
    source: Path


@dataclass(frozen=True, slots=True)
class ProductDependency:
    """Dependency on a class file that this build writes to its output directory."""

    class_file: Path
    source: Path


@dataclass(frozen=True, slots=True)
class GeneratedClass:
    source: Path
    class_file: Path


@dataclass(frozen=True, slots=True)
class FoundApplication:
    source: Path
    class_name: str


@dataclass(frozen=True, slots=True)
class Api:
    source: Path
    descriptor: Any


DependencyEvent = Union[
    BeginSource,
    EndSource,
    FoundSubclass,
    SuperclassNotFound,
    SourceDependency,
    JarDependency,
    ClassDependency,
    ExternalClassDependency,
    ProductDependency,
    GeneratedClass,
    FoundApplication,
    Api,
]
