"""Configuration primitives for the project."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class CompileOrder(Enum):
    """Order in which the primary and secondary compilers see their sources."""

    MIXED = "mixed"
    PRIMARY_THEN_SECONDARY = "primary-then-secondary"
    SECONDARY_THEN_PRIMARY = "secondary-then-primary"

    @classmethod
    def parse(cls, text: str) -> "CompileOrder":
        key = text.strip().lower().replace("_", "-")
        key = _ORDER_ALIASES.get(key, key)
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown compile order: {text}")


_ORDER_ALIASES = {
    "scala-then-java": CompileOrder.PRIMARY_THEN_SECONDARY.value,
    "java-then-scala": CompileOrder.SECONDARY_THEN_PRIMARY.value,
}


@dataclass(slots=True)
class CompilerSettings:
    """Settings shared by the orchestrator and both compiler invokers."""

    base_directory: Path = field(default_factory=lambda: Path.cwd().resolve())
    primary_extension: str = ".scala"
    secondary_extension: str = ".java"
    primary_language: str = "Scala"
    secondary_language: str = "Java"
    secondary_executable: str = "javac"
    max_errors: int = 100

    @classmethod
    def for_project(
        cls,
        root: Path,
        *,
        secondary_executable: str = "javac",
        max_errors: int = 100,
    ) -> "CompilerSettings":
        """Factory helper anchoring relativized dependency paths at ``root``."""

        return cls(
            base_directory=root.expanduser().resolve(),
            secondary_executable=secondary_executable,
            max_errors=max_errors,
        )
