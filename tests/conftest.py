"""Shared fixtures: stub compilers that record how they were called."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List

import pytest

from mixed_build.compile.results import CompileFailed


@dataclass
class RecordingPrimaryCompiler:
    """Stands in for the primary compiler; optionally replays events and fails on demand."""

    calls: List[str]
    events: Callable[[Path], list] = lambda output_directory: []
    fail_with: str | None = None
    runtime_classpath: tuple[Path, ...] = ()
    received: list = field(default_factory=list)

    def compile(self, sources, classpath, output_directory, options, generate_executables, callback, max_errors, log):
        self.calls.append("primary")
        self.received.append(
            {
                "sources": set(sources),
                "classpath": set(classpath),
                "output_directory": output_directory,
                "options": list(options),
                "generate_executables": generate_executables,
                "callback": callback,
                "max_errors": max_errors,
            }
        )
        for event in self.events(output_directory):
            callback.record(event)
        if self.fail_with is not None:
            raise CompileFailed(list(options), self.fail_with)

    def doc(self, sources, classpath, output_directory, options, max_errors, log):
        self.calls.append("doc")
        self.received.append({"sources": set(sources), "output_directory": output_directory})
        if self.fail_with is not None:
            raise CompileFailed(list(options), self.fail_with)


@dataclass
class RecordingSecondaryInvoker:
    calls: List[str]
    fail_with: str | None = None
    received: list = field(default_factory=list)

    def invoke(self, sources, classpath, output_directory, options, log):
        self.calls.append("secondary")
        self.received.append({"sources": set(sources), "options": list(options)})
        if self.fail_with is not None:
            raise CompileFailed(list(options), self.fail_with)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path.resolve() / "project"
    (root / "src").mkdir(parents=True)
    for name in ("A.scala", "B.scala", "C.java", "D.java", "notes.txt"):
        (root / "src" / name).write_text("// " + name, encoding="utf-8")
    return root
