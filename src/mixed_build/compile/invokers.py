"""Thin adapters around the primary and secondary compilers."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence

from mixed_build.analysis.relativize import AnalysisCallback, RelativizingSink
from mixed_build.compile.arguments import CompilerArguments
from mixed_build.compile.results import CompileFailed, ProcessResult
from mixed_build.compile.sources import SourceSet

LOGGER = logging.getLogger(__name__)

# Exit status reported when the compiler executable cannot be launched at all.
LAUNCH_FAILURE = 127


class PrimaryCompiler(Protocol):
    """Programmatic entry point of the primary language compiler."""

    runtime_classpath: Sequence[Path]

    def compile(
        self,
        sources: SourceSet,
        classpath: SourceSet,
        output_directory: Path,
        options: Sequence[str],
        generate_executables: bool,
        callback: AnalysisCallback,
        max_errors: int,
        log: logging.Logger,
    ) -> None:
        ...

    def doc(
        self,
        sources: SourceSet,
        classpath: SourceSet,
        output_directory: Path,
        options: Sequence[str],
        max_errors: int,
        log: logging.Logger,
    ) -> None:
        ...


@dataclass(slots=True)
class PrimaryInvoker:
    compiler: PrimaryCompiler
    callback: AnalysisCallback
    base_directory: Path
    max_errors: int = 100

    def invoke(
        self,
        sources: SourceSet,
        classpath: SourceSet,
        output_directory: Path,
        options: Sequence[str],
        log: logging.Logger = LOGGER,
    ) -> None:
        """Compile ``sources``, routing dependency events through a relativizing sink."""

        sink = RelativizingSink(self.callback, self.base_directory, output_directory)
        self.compiler.compile(
            sources,
            classpath,
            output_directory,
            options,
            True,
            sink,
            self.max_errors,
            log,
        )


@dataclass(slots=True)
class SecondaryInvoker:
    """Runs the secondary compiler as an external process."""

    arguments: CompilerArguments = field(default_factory=CompilerArguments)
    executable: str = "javac"

    def run(
        self,
        sources: SourceSet,
        classpath: SourceSet,
        output_directory: Path,
        options: Sequence[str],
        log: logging.Logger = LOGGER,
    ) -> ProcessResult:
        arguments = self.arguments(sources, classpath, output_directory, options, True)
        log.debug("Calling '%s' with arguments:\n\t%s", self.executable, "\n\t".join(arguments))
        try:
            completed = subprocess.run(
                [self.executable, *arguments], check=False, text=True, errors="replace", capture_output=True
            )
        except OSError as exc:
            return ProcessResult(tuple(arguments), LAUNCH_FAILURE, "", f"Could not run {self.executable}: {exc}")
        return ProcessResult(tuple(arguments), completed.returncode, completed.stdout or "", completed.stderr or "")

    def invoke(
        self,
        sources: SourceSet,
        classpath: SourceSet,
        output_directory: Path,
        options: Sequence[str],
        log: logging.Logger = LOGGER,
    ) -> None:
        result = self.run(sources, classpath, output_directory, options, log)
        for line in result.stdout.splitlines():
            log.info(line)
        for line in result.stderr.splitlines():
            log.error(line)
        if not result.succeeded:
            if result.returncode == LAUNCH_FAILURE and result.stderr:
                message = result.stderr
            else:
                message = f"{self.executable} returned nonzero exit code"
                if result.diagnostics:
                    message = f"{message}\n{result.diagnostics}"
            raise CompileFailed(result.arguments, message)
