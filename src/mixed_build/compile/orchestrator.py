"""Drive the primary and secondary compilers over a mixed set of sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Protocol, Sequence

from mixed_build.config import CompileOrder, CompilerSettings
from mixed_build.analysis.relativize import AnalysisCallback
from mixed_build.compile.arguments import CompilerArguments
from mixed_build.compile.invokers import PrimaryCompiler, PrimaryInvoker, SecondaryInvoker
from mixed_build.compile.results import CompileFailed, CompileResult
from mixed_build.compile.sources import SourceSet, partition_sources, source_set

LOGGER = logging.getLogger(__name__)


class CompileAction(Protocol):
    """What the orchestrator does with each partition, plus its status messages."""

    nothing_to_do_message: str
    success_message: str

    def start_message(self, label: str) -> str:
        ...

    def compile_primary(
        self,
        sources: SourceSet,
        classpath: SourceSet,
        output_directory: Path,
        options: Sequence[str],
        log: logging.Logger,
    ) -> None:
        ...

    def compile_secondary(
        self,
        sources: SourceSet,
        classpath: SourceSet,
        output_directory: Path,
        options: Sequence[str],
        log: logging.Logger,
    ) -> None:
        ...


@dataclass(slots=True)
class ObjectCompile:
    """Compile both languages into class files."""

    primary: PrimaryInvoker
    secondary: SecondaryInvoker = field(default_factory=SecondaryInvoker)
    nothing_to_do_message: str = "Nothing to compile."
    success_message: str = "Compilation successful."

    def start_message(self, label: str) -> str:
        return f"Compiling {label} sources..."

    def compile_primary(self, sources, classpath, output_directory, options, log) -> None:
        self.primary.invoke(sources, classpath, output_directory, options, log)

    def compile_secondary(self, sources, classpath, output_directory, options, log) -> None:
        self.secondary.invoke(sources, classpath, output_directory, options, log)


@dataclass(slots=True)
class DocGenerate:
    """Generate API documentation from primary language sources."""

    compiler: PrimaryCompiler
    max_errors: int = 100
    nothing_to_do_message: str = "No sources specified."
    success_message: str = "API documentation generation successful."

    def start_message(self, label: str) -> str:
        return f"Generating API documentation for {label} sources..."

    def compile_primary(self, sources, classpath, output_directory, options, log) -> None:
        self.compiler.doc(sources, classpath, output_directory, options, self.max_errors, log)

    def compile_secondary(self, sources, classpath, output_directory, options, log) -> None:
        return None


@dataclass(slots=True)
class CompileOrchestrator:
    action: CompileAction
    settings: CompilerSettings = field(default_factory=CompilerSettings)

    def compile(
        self,
        label: str,
        sources: Iterable[Path],
        classpath: Iterable[Path],
        output_directory: Path,
        primary_options: Sequence[str],
        secondary_options: Sequence[str] = (),
        order: CompileOrder = CompileOrder.MIXED,
        log: logging.Logger = LOGGER,
    ) -> CompileResult:
        """
        Compile ``sources`` into ``output_directory``.

        Both compilers run to completion one after the other. Only
        :attr:`CompileOrder.SECONDARY_THEN_PRIMARY` runs the secondary compiler first; the other
        orders start with the primary compiler. A failure in the first step means the second
        step never runs. Failures are returned, never raised.
        """

        settings = self.settings
        sources = source_set(sources)
        classpath = source_set(classpath)
        output_directory = Path(output_directory)
        secondary_sources, primary_sources = partition_sources(
            sources,
            order,
            primary_extension=settings.primary_extension,
            secondary_extension=settings.secondary_extension,
        )

        def step(language: str, partition: SourceSet, act: Callable[..., None], options: Sequence[str]):
            def run() -> None:
                if not partition:
                    log.debug("No %s sources.", language)
                    return
                act(partition, classpath, output_directory, options, log)

            return run

        primary_step = step(settings.primary_language, primary_sources, self.action.compile_primary, primary_options)
        secondary_step = step(
            settings.secondary_language, secondary_sources, self.action.compile_secondary, secondary_options
        )

        log.info(self.action.start_message(label))
        if not sources:
            log.info(self.action.nothing_to_do_message)
            return CompileResult.success()

        try:
            output_directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            message = f"Could not create directory {output_directory}: {exc}"
            log.error(message)
            return CompileResult.failure(message)

        # MIXED takes the primary-first branch as well.
        if order is CompileOrder.SECONDARY_THEN_PRIMARY:
            first, second = secondary_step, primary_step
        else:
            first, second = primary_step, secondary_step

        try:
            first()
            second()
        except CompileFailed as exc:
            log.error("%s", exc)
            return CompileResult.failure(str(exc))
        except Exception as exc:
            log.exception("Unexpected error while processing %s sources", label)
            return CompileResult.failure(f"{type(exc).__name__}: {exc}")

        log.info(self.action.success_message)
        return CompileResult.success()


def object_compiler(
    compiler: PrimaryCompiler,
    callback: AnalysisCallback,
    settings: CompilerSettings | None = None,
) -> CompileOrchestrator:
    """Wire an orchestrator that compiles both languages and records dependencies in ``callback``."""

    settings = settings or CompilerSettings()
    action = ObjectCompile(
        primary=PrimaryInvoker(compiler, callback, settings.base_directory, settings.max_errors),
        secondary=SecondaryInvoker(
            CompilerArguments(tuple(getattr(compiler, "runtime_classpath", ()))),
            settings.secondary_executable,
        ),
    )
    return CompileOrchestrator(action, settings)


def doc_generator(compiler: PrimaryCompiler, settings: CompilerSettings | None = None) -> CompileOrchestrator:
    settings = settings or CompilerSettings()
    return CompileOrchestrator(DocGenerate(compiler, settings.max_errors), settings)
