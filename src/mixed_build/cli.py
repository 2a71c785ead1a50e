"""Command line entry points for the project."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import List, Optional

import typer

from mixed_build import __version__
from mixed_build.analysis.store import DependencyAnalysis, export_analysis
from mixed_build.compile.invokers import PrimaryCompiler
from mixed_build.compile.orchestrator import doc_generator, object_compiler
from mixed_build.compile.sources import partition_sources, source_set
from mixed_build.config import CompileOrder, CompilerSettings


def _parse_order(value: str) -> CompileOrder:
    try:
        return CompileOrder.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _resolve_inputs(inputs: List[Path]) -> List[Path]:
    resolved: List[Path] = []
    for item in inputs:
        candidate = item.expanduser().resolve()
        if not candidate.exists():
            raise typer.BadParameter(f"Input not found: {candidate}")
        resolved.append(candidate)
    return resolved


def _load_compiler(target_path: str) -> PrimaryCompiler:
    """Import ``module:attribute`` and return the compiler it names, calling it if it is a factory."""

    module_name, _, attribute = target_path.partition(":")
    if not module_name or not attribute:
        raise typer.BadParameter(f"Expected module:attribute, got {target_path!r}")
    try:
        target = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise typer.BadParameter(f"Cannot load compiler {target_path}: {exc}") from exc
    if isinstance(target, type) or not hasattr(target, "compile"):
        target = target()
    return target


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="[%(levelname)s] %(message)s")


app = typer.Typer(help="Compile mixed primary/secondary language sources and record their dependencies.")

ORDER_HELP = "mixed, primary-then-secondary or secondary-then-primary."


def _show_version(display_version: bool) -> None:
    if display_version:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def version(
    display_version: bool = typer.Option(
        False, "--version", "-V", is_eager=True, callback=_show_version, help="Show version and exit."
    ),
) -> None:
    """Compile mixed primary/secondary language sources and record their dependencies."""


@app.command("partition")
def partition(
    sources: List[Path] = typer.Argument(..., help="Source files to classify."),
    order: str = typer.Option("mixed", help=ORDER_HELP),
) -> None:
    """Show which compiler would receive each source."""

    settings = CompilerSettings()
    secondary, primary = partition_sources(
        source_set(sources),
        _parse_order(order),
        primary_extension=settings.primary_extension,
        secondary_extension=settings.secondary_extension,
    )
    for language, partition_set in ((settings.primary_language, primary), (settings.secondary_language, secondary)):
        typer.secho(f"{language} ({len(partition_set)}):", fg=typer.colors.GREEN)
        for path in sorted(partition_set):
            typer.echo(f"  {path}")


@app.command("compile")
def compile_command(
    sources: List[Path] = typer.Argument(..., help="Source files to compile."),
    output: Path = typer.Option(..., "--output", "-d", help="Directory receiving class files."),
    compiler: str = typer.Option(..., help="Primary compiler as module:attribute."),
    classpath: List[Path] = typer.Option([], "--classpath", help="Classpath entries."),
    primary_option: List[str] = typer.Option([], help="Option passed to the primary compiler."),
    secondary_option: List[str] = typer.Option([], help="Option passed to the secondary compiler."),
    order: str = typer.Option("mixed", help=ORDER_HELP),
    base: Path = typer.Option(Path("."), help="Directory that recorded source paths are relative to."),
    javac: str = typer.Option("javac", help="Secondary compiler executable."),
    max_errors: int = typer.Option(100, help="Maximum number of errors reported by the primary compiler."),
    analysis: Optional[Path] = typer.Option(None, help="Write recorded dependencies to this JSON file."),
    label: str = typer.Option("main", help="Label used in progress messages."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Compile sources with both compilers and record dependency information."""

    _configure_logging(verbose)
    settings = CompilerSettings.for_project(base, secondary_executable=javac, max_errors=max_errors)
    recorder = DependencyAnalysis()
    orchestrator = object_compiler(_load_compiler(compiler), recorder, settings)

    result = orchestrator.compile(
        label,
        _resolve_inputs(sources),
        classpath,
        output.expanduser(),
        primary_option,
        secondary_option,
        _parse_order(order),
    )

    if analysis is not None:
        export_analysis(recorder, analysis.expanduser())
        typer.echo(f"Analysis written: {analysis}")

    if not result.succeeded:
        typer.secho(result.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("doc")
def doc_command(
    sources: List[Path] = typer.Argument(..., help="Source files to document."),
    output: Path = typer.Option(..., "--output", "-d", help="Directory receiving the documentation."),
    compiler: str = typer.Option(..., help="Primary compiler as module:attribute."),
    classpath: List[Path] = typer.Option([], "--classpath", help="Classpath entries."),
    primary_option: List[str] = typer.Option([], help="Option passed to the documentation tool."),
    max_errors: int = typer.Option(100, help="Maximum number of errors reported."),
    label: str = typer.Option("main", help="Label used in progress messages."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Generate API documentation for primary language sources."""

    _configure_logging(verbose)
    settings = CompilerSettings(max_errors=max_errors)
    result = doc_generator(_load_compiler(compiler), settings).compile(
        label,
        _resolve_inputs(sources),
        classpath,
        output.expanduser(),
        primary_option,
    )
    if not result.succeeded:
        typer.secho(result.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
