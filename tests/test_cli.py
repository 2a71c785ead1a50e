"""Tests for the command line interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from mixed_build import __version__
from mixed_build.cli import app

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_partition(project: Path) -> None:
    src = project / "src"
    result = runner.invoke(
        app, ["partition", str(src / "A.scala"), str(src / "C.java"), str(src / "notes.txt"), "--order", "java-then-scala"]
    )

    assert result.exit_code == 0
    assert "Scala (1):" in result.stdout
    assert "Java (1):" in result.stdout
    assert "notes.txt" not in result.stdout


def test_partition_rejects_unknown_order(project: Path) -> None:
    result = runner.invoke(app, ["partition", str(project / "src" / "A.scala"), "--order", "sideways"])

    assert result.exit_code != 0


def test_compile_writes_analysis(project: Path) -> None:
    output = project / "target" / "classes"
    analysis = project / "target" / "analysis.json"

    result = runner.invoke(
        app,
        [
            "compile",
            str(project / "src" / "A.scala"),
            "--output",
            str(output),
            "--compiler",
            "stub_compiler:make_compiler",
            "--base",
            str(project),
            "--analysis",
            str(analysis),
        ],
    )

    assert result.exit_code == 0, result.output
    assert (output / "A.class").exists()
    payload = json.loads(analysis.read_text(encoding="utf-8"))
    ids = {node["id"] for node in payload["nodes"]}
    assert "source:src/A.scala" in ids
    assert "product:A.class" in ids
    assert "product:Other.class" in ids


def test_compile_failure_exit_code(project: Path) -> None:
    result = runner.invoke(
        app,
        [
            "compile",
            str(project / "src" / "A.scala"),
            "--output",
            str(project / "out"),
            "--compiler",
            "stub_compiler:StubCompiler",
            "--primary-option=-fail",
        ],
    )

    assert result.exit_code == 1


def test_compile_rejects_malformed_compiler_path(project: Path) -> None:
    result = runner.invoke(
        app,
        ["compile", str(project / "src" / "A.scala"), "--output", str(project / "out"), "--compiler", "nonsense"],
    )

    assert result.exit_code != 0


def test_doc(project: Path) -> None:
    output = project / "api"
    result = runner.invoke(
        app,
        ["doc", str(project / "src" / "A.scala"), "--output", str(output), "--compiler", "stub_compiler:StubCompiler"],
    )

    assert result.exit_code == 0, result.output
    assert (output / "index.html").exists()
