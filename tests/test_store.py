"""Tests for the in-memory dependency analysis store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mixed_build.analysis.events import (
    Api,
    BeginSource,
    ClassDependency,
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
from mixed_build.analysis.store import DependencyAnalysis, export_analysis

A = Path("src/A.scala")
B = Path("src/B.scala")


def _recorded() -> DependencyAnalysis:
    analysis = DependencyAnalysis(superclass_names=("scala.App",))
    for event in (
        BeginSource(A),
        SourceDependency(B, A),
        JarDependency(Path("/opt/lib/dep.jar"), A),
        ExternalClassDependency(Path("/opt/lib/Util.class"), A),
        ProductDependency(Path("b/B.class"), A),
        GeneratedClass(A, Path("a/A.class")),
        FoundSubclass(A, "a.A", "scala.App", True),
        FoundApplication(A, "a.A"),
        Api(A, {"defs": ["main"]}),
        SuperclassNotFound("x.Missing"),
        EndSource(A),
        BeginSource(B),
    ):
        analysis.record(event)
    return analysis


def test_dependencies_by_kind() -> None:
    analysis = _recorded()

    assert analysis.sources() == {A, B}
    assert analysis.dependencies_of(A, kind="source") == {B}
    assert analysis.dependencies_of(A, kind="jar") == {Path("/opt/lib/dep.jar")}
    assert analysis.dependencies_of(A, kind="external") == {Path("/opt/lib/Util.class")}
    assert analysis.dependencies_of(A, kind="product") == {Path("b/B.class")}
    assert Path("a/A.class") not in analysis.dependencies_of(A)
    assert analysis.products_of(A) == {Path("a/A.class")}


def test_metadata_events() -> None:
    analysis = _recorded()

    assert analysis.applications() == {A: ["a.A"]}
    assert analysis.apis[A] == {"defs": ["main"]}
    assert analysis.missing_superclasses == {"x.Missing"}
    assert analysis.unfinished_sources() == {B}


def test_unclassified_class_dependency_rejected() -> None:
    with pytest.raises(TypeError):
        DependencyAnalysis().record(ClassDependency(Path("/tmp/X.class"), A))


def test_unknown_source_has_no_dependencies() -> None:
    assert DependencyAnalysis().dependencies_of(Path("nowhere.scala")) == set()


def test_export_analysis(tmp_path: Path) -> None:
    analysis = _recorded()
    destination = tmp_path / "reports" / "analysis.json"

    export_analysis(analysis, destination)

    with destination.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    assert payload["node_count"] == analysis.graph.number_of_nodes()
    assert payload["edge_count"] == analysis.graph.number_of_edges()
    assert payload["missing_superclasses"] == ["x.Missing"]
    assert {edge["kind"] for edge in payload["edges"]} == {"source", "jar", "external", "product", "generated"}
