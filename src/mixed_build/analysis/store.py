"""In-memory analysis store that records relativized dependency events as a graph."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

import networkx as nx

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

LOGGER = logging.getLogger(__name__)

SOURCE = "source"
JAR = "jar"
EXTERNAL = "external"
PRODUCT = "product"
CLASS = "class"


def _node_id(kind: str, value: Path | str) -> str:
    if isinstance(value, Path):
        value = value.as_posix()
    return f"{kind}:{value}"


@dataclass
class DependencyAnalysis:
    """
    Consumer of the relativized event stream.

    Every source, jar, class file and product becomes a node tagged with its ``kind``; each
    dependency or generated class becomes an edge from the source that reported it.
    """

    superclass_names: Sequence[str] = ()
    graph: nx.MultiDiGraph = field(default_factory=nx.MultiDiGraph)
    missing_superclasses: set[str] = field(default_factory=set)
    apis: dict[Path, Any] = field(default_factory=dict)
    _open_sources: set[Path] = field(default_factory=set, repr=False)

    def _source(self, path: Path) -> str:
        node = _node_id(SOURCE, path)
        if node not in self.graph:
            self.graph.add_node(node, kind=SOURCE, path=path.as_posix())
        return node

    def _target(self, kind: str, path: Path) -> str:
        node = _node_id(kind, path)
        if node not in self.graph:
            self.graph.add_node(node, kind=kind, path=path.as_posix())
        return node

    def record(self, event: DependencyEvent) -> None:
        if isinstance(event, BeginSource):
            self._source(event.source)
            self._open_sources.add(event.source)
        elif isinstance(event, EndSource):
            self._source(event.source)
            self._open_sources.discard(event.source)
        elif isinstance(event, SourceDependency):
            self.graph.add_edge(self._source(event.source), self._source(event.depends_on), kind=SOURCE)
        elif isinstance(event, JarDependency):
            self.graph.add_edge(self._source(event.source), self._target(JAR, event.jar), kind=JAR)
        elif isinstance(event, ExternalClassDependency):
            self.graph.add_edge(self._source(event.source), self._target(EXTERNAL, event.class_file), kind=EXTERNAL)
        elif isinstance(event, ProductDependency):
            self.graph.add_edge(self._source(event.source), self._target(PRODUCT, event.class_file), kind=PRODUCT)
        elif isinstance(event, GeneratedClass):
            self.graph.add_edge(self._source(event.source), self._target(PRODUCT, event.class_file), kind="generated")
        elif isinstance(event, FoundSubclass):
            node = self._source(event.source)
            self.graph.nodes[node].setdefault("subclasses", []).append(
                {
                    "subclass": event.subclass_name,
                    "superclass": event.superclass_name,
                    "is_module": event.is_module,
                }
            )
        elif isinstance(event, FoundApplication):
            node = self._source(event.source)
            self.graph.nodes[node].setdefault("applications", []).append(event.class_name)
        elif isinstance(event, Api):
            self._source(event.source)
            self.apis[event.source] = event.descriptor
        elif isinstance(event, SuperclassNotFound):
            LOGGER.debug("Superclass not found: %s", event.superclass_name)
            self.missing_superclasses.add(event.superclass_name)
        elif isinstance(event, ClassDependency):
            raise TypeError(f"Class dependency was not classified before recording: {event!r}")
        else:
            raise TypeError(f"Unsupported dependency event: {event!r}")

    def sources(self) -> set[Path]:
        return {Path(data["path"]) for _, data in self.graph.nodes(data=True) if data["kind"] == SOURCE}

    def dependencies_of(self, source: Path, kind: str | None = None) -> set[Path]:
        """Return what ``source`` depends on, optionally restricted to one edge ``kind``."""

        node = _node_id(SOURCE, source)
        if node not in self.graph:
            return set()
        found: set[Path] = set()
        for _, target, data in self.graph.out_edges(node, data=True):
            if data["kind"] == "generated":
                continue
            if kind is None or data["kind"] == kind:
                found.add(Path(self.graph.nodes[target]["path"]))
        return found

    def products_of(self, source: Path) -> set[Path]:
        node = _node_id(SOURCE, source)
        if node not in self.graph:
            return set()
        return {
            Path(self.graph.nodes[target]["path"])
            for _, target, data in self.graph.out_edges(node, data=True)
            if data["kind"] == "generated"
        }

    def applications(self) -> dict[Path, list[str]]:
        return {
            Path(data["path"]): list(data["applications"])
            for _, data in self.graph.nodes(data=True)
            if data.get("applications")
        }

    def unfinished_sources(self) -> set[Path]:
        return set(self._open_sources)


def export_analysis(analysis: DependencyAnalysis, destination: Path) -> None:
    """Persist the recorded analysis graph to a JSON summary."""

    graph = analysis.graph
    destination = Path(destination)
    payload = {
        "node_count": graph.number_of_nodes(),
        "edge_count": graph.number_of_edges(),
        "missing_superclasses": sorted(analysis.missing_superclasses),
        "nodes": [],
        "edges": [],
    }

    for node, data in graph.nodes(data=True):
        payload["nodes"].append({"id": node, **data})

    for source, target, data in graph.edges(data=True):
        payload["edges"].append({"source": source, "target": target, "kind": data["kind"]})

    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


__all__ = ["DependencyAnalysis", "export_analysis"]
