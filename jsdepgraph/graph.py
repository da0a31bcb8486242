"""Graph model and the two-pass builder that adds its edges."""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

import networkx as nx

from .extractor import FUNCTION, Extraction
from .resolver import PathResolver

# Edge types.
IMPORT = "import"
CALL = "call"

EDGE_TYPES = (IMPORT, CALL)

# Diagnostic kinds.
DANGLING_IMPORT = "dangling-import"
SELF_IMPORT = "self-import"
EXPORT_COLLISION = "export-collision"


@dataclass
class Node:
    """One analyzed source file."""

    id: str
    imports: List[str] = field(default_factory=list)
    resolved_imports: List[str] = field(default_factory=list)
    exports: Dict[str, str] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return os.path.basename(self.id)

    @classmethod
    def from_extraction(cls, node_id: str, extraction: Extraction) -> "Node":
        return cls(
            id=node_id,
            imports=list(extraction.imports),
            exports=dict(extraction.exports),
            calls=list(extraction.calls),
        )


@dataclass
class Edge:
    source: str
    target: str
    type: str
    label: Optional[str] = None


@dataclass
class Diagnostic:
    """A resolution ambiguity the builder accepted instead of failing."""

    kind: str
    path: str
    detail: str


class DependencyGraph:
    """Files keyed by path plus an append-only list of edges.

    Nodes keep insertion order so every export is deterministic for a fixed
    input order. Edges are never deduplicated; their multiplicity is what
    the most-imported ranking counts.
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.edges: List[Edge] = []
        self.diagnostics: List[Diagnostic] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise ValueError(f"Duplicate node: {node.id}")
        self.nodes[node.id] = node
        return node

    def add_edge(self, source: str, target: str, edge_type: str, label: Optional[str] = None) -> Edge:
        if edge_type not in EDGE_TYPES:
            raise ValueError(f"Unknown edge type: {edge_type}")
        if source == target:
            raise ValueError(f"Self-loop on {source} is not allowed")
        if source not in self.nodes:
            raise KeyError(source)
        edge = Edge(source, target, edge_type, label)
        self.edges.append(edge)
        return edge

    def edges_of_type(self, edge_type: str) -> Iterator[Edge]:
        return (edge for edge in self.edges if edge.type == edge_type)

    def to_networkx(self, edge_type: Optional[str] = None) -> nx.MultiDiGraph:
        """Return a networkx view of the graph, optionally limited to one edge type.

        Dangling import targets appear as attribute-less nodes; every analyzed
        file carries ``label``, ``exports`` and ``calls`` attributes.
        """
        g = nx.MultiDiGraph()
        for node in self.nodes.values():
            g.add_node(node.id, label=node.label, exports=dict(node.exports), calls=list(node.calls))
        for edge in self.edges:
            if edge_type is None or edge.type == edge_type:
                g.add_edge(edge.source, edge.target, type=edge.type, label=edge.label)
        return g


class GraphBuilder:
    """Adds import and call edges once every node is in the graph.

    Args:
        resolver: Resolves raw import specifiers to node ids.
        logger: Sink for resolution diagnostics.
    """

    def __init__(self, resolver: PathResolver, logger: Optional[logging.Logger] = None):
        self.resolver = resolver
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def _note(self, graph: DependencyGraph, kind: str, path: str, detail: str):
        graph.diagnostics.append(Diagnostic(kind, path, detail))
        self.logger.debug("%s in %s: %s", kind, path, detail)

    def build(self, graph: DependencyGraph) -> DependencyGraph:
        self.add_import_edges(graph)
        self.add_call_edges(graph)
        return graph

    def add_import_edges(self, graph: DependencyGraph):
        """Resolve every raw specifier and add one import edge per specifier."""
        for node in graph.nodes.values():
            node.resolved_imports = []
            for specifier in node.imports:
                target = self.resolver.resolve(specifier, node.id)
                node.resolved_imports.append(target)
                if target == node.id:
                    self._note(graph, SELF_IMPORT, node.id, specifier)
                    continue
                if target not in graph.nodes:
                    self._note(graph, DANGLING_IMPORT, node.id, f"{specifier} -> {target}")
                graph.add_edge(node.id, target, IMPORT)

    def export_index(self, graph: DependencyGraph) -> Dict[str, str]:
        """Map each exported function name to the last node that exports it."""
        index: Dict[str, str] = {}
        for node in graph.nodes.values():
            for name, kind in node.exports.items():
                if kind != FUNCTION:
                    continue
                previous = index.get(name)
                if previous is not None and previous != node.id:
                    self._note(graph, EXPORT_COLLISION, node.id, f"{name} also exported by {previous}")
                index[name] = node.id
        return index

    def add_call_edges(self, graph: DependencyGraph):
        """Link each caller to the file exporting the function it calls by name."""
        index = self.export_index(graph)
        for node in graph.nodes.values():
            for call in node.calls:
                target = index.get(call)
                if target is not None and target != node.id:
                    graph.add_edge(node.id, target, CALL, label=call)
