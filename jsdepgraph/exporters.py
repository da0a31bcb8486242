"""Serialize a finished dependency graph. None of these functions mutate it."""

import json
import os
from typing import Any, Callable, Dict, Optional

import networkx as nx
from networkx.readwrite import json_graph

from .exceptions import DependencyGraphError
from .graph import CALL, IMPORT, DependencyGraph, Node
from .template import GRAPH_DATA_PLACEHOLDER, HTML_TEMPLATE

# Relative link weight in the force layout.
LINK_VALUES = {IMPORT: 2, CALL: 1}

# Force-layout groups: files with exports and files without.
GROUP_EXPORTING = 1
GROUP_PLAIN = 2


def to_json(graph: DependencyGraph) -> Dict[str, Any]:
    nodes = [
        {
            "id": node.id,
            "label": node.label,
            "exports": dict(node.exports),
            "calls": list(node.calls),
        }
        for node in graph.nodes.values()
    ]
    edges = []
    for edge in graph.edges:
        item = {"source": edge.source, "target": edge.target, "type": edge.type}
        if edge.label is not None:
            item["label"] = edge.label
        edges.append(item)
    return {"nodes": nodes, "edges": edges}


def export_json(graph: DependencyGraph) -> str:
    return json.dumps(to_json(graph), indent=2)


def load_json(text: str) -> DependencyGraph:
    """Rebuild a graph from :func:`export_json` output.

    Raw import specifiers are not part of the JSON form, so loaded nodes have
    empty ``imports``.
    """
    try:
        data = json.loads(text)
        graph = DependencyGraph()
        for item in data["nodes"]:
            graph.add_node(Node(
                id=item["id"],
                exports=dict(item.get("exports", {})),
                calls=list(item.get("calls", [])),
            ))
        for item in data["edges"]:
            graph.add_edge(item["source"], item["target"], item["type"], item.get("label"))
    except (ValueError, KeyError, TypeError) as e:
        raise DependencyGraphError(f"Invalid graph JSON: {e}") from e
    return graph


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def export_dot(graph: DependencyGraph) -> str:
    """Render a GraphViz digraph.

    Import edges are solid black; call edges are dashed blue and labelled with
    the call name.
    """
    lines = [
        "digraph dependencies {",
        "  rankdir=LR;",
        "  node [shape=box];",
    ]
    for node in graph.nodes.values():
        lines.append(f"  {_quote(node.id)} [label={_quote(node.label)}];")
    for edge in graph.edges:
        if edge.type == IMPORT:
            attrs = "style=solid, color=black"
        else:
            attrs = f"style=dashed, color=blue, label={_quote(edge.label or '')}"
        lines.append(f"  {_quote(edge.source)} -> {_quote(edge.target)} [{attrs}];")
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_d3(graph: DependencyGraph) -> Dict[str, Any]:
    """Build the force-layout schema ``{nodes: [...], links: [...]}``.

    Links to dangling import targets are kept; only analyzed files are
    listed as nodes. Links follow edge discovery order.
    """
    g = nx.MultiDiGraph()
    for node in graph.nodes.values():
        g.add_node(
            node.id,
            label=node.label,
            group=GROUP_EXPORTING if node.exports else GROUP_PLAIN,
        )
    nodes = json_graph.node_link_data(g, edges="links")["nodes"]
    # Not taken from node_link_data, which groups links by source.
    links = [
        {"source": edge.source, "target": edge.target, "value": LINK_VALUES[edge.type], "type": edge.type}
        for edge in graph.edges
    ]
    return {"nodes": nodes, "links": links}


def export_d3(graph: DependencyGraph) -> str:
    return json.dumps(to_d3(graph), indent=2)


def export_html(graph: DependencyGraph) -> str:
    """Embed the force-layout data in the standalone D3 page."""
    payload = json.dumps(to_d3(graph)).replace("</", "<\\/")
    return HTML_TEMPLATE.replace(GRAPH_DATA_PLACEHOLDER, payload)


EXPORTERS: Dict[str, Callable[[DependencyGraph], str]] = {
    "json": export_json,
    "dot": export_dot,
    "d3": export_d3,
    "html": export_html,
}


def render(graph: DependencyGraph, fmt: str = "json") -> str:
    try:
        exporter = EXPORTERS[fmt]
    except KeyError:
        raise DependencyGraphError(f"Unknown output format: {fmt}") from None
    return exporter(graph)


def write_output(content: str, path: Optional[str] = None):
    """Write ``content`` to ``path``, or print it when no path is given.

    Write failures are not caught.
    """
    if path is None:
        print(content)
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
