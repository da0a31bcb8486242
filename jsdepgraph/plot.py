"""Quick matplotlib preview of a dependency graph."""

import logging
from typing import Dict, List, Optional, Tuple

import networkx as nx

from .graph import CALL, IMPORT, DependencyGraph

logger = logging.getLogger(__name__)

# Node colors by whether the file exports anything.
NODE_COLORS = {
    "exporting": "#ADD8E6",  # Light blue
    "plain": "#C0C0C0",      # Silver
    "dangling": "#FFB6C1",   # Light pink
}

EDGE_STYLES = {
    IMPORT: {"edge_color": "black", "style": "solid"},
    CALL: {"edge_color": "#1f77b4", "style": "dashed", "connectionstyle": "arc3,rad=0.15"},
}


def edge_lists(graph: DependencyGraph) -> Dict[str, List[Tuple[str, str]]]:
    """Return the distinct (source, target) pairs of each edge type, in discovery order."""
    lists = {}
    for edge_type in EDGE_STYLES:
        pairs = dict.fromkeys((edge.source, edge.target) for edge in graph.edges_of_type(edge_type))
        lists[edge_type] = list(pairs)
    return lists


def visualize_graph(graph: DependencyGraph, output: Optional[str] = None) -> bool:
    """Draw the graph with a spring layout.

    Args:
        graph: The finished dependency graph.
        output: Save the figure here instead of opening a window.

    Returns:
        False when matplotlib is not installed.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        logger.error("Matplotlib is required for visualization. Install it using 'pip install matplotlib'.")
        return False

    # One arrow per pair and type; the per-type lists below carry the types.
    g = nx.DiGraph(graph.to_networkx())

    def color(node_id):
        node = graph.nodes.get(node_id)
        if node is None:
            return NODE_COLORS["dangling"]
        return NODE_COLORS["exporting"] if node.exports else NODE_COLORS["plain"]

    # Create figure and axis explicitly
    fig, ax = plt.subplots(figsize=(20, 15))

    # Calculate layout
    pos = nx.spring_layout(g, k=1.5, iterations=50, seed=42)
    labels = {node_id: data.get("label", node_id) for node_id, data in g.nodes(data=True)}

    nx.draw_networkx_nodes(g, pos, ax=ax, node_color=[color(n) for n in g.nodes], node_size=2000)
    nx.draw_networkx_labels(g, pos, labels=labels, ax=ax, font_size=8, font_weight="bold")
    edgelists = edge_lists(graph)
    for edge_type, style in EDGE_STYLES.items():
        edgelist = edgelists[edge_type]
        if edgelist:
            nx.draw_networkx_edges(g, pos, edgelist=edgelist, ax=ax, arrows=True, arrowsize=20, **style)

    # Add legend
    legend_elements = [
        plt.Line2D([0], [0], marker='o', color='w', markerfacecolor=c, label=name, markersize=10)
        for name, c in NODE_COLORS.items()
    ]
    ax.legend(handles=legend_elements, loc='center left', bbox_to_anchor=(1.05, 0.5), title="Files")
    ax.set_title("Dependency Graph", pad=20)
    ax.set_axis_off()

    # Adjust layout to accommodate legend
    plt.subplots_adjust(right=0.85)

    if output:
        fig.savefig(output)
        plt.close(fig)
    else:
        plt.show()
    return True
