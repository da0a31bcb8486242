"""Import cycle detection."""

from typing import Dict, List

from .graph import IMPORT, DependencyGraph


def import_adjacency(graph: DependencyGraph) -> Dict[str, List[str]]:
    """Return each node's distinct import targets in edge order."""
    import_graph = graph.to_networkx(IMPORT)
    return {
        node: list(dict.fromkeys(target for _, target in import_graph.out_edges(node)))
        for node in import_graph.nodes
    }


def detect_cycles(graph: DependencyGraph) -> List[List[str]]:
    """Find import cycles with a depth-first search.

    Roots are taken in node insertion order. When a neighbour is already on
    the active path, the slice of the path from that neighbour to the current
    node is reported as a cycle and the search does not descend into it.
    This reports the first cycle met along each branch, not every cycle of a
    strongly connected component.

    Returns:
        Cycles as lists of node ids; the import from the last node returns
        to the first.
    """
    adjacency = import_adjacency(graph)
    visited = set()
    cycles: List[List[str]] = []

    for root in graph.nodes:
        if root in visited:
            continue
        visited.add(root)
        path = [root]
        on_path = {root}
        stack = [iter(adjacency.get(root, ()))]

        while stack:
            neighbor = next(stack[-1], None)
            if neighbor is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if neighbor in on_path:
                cycles.append(path[path.index(neighbor):])
            elif neighbor not in visited:
                visited.add(neighbor)
                path.append(neighbor)
                on_path.add(neighbor)
                stack.append(iter(adjacency.get(neighbor, ())))

    return cycles


def format_cycle(cycle: List[str]) -> str:
    return " -> ".join(cycle + cycle[:1])
