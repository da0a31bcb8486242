"""Human-readable run summary."""

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Tuple

from .cycles import format_cycle
from .graph import CALL, IMPORT, DependencyGraph


@dataclass
class GraphSummary:
    file_count: int
    import_edge_count: int
    call_edge_count: int
    cycles: List[List[str]] = field(default_factory=list)
    most_imported: List[Tuple[str, int]] = field(default_factory=list)


def most_imported(graph: DependencyGraph, top_n: int = 5) -> List[Tuple[str, int]]:
    """Rank import targets by how many import edges point at them."""
    counts = Counter(edge.target for edge in graph.edges_of_type(IMPORT))
    return counts.most_common(top_n)


def summarize(graph: DependencyGraph, cycles: List[List[str]], top_n: int = 5) -> GraphSummary:
    return GraphSummary(
        file_count=len(graph.nodes),
        import_edge_count=sum(1 for _ in graph.edges_of_type(IMPORT)),
        call_edge_count=sum(1 for _ in graph.edges_of_type(CALL)),
        cycles=[list(cycle) for cycle in cycles],
        most_imported=most_imported(graph, top_n),
    )


def format_summary(summary: GraphSummary) -> str:
    stats = {
        "Total Files": summary.file_count,
        "Total Imports": summary.import_edge_count,
        "Total Function Calls": summary.call_edge_count,
        "Import Cycles": len(summary.cycles),
    }

    # Calculate max length for padding
    max_len = max(len(key) for key in stats.keys())

    lines = ["Summary:", "--------"]
    lines.extend(f"{key:<{max_len + 2}}: {value:,}" for key, value in stats.items())

    if summary.cycles:
        lines.append("")
        lines.append("Cycles:")
        lines.extend(f"  {format_cycle(cycle)}" for cycle in summary.cycles)

    if summary.most_imported:
        lines.append("")
        lines.append("Most imported files:")
        width = len(str(summary.most_imported[0][1]))
        lines.extend(f"  {count:>{width}}  {target}" for target, count in summary.most_imported)

    return "\n".join(lines)
