from jsdepgraph.extractor import FUNCTION
from jsdepgraph.graph import DependencyGraph, GraphBuilder, Node
from jsdepgraph.resolver import PathResolver
from jsdepgraph.summary import format_summary, most_imported, summarize


def sample_graph():
    graph = DependencyGraph()
    graph.add_node(Node("a.ts", imports=["./c", "./b"], calls=["f"]))
    graph.add_node(Node("b.ts", imports=["./c", "./a"]))
    graph.add_node(Node("c.ts", exports={"f": FUNCTION}))
    return GraphBuilder(PathResolver("ts")).build(graph)


def test_summarize_counts():
    graph = sample_graph()
    summary = summarize(graph, [["a.ts", "b.ts"]], top_n=2)
    assert summary.file_count == 3
    assert summary.import_edge_count == 4
    assert summary.call_edge_count == 1
    assert summary.cycles == [["a.ts", "b.ts"]]
    assert summary.most_imported == [("c.ts", 2), ("b.ts", 1)]


def test_most_imported_ignores_call_edges():
    assert most_imported(sample_graph(), top_n=1) == [("c.ts", 2)]


def test_format_summary_reports_every_fact():
    text = format_summary(summarize(sample_graph(), [["a.ts", "b.ts"]]))
    assert "Total Files" in text
    assert "Total Imports         : 4" in text
    assert "Total Function Calls  : 1" in text
    assert "a.ts -> b.ts -> a.ts" in text
    assert "Most imported files:" in text
    assert "2  c.ts" in text


def test_format_summary_without_cycles():
    graph = DependencyGraph()
    graph.add_node(Node("a.ts"))
    text = format_summary(summarize(graph, []))
    assert "Import Cycles         : 0" in text
    assert "Cycles:" not in text
    assert "Most imported files:" not in text
