"""Discovery, graph building and export for a JavaScript/TypeScript codebase."""

import glob
import logging
import os
import sys
import tempfile
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import AnalyzeOptions
from .cycles import detect_cycles
from .exceptions import NoFilesFoundError
from .exporters import render, write_output
from .extractor import extract
from .graph import DependencyGraph, GraphBuilder, Node
from .resolver import PathResolver, normalize_path
from .summary import GraphSummary, format_summary, summarize
from .syntax import SyntaxTreeProvider


@dataclass
class AnalysisResult:
    graph: DependencyGraph
    cycles: List[List[str]]
    summary: GraphSummary


class DependencyAnalyzer:
    def __init__(self, options: AnalyzeOptions, logger: Optional[logging.Logger] = None):
        """Initialize the analyzer.

        Args:
            options: Validated analysis options.
            logger: Sink for progress and per-file failures. Defaults to this
                module's logger.
        """
        self.options = options
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.provider = SyntaxTreeProvider(options.language, logger=self.logger)
        self.resolver = PathResolver(options.language, absolute=options.absolute_paths)
        self.builder = GraphBuilder(self.resolver, logger=self.logger)

        # Counters for statistics
        self.total_files = 0
        self.files_processed = 0
        self.files_failed = 0

    def _glob_root(self) -> str:
        """Return the literal directory prefix of the glob pattern."""
        parts = []
        for part in self.options.glob.split(os.sep):
            if any(char in part for char in "*?["):
                break
            parts.append(part)
        return os.sep.join(parts) or os.curdir

    def _is_in_ignored_directory(self, path: str) -> bool:
        """Check if the path is inside any ignored directory below the glob root."""
        relative_path = os.path.relpath(path, self._glob_root())
        directory = os.path.dirname(relative_path)
        return any(part in self.options.ignored_directories for part in directory.split(os.sep))

    def discover_files(self) -> List[str]:
        """Expand the glob pattern into a sorted list of source files.

        Raises:
            NoFilesFoundError: Nothing matched the pattern.
        """
        files = sorted(
            path
            for path in glob.glob(self.options.glob, recursive=True)
            if os.path.isfile(path) and not self._is_in_ignored_directory(path)
        )
        if not files:
            raise NoFilesFoundError(self.options.glob)
        self.total_files = len(files)
        self.logger.info("Found %d files to analyze...", len(files))
        return files

    def build_graph(self, files: List[str]) -> DependencyGraph:
        """Add one node per parsable file, then add all edges."""
        graph = DependencyGraph()

        for file_path in files:
            node_id = normalize_path(file_path, self.options.absolute_paths)
            if node_id in graph:
                self.logger.debug("Skipping %s: already analyzed as %s", file_path, node_id)
                continue

            parsed = self.provider.parse_file(file_path)
            if parsed is None:
                self.files_failed += 1
                continue

            graph.add_node(Node.from_extraction(node_id, extract(parsed.tree)))
            self.files_processed += 1
            self.logger.info("Processed file [%d/%d]: %s", self.files_processed, len(files), file_path)

        # Edges only once every node exists.
        self.builder.build(graph)
        return graph

    def analyze(self) -> AnalysisResult:
        files = self.discover_files()
        graph = self.build_graph(files)
        cycles = detect_cycles(graph)
        return AnalysisResult(graph, cycles, summarize(graph, cycles, self.options.top_n))

    def export(self, result: AnalysisResult) -> Optional[str]:
        """Write the graph in the configured format.

        Returns:
            The path written to, or None when the graph went to stdout.
        """
        content = render(result.graph, self.options.format)
        output = self.options.output
        wants_viewer = self.options.open_viewer and self.options.format == "html"

        if output is None and wants_viewer:
            fd, output = tempfile.mkstemp(prefix="dependency-graph-", suffix=".html")
            os.close(fd)

        write_output(content, output)
        if output is not None:
            self.logger.info("Graph written to %s", output)
        if wants_viewer:
            webbrowser.open(Path(output).resolve().as_uri())
        return output


def analyze_files(options: AnalyzeOptions, logger: Optional[logging.Logger] = None) -> AnalysisResult:
    """Analyze, export and print the run summary."""
    analyzer = DependencyAnalyzer(options, logger=logger)
    result = analyzer.analyze()
    written = analyzer.export(result)

    # Keep stdout parseable when the graph itself went there.
    stream = sys.stdout if written is not None else sys.stderr
    print(file=stream)
    print(format_summary(result.summary), file=stream)
    return result
