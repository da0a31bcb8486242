"""Import and call dependency graphs for JavaScript/TypeScript codebases."""

__version__ = "0.1.0"

from .analyzer import AnalysisResult, DependencyAnalyzer, analyze_files
from .config import AnalyzeOptions
from .cycles import detect_cycles, format_cycle
from .exceptions import ConfigError, DependencyGraphError, NoFilesFoundError, ParseError
from .exporters import export_d3, export_dot, export_html, export_json, load_json, render
from .extractor import Extraction, extract
from .graph import CALL, IMPORT, DependencyGraph, Edge, GraphBuilder, Node
from .resolver import PathResolver
from .syntax import SyntaxTreeProvider

__all__ = [
    'AnalysisResult',
    'AnalyzeOptions',
    'CALL',
    'ConfigError',
    'DependencyAnalyzer',
    'DependencyGraph',
    'DependencyGraphError',
    'Edge',
    'Extraction',
    'GraphBuilder',
    'IMPORT',
    'Node',
    'NoFilesFoundError',
    'ParseError',
    'PathResolver',
    'SyntaxTreeProvider',
    'analyze_files',
    'detect_cycles',
    'export_d3',
    'export_dot',
    'export_html',
    'export_json',
    'extract',
    'format_cycle',
    'load_json',
    'render',
]
