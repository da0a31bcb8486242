"""Analysis options and the constants they are validated against."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from .exceptions import ConfigError

# Extension appended to extensionless import specifiers, per source language.
LANGUAGE_EXTENSIONS: Dict[str, str] = {
    "ts": ".ts",
    "js": ".js",
}

OUTPUT_FORMATS: Tuple[str, ...] = ("json", "dot", "d3", "html")

# Directories whose files are never analyzed, even when the glob matches them.
IGNORED_DIRECTORIES: FrozenSet[str] = frozenset([
    'node_modules', 'build', 'dist', 'coverage', '.next', '.nuxt', '.cache',
    'cache', 'out', 'tmp', 'temp', '.git', '.idea', '.vscode',
])

DEFAULT_TOP_N = 5


@dataclass
class AnalyzeOptions:
    """Options for one analysis run.

    Args:
        glob: Glob pattern selecting the files to analyze (``**`` is recursive).
        language: Source language tag, ``ts`` or ``js``. Only affects the
            extension appended to extensionless import specifiers and the
            grammar used for files with an unknown extension.
        output: File to write the graph to. Printed to stdout when omitted.
        format: One of ``json``, ``dot``, ``d3`` or ``html``.
        open_viewer: Open the written HTML page in a browser.
        top_n: Number of entries in the most-imported ranking.
        absolute_paths: Identify files by absolute path instead of the path
            the glob produced.
        ignored_directories: Directory names skipped during discovery.
    """

    glob: str
    language: str
    output: Optional[str] = None
    format: str = "json"
    open_viewer: bool = False
    top_n: int = DEFAULT_TOP_N
    absolute_paths: bool = False
    ignored_directories: FrozenSet[str] = field(default=IGNORED_DIRECTORIES)

    def __post_init__(self):
        if not self.glob:
            raise ConfigError("A glob pattern is required")
        if self.language not in LANGUAGE_EXTENSIONS:
            raise ConfigError(
                f'Language must be either "ts" or "js", got "{self.language}"'
            )
        if self.format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unknown output format {self.format!r}; "
                f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.top_n < 1:
            raise ConfigError("top_n must be a positive integer")
