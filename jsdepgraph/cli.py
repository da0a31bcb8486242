"""Command line entry point."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .analyzer import analyze_files
from .config import DEFAULT_TOP_N, LANGUAGE_EXTENSIONS, OUTPUT_FORMATS, AnalyzeOptions
from .exceptions import DependencyGraphError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsdepgraph",
        description="Analyze imports and function calls between files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-g", "--glob", required=True, help="Glob pattern to match files")
    parser.add_argument(
        "-l", "--language", required=True, choices=sorted(LANGUAGE_EXTENSIONS),
        help="Language to analyze (ts or js)",
    )
    parser.add_argument("-o", "--output", help="Output file for the graph (stdout when omitted)")
    parser.add_argument(
        "-f", "--format", default="json", choices=OUTPUT_FORMATS,
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--open", dest="open_viewer", action="store_true",
        help="Open the HTML output in a browser",
    )
    parser.add_argument(
        "--top", dest="top_n", type=int, default=DEFAULT_TOP_N,
        help=f"Number of most-imported files to list (default: {DEFAULT_TOP_N})",
    )
    parser.add_argument(
        "--absolute-paths", action="store_true",
        help="Identify files by absolute path",
    )
    parser.add_argument("--plot", metavar="FILE", help="Also save a matplotlib preview image to FILE")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-file progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = AnalyzeOptions(
            glob=args.glob,
            language=args.language,
            output=args.output,
            format=args.format,
            open_viewer=args.open_viewer,
            top_n=args.top_n,
            absolute_paths=args.absolute_paths,
        )
        result = analyze_files(options)
        if args.plot:
            from .plot import visualize_graph

            if not visualize_graph(result.graph, output=args.plot):
                return 1
    except (DependencyGraphError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
