"""Errors raised by the dependency graph pipeline."""

from typing import Optional


class DependencyGraphError(Exception):
    """Base class for every error the analyzer raises on purpose."""


class ConfigError(DependencyGraphError):
    """Raised when the analysis options are invalid."""


class NoFilesFoundError(DependencyGraphError):
    """Raised when the glob pattern matches no source files."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"No files found matching pattern: {pattern}")


class ParseError(DependencyGraphError):
    """Raised when a source file cannot be turned into a syntax tree."""

    def __init__(
        self,
        path: str,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.path = path
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)
