"""Lexical resolution of relative import specifiers."""

import os

from .config import LANGUAGE_EXTENSIONS


def normalize_path(path: str, absolute: bool = False) -> str:
    """Normalize a file path into the form used for node ids."""
    if absolute:
        return os.path.abspath(path)
    return os.path.normpath(path)


class PathResolver:
    """Map relative import specifiers to file paths.

    Resolution is purely lexical: the specifier is joined to the importing
    file's directory and, when the result has no extension, the language's
    default extension is appended. The file system is never consulted, so a
    specifier naming a directory resolves to a path that does not exist.

    Args:
        language: ``ts`` or ``js``; selects the appended extension.
        absolute: Produce absolute paths instead of normalized relative ones.
    """

    def __init__(self, language: str = "ts", absolute: bool = False):
        if language not in LANGUAGE_EXTENSIONS:
            raise ValueError(f"unsupported language: {language}")
        self.extension = LANGUAGE_EXTENSIONS[language]
        self.absolute = absolute

    def resolve(self, specifier: str, importer: str) -> str:
        """Resolve ``specifier`` as written in the file ``importer``."""
        directory = os.path.dirname(importer)
        resolved = normalize_path(os.path.join(directory, specifier), self.absolute)
        if not os.path.splitext(resolved)[1]:
            resolved += self.extension
        return resolved
