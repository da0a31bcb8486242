import os
from typing import Dict

import pytest

from jsdepgraph.syntax import SyntaxTreeProvider


@pytest.fixture
def provider():
    return SyntaxTreeProvider("ts")


@pytest.fixture
def parse(provider):
    """Parse source text and return the lowered program."""

    def _parse(text: str, path: str = "src/module.ts"):
        return provider.parse_source(text, path).tree

    return _parse


@pytest.fixture
def project(tmp_path):
    """Write ``{relative path: source}`` under a temp dir and return its root."""

    def _project(files: Dict[str, str]) -> str:
        for name, content in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return str(tmp_path)

    return _project


def node_id(root: str, name: str) -> str:
    return os.path.normpath(os.path.join(root, name))
