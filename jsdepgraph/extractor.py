"""Extract relative imports, exported symbols and call names from a syntax tree."""

from dataclasses import dataclass, field
from typing import Dict, List

from .syntax import (
    CallExpression,
    ExportAssignment,
    ExportList,
    FunctionDeclaration,
    ImportDeclaration,
    Other,
    Program,
    VariableStatement,
    walk,
)

# Export kinds.
FUNCTION = "function"
VARIABLE = "variable"
DEFAULT = "default"

RELATIVE_PREFIX = "."


@dataclass
class Extraction:
    """What one file contributes to the graph.

    ``calls`` keeps first-seen order and holds each name once.
    """

    imports: List[str] = field(default_factory=list)
    exports: Dict[str, str] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)


def extract_imports(tree: Program) -> List[str]:
    """Return the relative import specifiers in source order.

    Package imports (anything not starting with ``.``) are dropped, since only
    edges between files of the project are modelled.
    """
    return [
        node.specifier
        for node in walk(tree)
        if isinstance(node, ImportDeclaration) and node.specifier.startswith(RELATIVE_PREFIX)
    ]


def _local_kinds(tree: Program) -> Dict[str, str]:
    kinds: Dict[str, str] = {}
    for node in tree.body:
        if isinstance(node, FunctionDeclaration) and node.name:
            kinds[node.name] = FUNCTION
        elif isinstance(node, VariableStatement):
            for declarator in node.declarators:
                if declarator.name:
                    kinds[declarator.name] = FUNCTION if declarator.is_function else VARIABLE
        elif isinstance(node, Other) and node.name:
            kinds[node.name] = VARIABLE
    return kinds


def extract_exports(tree: Program) -> Dict[str, str]:
    """Return the exported names of a module mapped to their kind.

    Only top-level statements can export. When a name is exported twice the
    last declaration decides its kind.
    """
    local_kinds = _local_kinds(tree)
    exports: Dict[str, str] = {}

    for node in tree.body:
        if isinstance(node, FunctionDeclaration):
            if node.exported and node.name:
                exports[node.name] = FUNCTION
        elif isinstance(node, VariableStatement):
            if node.exported:
                for declarator in node.declarators:
                    if declarator.name:
                        exports[declarator.name] = FUNCTION if declarator.is_function else VARIABLE
        elif isinstance(node, ExportAssignment):
            if node.name:
                exports[node.name] = DEFAULT
        elif isinstance(node, ExportList):
            for local, exported in node.specifiers:
                exports[exported] = local_kinds.get(local, VARIABLE)
        elif isinstance(node, Other):
            if node.exported and node.name:
                exports[node.name] = VARIABLE

    return exports


def extract_calls(tree: Program) -> List[str]:
    """Return the distinct call names, ``foo`` or ``obj.method``, in first-seen order.

    Deeper member chains (``a.b.c()``), calls on ``this`` and computed
    members (``obj[key]()``) are not tracked.
    """
    calls: Dict[str, None] = {}
    for node in walk(tree):
        if isinstance(node, CallExpression) and node.callee:
            calls.setdefault(node.callee, None)
    return list(calls)


def extract(tree: Program) -> Extraction:
    return Extraction(
        imports=extract_imports(tree),
        exports=extract_exports(tree),
        calls=extract_calls(tree),
    )
