"""Syntax tree provider.

Source files are parsed with tree-sitter and lowered into a small tree of
tagged variants, one per construct the extractor consumes. Everything else
becomes :class:`Other`. Each variant's children are listed explicitly by
:func:`child_nodes`, so traversal never depends on attribute reflection and
never follows a parent reference.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node as TSNode, Parser

from .config import LANGUAGE_EXTENSIONS
from .exceptions import ParseError

# Grammar used for each known source extension.
GRAMMAR_BY_EXTENSION: Dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

# Grammar used when the extension is unknown.
GRAMMAR_BY_LANGUAGE: Dict[str, str] = {
    "ts": "typescript",
    "js": "javascript",
}

FUNCTION_DECLARATIONS = frozenset([
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
])

FUNCTION_VALUES = frozenset([
    "arrow_function",
    "function_expression",
    "function",
    "generator_function",
])

VARIABLE_DECLARATIONS = frozenset(["lexical_declaration", "variable_declaration"])

NAMED_DECLARATIONS = frozenset([
    "class_declaration",
    "abstract_class_declaration",
    "class",
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
    "internal_module",
    "module",
])


@dataclass
class ImportDeclaration:
    specifier: str
    reexport: bool = False


@dataclass
class FunctionDeclaration:
    name: Optional[str]
    exported: bool = False
    default: bool = False
    children: List["SyntaxNode"] = field(default_factory=list)


@dataclass
class Declarator:
    """One ``name = value`` binding; ``name`` is None for destructuring."""

    name: Optional[str]
    is_function: bool = False
    init: List["SyntaxNode"] = field(default_factory=list)


@dataclass
class VariableStatement:
    declarators: List[Declarator]
    exported: bool = False


@dataclass
class ExportAssignment:
    """``export default <expr>`` or TypeScript's ``export = <expr>``.

    ``name`` is set only when the exported expression is a bare identifier.
    """

    name: Optional[str]
    children: List["SyntaxNode"] = field(default_factory=list)


@dataclass
class ExportList:
    """``export { local as exported, ... }`` without a ``from`` clause."""

    specifiers: List[Tuple[str, str]]


@dataclass
class CallExpression:
    """A call; ``callee`` is ``foo`` or ``obj.prop`` when the shape is tracked."""

    callee: Optional[str]
    children: List["SyntaxNode"] = field(default_factory=list)


@dataclass
class Other:
    kind: str
    name: Optional[str] = None
    exported: bool = False
    children: List["SyntaxNode"] = field(default_factory=list)


@dataclass
class Program:
    path: str
    body: List["SyntaxNode"] = field(default_factory=list)


SyntaxNode = Union[
    Program,
    ImportDeclaration,
    FunctionDeclaration,
    VariableStatement,
    ExportAssignment,
    ExportList,
    CallExpression,
    Other,
]


def child_nodes(node: SyntaxNode) -> Sequence[SyntaxNode]:
    """Return the nested nodes of ``node`` in source order."""
    if isinstance(node, Program):
        return node.body
    if isinstance(node, VariableStatement):
        return [child for declarator in node.declarators for child in declarator.init]
    if isinstance(node, (FunctionDeclaration, ExportAssignment, CallExpression, Other)):
        return node.children
    if isinstance(node, (ImportDeclaration, ExportList)):
        return ()
    raise TypeError(f"Unknown syntax node: {type(node).__name__}")


def walk(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield ``node`` and every node nested in it, pre-order, each exactly once."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(child_nodes(current)))


@dataclass
class ParsedSource:
    path: str
    text: str
    tree: Program


# Work item for the lowering loop: a tree-sitter node and the list its lowered
# form is appended to.
_Pending = Tuple[TSNode, List[SyntaxNode]]


def _text(node: TSNode) -> str:
    return node.text.decode("utf-8")


def _string_value(node: TSNode) -> str:
    raw = _text(node)
    if len(raw) >= 2 and raw[0] in "'\"`" and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


def _field_text(node: TSNode, name: str) -> Optional[str]:
    child = node.child_by_field_name(name)
    if child is None:
        return None
    return _text(child)


def _has_token(node: TSNode, token: str) -> bool:
    return any(child.type == token for child in node.children)


def _callee_name(callee: Optional[TSNode]) -> Optional[str]:
    if callee is None:
        return None
    if callee.type == "identifier":
        return _text(callee)
    if callee.type == "member_expression":
        obj = callee.child_by_field_name("object")
        prop = callee.child_by_field_name("property")
        if obj is not None and prop is not None and obj.type == "identifier":
            return f"{_text(obj)}.{_text(prop)}"
    return None


def _lower_export(node: TSNode, pending: List[_Pending]) -> Optional[SyntaxNode]:
    source = node.child_by_field_name("source")
    if source is not None:
        return ImportDeclaration(_string_value(source), reexport=True)

    is_default = _has_token(node, "default")
    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        return _lower_node(declaration, pending, exported=True, default=is_default)

    value = node.child_by_field_name("value")
    if value is None and _has_token(node, "="):
        # TypeScript export assignment has no field name for its expression.
        value = next(iter(node.named_children), None)
    if value is not None:
        if value.type in FUNCTION_VALUES and value.child_by_field_name("name") is not None:
            return _lower_node(value, pending, exported=True, default=True)
        lowered = ExportAssignment(_text(value) if value.type == "identifier" else None)
        pending.append((value, lowered.children))
        return lowered

    for child in node.named_children:
        if child.type == "export_clause":
            specifiers = []
            for spec in child.named_children:
                if spec.type != "export_specifier":
                    continue
                local = spec.child_by_field_name("name")
                alias = spec.child_by_field_name("alias")
                if local is None:
                    continue
                local_name = _string_value(local)
                specifiers.append(
                    (local_name, _string_value(alias) if alias is not None else local_name)
                )
            return ExportList(specifiers)

    lowered = Other(node.type)
    pending.extend((child, lowered.children) for child in node.named_children)
    return lowered


def _lower_node(
    node: TSNode,
    pending: List[_Pending],
    exported: bool = False,
    default: bool = False,
) -> Optional[SyntaxNode]:
    """Lower one tree-sitter node.

    Children that still need lowering are queued on ``pending``. Returns None
    for leaves that cannot contain any consumed construct.
    """
    kind = node.type

    if kind == "import_statement":
        source = node.child_by_field_name("source")
        if source is None:
            # import x = require('./x')
            for child in node.named_children:
                if child.type == "import_require_clause":
                    source = next(
                        (part for part in child.named_children if part.type == "string"), None
                    )
        if source is not None:
            return ImportDeclaration(_string_value(source))

    elif kind == "export_statement":
        return _lower_export(node, pending)

    elif kind == "ambient_declaration":
        inner = next(iter(node.named_children), None)
        if inner is not None:
            return _lower_node(inner, pending, exported=exported, default=default)

    elif kind in FUNCTION_DECLARATIONS or (kind in FUNCTION_VALUES and exported):
        lowered = FunctionDeclaration(_field_text(node, "name"), exported, default)
        pending.extend((child, lowered.children) for child in node.named_children)
        return lowered

    elif kind in VARIABLE_DECLARATIONS:
        statement = VariableStatement([], exported)
        for child in node.named_children:
            if child.type != "variable_declarator":
                continue
            name = child.child_by_field_name("name")
            value = child.child_by_field_name("value")
            declarator = Declarator(
                _text(name) if name is not None and name.type == "identifier" else None,
                is_function=value is not None and value.type in FUNCTION_VALUES,
            )
            if value is not None:
                pending.append((value, declarator.init))
            statement.declarators.append(declarator)
        return statement

    elif kind in NAMED_DECLARATIONS:
        lowered = Other(kind, _field_text(node, "name"), exported)
        pending.extend((child, lowered.children) for child in node.named_children)
        return lowered

    elif kind == "call_expression":
        lowered = CallExpression(_callee_name(node.child_by_field_name("function")))
        pending.extend((child, lowered.children) for child in node.named_children)
        return lowered

    if node.named_child_count == 0:
        return None
    lowered = Other(kind)
    pending.extend((child, lowered.children) for child in node.named_children)
    return lowered


def lower_tree(root: TSNode, path: str) -> Program:
    """Convert a tree-sitter ``program`` node into a :class:`Program`."""
    program = Program(path)
    stack: List[_Pending] = [(child, program.body) for child in reversed(root.named_children)]
    while stack:
        node, sink = stack.pop()
        pending: List[_Pending] = []
        lowered = _lower_node(node, pending)
        if lowered is not None:
            sink.append(lowered)
        stack.extend(reversed(pending))
    return program


def _first_error(root: TSNode) -> Optional[TSNode]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _load_language(grammar: str) -> Language:
    if grammar == "javascript":
        return Language(tree_sitter_javascript.language())
    if grammar == "typescript":
        return Language(tree_sitter_typescript.language_typescript())
    if grammar == "tsx":
        return Language(tree_sitter_typescript.language_tsx())
    raise ValueError(f"unsupported grammar: {grammar}")


class SyntaxTreeProvider:
    """Parses source files into :class:`Program` trees.

    Args:
        language: Configured language tag, used for files whose extension
            does not select a grammar.
        logger: Sink for parse failures. Defaults to this module's logger.
    """

    def __init__(self, language: str = "ts", logger: Optional[logging.Logger] = None):
        if language not in LANGUAGE_EXTENSIONS:
            raise ValueError(f"unsupported language: {language}")
        self.language = language
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._parsers: Dict[str, Parser] = {}

    def grammar_for(self, path: str) -> str:
        ext = os.path.splitext(path)[1].lower()
        return GRAMMAR_BY_EXTENSION.get(ext, GRAMMAR_BY_LANGUAGE[self.language])

    def _parser(self, grammar: str) -> Parser:
        if grammar not in self._parsers:
            self._parsers[grammar] = Parser(_load_language(grammar))
        return self._parsers[grammar]

    def parse_source(self, text: str, path: str) -> ParsedSource:
        """Parse ``text`` as the contents of ``path``.

        Raises:
            ParseError: The source contains a syntax error.
        """
        tree = self._parser(self.grammar_for(path)).parse(text.encode("utf-8"))
        root = tree.root_node
        if root.has_error:
            error = _first_error(root)
            if error is None:
                raise ParseError(path, "syntax error")
            row, column = error.start_point
            message = f"missing {error.type}" if error.is_missing else "syntax error"
            raise ParseError(path, message, row + 1, column + 1)
        return ParsedSource(path, text, lower_tree(root, path))

    def parse_file(self, path: str) -> Optional[ParsedSource]:
        """Read and parse ``path``; failures are logged and yield None."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
            return self.parse_source(content, path)
        except (ParseError, OSError, UnicodeDecodeError) as e:
            self.logger.warning("Error processing %s: %s", path, e)
        return None
