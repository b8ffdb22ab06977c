"""
Render ES module import/export nodes back into JavaScript source text.

Nodes from any supported dialect are first normalized by a dialect adapter
(see `specifiers.dialects`); everything below only looks at `SpecifierKind`.
Rendering is a pure function of its input: no caller structure is mutated
and either a complete statement is returned or `InvalidNodeError` is raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from specifiers import (
    ExportDeclaration,
    ImportDeclaration,
    InvalidNodeError,
    SourceClause,
    Specifier,
    SpecifierKind,
    get_adapter,
)
from specifiers.dialects import NAMESPACE_SENTINEL

from .collaborators import NodeRenderer, reject_nested_node

ImportNode = Union[ImportDeclaration, Dict[str, Any]]
ExportNode = Union[ExportDeclaration, Dict[str, Any]]

_CHARACTER_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass(frozen=True)
class RenderOptions:
    dialect: str = "auto"
    render_declaration: Optional[NodeRenderer] = None
    render_expression: Optional[NodeRenderer] = None
    preserve_quotes: bool = False


@dataclass(frozen=True)
class RenderResult:
    statements: List[str]
    diagnostics: List[str] = field(default_factory=list)

    @property
    def source(self) -> str:
        if not self.statements:
            return ""
        return "\n".join(self.statements) + "\n"


# ---------------------------------------------------------------- fragments


def quote_string(value: str) -> str:
    """
    Quote `value` as a JavaScript string literal.

    Double quotes are used unless the value holds double quotes and no single
    quotes, in which case single quotes avoid every escape.
    """
    if '"' in value and "'" not in value:
        quote = "'"
    else:
        quote = '"'
    escaped = []
    for char in value:
        if char == quote:
            escaped.append("\\" + char)
        else:
            escaped.append(_CHARACTER_ESCAPES.get(char, char))
    return quote + "".join(escaped) + quote


def render_from_clause(source: SourceClause) -> str:
    if source.raw:
        return source.raw
    if source.value is None:
        raise InvalidNodeError("Source clause has no value to quote.")
    return f" from {quote_string(source.value)};"


def render_specifier(specifier: Specifier) -> str:
    if specifier.local == specifier.bound:
        return specifier.local
    return f"{specifier.local} as {specifier.bound}"


def render_brace_list(
    specifiers: Sequence[Specifier], node: Optional[Dict[str, Any]] = None
) -> str:
    if not specifiers:
        raise InvalidNodeError("Brace list needs at least one specifier.", node)
    for specifier in specifiers:
        if specifier.is_marker:
            raise InvalidNodeError(
                f"{specifier.kind.value.capitalize()} specifier must lead the list.",
                node,
            )
    return "{" + ",".join(render_specifier(item) for item in specifiers) + "}"


def render_specifier_list(
    specifiers: Sequence[Specifier], node: Optional[Dict[str, Any]] = None
) -> str:
    """Render the binding clause shared by imports (`x, {a as b}` etc.)."""
    if not specifiers:
        raise InvalidNodeError("Specifier list is empty.", node)

    first, rest = specifiers[0], specifiers[1:]
    if first.kind is SpecifierKind.DEFAULT:
        head = first.bound
        if not rest:
            return head
        if rest[0].kind is SpecifierKind.NAMESPACE:
            _expect_no_more(rest[1:], node)
            return f"{head}, * as {rest[0].bound}"
        return f"{head}, {render_brace_list(rest, node)}"

    if first.kind is SpecifierKind.NAMESPACE:
        head = f"* as {first.bound}"
        if not rest:
            return head
        if rest[0].kind is SpecifierKind.DEFAULT:
            _expect_no_more(rest[1:], node)
            return f"{head}, {rest[0].bound}"
        return f"{head}, {render_brace_list(rest, node)}"

    return render_brace_list(specifiers, node)


def _expect_no_more(specifiers: Sequence[Specifier], node: Optional[Dict[str, Any]]) -> None:
    if specifiers:
        raise InvalidNodeError(
            "No specifiers may follow a default and namespace pair.", node
        )


# ---------------------------------------------------------------- statements


def _normalize_import(node: ImportNode, dialect: str, preserve_quotes: bool) -> ImportDeclaration:
    if isinstance(node, ImportDeclaration):
        return node
    if not isinstance(node, dict):
        raise InvalidNodeError(f"Expected an import node, got {type(node).__name__}.")
    adapter = get_adapter(dialect, node, preserve_quotes=preserve_quotes)
    return adapter.normalize_import(node)


def _normalize_export(node: ExportNode, dialect: str, preserve_quotes: bool) -> ExportDeclaration:
    if isinstance(node, ExportDeclaration):
        return node
    if not isinstance(node, dict):
        raise InvalidNodeError(f"Expected an export node, got {type(node).__name__}.")
    adapter = get_adapter(dialect, node, preserve_quotes=preserve_quotes)
    return adapter.normalize_export(node)


def render_import(
    node: ImportNode, dialect: str = "auto", *, preserve_quotes: bool = False
) -> str:
    """
    Render an import node as `import <bindings> from "<module>";`.

    Args:
        node: A dialect-shaped mapping or a normalized `ImportDeclaration`.
        dialect: ``acorn``, ``proposal``, ``estree`` or ``auto``.
        preserve_quotes: Keep the literal's original quoting (estree only).

    Raises:
        InvalidNodeError: The specifier list is empty or malformed, or the
            source clause is missing.
    """
    declaration = _normalize_import(node, dialect, preserve_quotes)
    if not declaration.specifiers:
        raise InvalidNodeError("Import has no specifiers.", declaration.node)
    if declaration.source is None:
        raise InvalidNodeError("Import has no source clause.", declaration.node)
    clause = render_specifier_list(declaration.specifiers, declaration.node)
    return "import " + clause + render_from_clause(declaration.source)


def render_export(
    node: ExportNode,
    dialect: str = "auto",
    *,
    render_declaration: Optional[NodeRenderer] = None,
    render_expression: Optional[NodeRenderer] = None,
    preserve_quotes: bool = False,
) -> str:
    """
    Render an export node.

    Nested declarations go through `render_declaration`, default exports
    through `render_expression`; both return text without a trailing `;`.

    Raises:
        InvalidNodeError: Empty specifier list, declaration mixed with
            specifiers, misplaced markers, or `export *` without a source.
    """
    export = _normalize_export(node, dialect, preserve_quotes)
    specifiers = export.specifiers
    owner = export.node

    if export.declaration is not None:
        if any(not item.is_marker for item in specifiers):
            raise InvalidNodeError(
                "Export cannot carry both a declaration and specifiers.", owner
            )
        if export.is_default:
            expression = (render_expression or reject_nested_node)(export.declaration)
            return f"export default {expression};"
        rendered = (render_declaration or reject_nested_node)(export.declaration)
        return f"export {rendered};"

    if not specifiers:
        raise InvalidNodeError("Export has neither a declaration nor specifiers.", owner)

    first = specifiers[0]
    if first.kind is SpecifierKind.NAMESPACE:
        if len(specifiers) > 1:
            raise InvalidNodeError("Namespace export takes no other specifiers.", owner)
        if export.source is None:
            raise InvalidNodeError("Namespace export requires a source clause.", owner)
        head = "export *"
        if first.bound not in (NAMESPACE_SENTINEL, first.local):
            head += f" as {first.bound}"
        return head + render_from_clause(export.source)

    if first.kind is SpecifierKind.DEFAULT:
        raise InvalidNodeError("Default export requires a declaration.", owner)

    text = "export " + render_brace_list(specifiers, owner)
    if export.source is not None:
        return text + render_from_clause(export.source)
    return text + ";"


# ------------------------------------------------------------------ visitor


class ModuleRenderer:
    """Visitor rendering import/export statements of a Program node."""

    def __init__(self, options: Optional[RenderOptions] = None):
        self.options = options or RenderOptions()

    def _format_location(self, node: Optional[Dict[str, Any]]) -> str:
        if not node or not isinstance(node, dict):
            return ""
        loc_meta = node.get("loc") or {}
        start = loc_meta.get("start") or {}
        line = start.get("line")
        column = start.get("column")
        if line is None or column is None:
            return ""
        return f" (line {line}, column {column})"

    def render_program(self, program: Dict[str, Any]) -> RenderResult:
        """Render every module statement; other statements are reported and skipped."""
        if not isinstance(program, dict) or program.get("type") != "Program":
            raise InvalidNodeError("Expected Program node at the root.", program)
        statements: List[str] = []
        diagnostics: List[str] = []
        for statement in program.get("body", []):
            if not isinstance(statement, dict):
                raise InvalidNodeError(
                    f"Expected a statement node, got {type(statement).__name__}.", program
                )
            handler = self._handler_for(statement)
            if handler is None:
                loc = self._format_location(statement)
                diagnostics.append(
                    f"Skipped non-module statement: {statement.get('type')}{loc}"
                )
                continue
            statements.append(handler(statement))
        return RenderResult(statements=statements, diagnostics=diagnostics)

    def render_statement(self, node: Dict[str, Any]) -> str:
        handler = self._handler_for(node)
        if handler is None:
            raise InvalidNodeError(
                f"Unsupported statement node: {node.get('type')}", node
            )
        return handler(node)

    def _handler_for(self, node: Any):
        if not isinstance(node, dict):
            return None
        return getattr(self, f"_render_stmt_{node.get('type')}", None)

    # ----------------------------------------------------------- statement nodes

    def _render_stmt_ImportDeclaration(self, node: Dict[str, Any]) -> str:
        return render_import(
            node, self.options.dialect, preserve_quotes=self.options.preserve_quotes
        )

    def _render_export(self, node: Dict[str, Any]) -> str:
        return render_export(
            node,
            self.options.dialect,
            render_declaration=self.options.render_declaration,
            render_expression=self.options.render_expression,
            preserve_quotes=self.options.preserve_quotes,
        )

    _render_stmt_ExportDeclaration = _render_export
    _render_stmt_ExportNamedDeclaration = _render_export
    _render_stmt_ExportDefaultDeclaration = _render_export
    _render_stmt_ExportAllDeclaration = _render_export


__all__ = [
    "ModuleRenderer",
    "RenderOptions",
    "RenderResult",
    "quote_string",
    "render_brace_list",
    "render_export",
    "render_from_clause",
    "render_import",
    "render_specifier",
    "render_specifier_list",
]
