"""
Front-end integration stitching together module parsing and statement rendering.

`run_frontend` accepts raw JavaScript module source, invokes the parser to
obtain an ESTree AST and regenerates every import/export statement. Nested
declarations (`export function f() {}`) and default export expressions are
rendered by slicing their original text, so only the module syntax itself is
re-synthesised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from codegen import ModuleRenderer, RenderOptions, RenderResult, SourceSliceRenderer
from parser import ParseResult, parse_module


@dataclass(frozen=True)
class FrontEndResult:
    """Combined output from the parsing and rendering pipeline."""

    parse: ParseResult
    render: Optional[RenderResult]

    @property
    def has_ast(self) -> bool:
        return self.parse.ast is not None

    @property
    def diagnostics(self):
        """Aggregate parse recovery errors and rendering notes."""
        diagnostics = [error.description for error in self.parse.errors]
        if self.render:
            diagnostics.extend(self.render.diagnostics)
        return diagnostics


def run_frontend(
    source: str,
    *,
    source_name: str = "<input>",
    tolerant: bool = True,
    preserve_quotes: bool = False,
) -> FrontEndResult:
    """
    Parse module source and render its import/export statements.

    Args:
        source: Raw JavaScript module source text.
        source_name: Identifier used in diagnostics, e.g. file path.
        tolerant: Forwarded to parser; when True esprima attempts recovery.
        preserve_quotes: Keep the original quoting of module specifiers.

    Returns:
        FrontEndResult with the parser output and, when an AST was produced,
        the rendered statements.

    Raises:
        InvalidNodeError: An import/export statement cannot be rendered.
    """
    parse_result = parse_module(source, source_name=source_name, tolerant=tolerant)

    render_result: Optional[RenderResult] = None
    if parse_result.ast is not None:
        slicer = SourceSliceRenderer(source)
        options = RenderOptions(
            dialect="estree",
            render_declaration=slicer,
            render_expression=slicer,
            preserve_quotes=preserve_quotes,
        )
        render_result = ModuleRenderer(options).render_program(parse_result.ast)

    return FrontEndResult(parse=parse_result, render=render_result)


__all__ = ["FrontEndResult", "run_frontend"]
