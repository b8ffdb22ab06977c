"""
ES module parsing via the Python `esprima` port.

The renderer only needs the ESTree dict plus node ranges (to slice nested
declarations back out of the source) and locations (for diagnostics), so
both are always requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import esprima


@dataclass(frozen=True)
class ParseError:
    """A syntax problem esprima recovered from or failed on."""

    description: str
    line: Optional[int]
    column: Optional[int]


@dataclass(frozen=True)
class ParseResult:
    ast: Optional[dict]
    errors: List[ParseError]
    source_name: str


def _error_from_exception(exc: Any) -> ParseError:
    return ParseError(
        description=getattr(exc, "description", None) or str(exc) or "Failed to parse source.",
        line=getattr(exc, "lineNumber", None),
        column=getattr(exc, "column", None),
    )


def parse_module(
    source: str,
    *,
    source_name: str = "<input>",
    tolerant: bool = True,
) -> ParseResult:
    """
    Parse ES module source into an ESTree dict.

    In tolerant mode a hard failure yields a result without an AST and a
    single error; otherwise `esprima.Error` propagates.
    """
    try:
        program = esprima.parseModule(source, loc=True, range=True, tolerant=tolerant)
    except esprima.Error as exc:
        if not tolerant:
            raise
        return ParseResult(ast=None, errors=[_error_from_exception(exc)], source_name=source_name)

    ast = program.toDict() if hasattr(program, "toDict") else program
    recovered = (ast.get("errors") or []) if isinstance(ast, dict) else []
    errors = [
        ParseError(
            description=error.get("description"),
            line=error.get("lineNumber"),
            column=error.get("column"),
        )
        if isinstance(error, dict)
        else _error_from_exception(error)
        for error in recovered
    ]
    return ParseResult(ast=ast, errors=errors, source_name=source_name)


__all__ = ["ParseError", "ParseResult", "parse_module"]
