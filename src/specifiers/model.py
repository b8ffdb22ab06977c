"""
Normalized view of ES module import/export nodes.

Each supported AST dialect tags default and namespace specifiers differently.
The dialect adapters convert caller-supplied nodes into the immutable types
below so the renderer only ever inspects `SpecifierKind`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class InvalidNodeError(ValueError):
    """Raised when an import/export node violates its structural invariants."""

    def __init__(self, message: str, node: Optional[Dict[str, Any]] = None):
        loc = ""
        if node and isinstance(node, dict):
            loc_meta = node.get("loc") or {}
            start = loc_meta.get("start") or {}
            line = start.get("line")
            column = start.get("column")
            if line is not None and column is not None:
                loc = f" (line {line}, column {column})"
        super().__init__(f"{message}{loc}")
        self.node = node


class UnsupportedDialectError(InvalidNodeError):
    """Raised for dialect names no adapter is registered for."""


class SpecifierKind(str, Enum):
    PLAIN = "plain"
    DEFAULT = "default"
    NAMESPACE = "namespace"


@dataclass(frozen=True)
class Specifier:
    """A single binding entry of an import/export clause."""

    local: str
    bound: str
    kind: SpecifierKind = SpecifierKind.PLAIN

    @property
    def is_marker(self) -> bool:
        return self.kind is not SpecifierKind.PLAIN


@dataclass(frozen=True)
class SourceClause:
    """Module path of an import/export.

    `raw` is a pre-formatted ` from ...;` fragment and wins over `value`.
    """

    value: Optional[str] = None
    raw: Optional[str] = None


@dataclass(frozen=True)
class ImportDeclaration:
    specifiers: Tuple[Specifier, ...]
    source: Optional[SourceClause]
    node: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ExportDeclaration:
    specifiers: Tuple[Specifier, ...]
    source: Optional[SourceClause] = None
    declaration: Any = None
    default: bool = False
    node: Optional[Dict[str, Any]] = None

    @property
    def is_default(self) -> bool:
        if self.default:
            return True
        return bool(self.specifiers) and self.specifiers[0].kind is SpecifierKind.DEFAULT


__all__ = [
    "ExportDeclaration",
    "ImportDeclaration",
    "InvalidNodeError",
    "SourceClause",
    "Specifier",
    "SpecifierKind",
    "UnsupportedDialectError",
]
