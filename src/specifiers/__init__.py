"""Normalized import/export specifier model and dialect adapters."""

from .dialects import DIALECTS, DialectAdapter, detect_dialect, get_adapter
from .model import (
    ExportDeclaration,
    ImportDeclaration,
    InvalidNodeError,
    SourceClause,
    Specifier,
    SpecifierKind,
    UnsupportedDialectError,
)

__all__ = [
    "DIALECTS",
    "DialectAdapter",
    "ExportDeclaration",
    "ImportDeclaration",
    "InvalidNodeError",
    "SourceClause",
    "Specifier",
    "SpecifierKind",
    "UnsupportedDialectError",
    "detect_dialect",
    "get_adapter",
]
