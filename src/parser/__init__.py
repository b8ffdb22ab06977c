"""Interfaces for parsing JavaScript module source code."""

from .module_parser import ParseError, ParseResult, parse_module

__all__ = ["ParseError", "ParseResult", "parse_module"]
