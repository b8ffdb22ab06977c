"""
Command-line interface for regenerating the import/export statements of ES modules.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

import esprima

from frontend import run_frontend
from specifiers import InvalidNodeError


def _format_location(line: int | None, column: int | None) -> str:
    if line is None:
        return ""
    if column is None:
        return f":{line}"
    return f":{line}:{column}"


def _print_diagnostics(messages: List[str]) -> None:
    if not messages:
        return
    for message in messages:
        sys.stderr.write(message + "\n")


def _collect_diagnostics(frontend_result) -> List[str]:
    diagnostics: List[str] = []
    source_name = frontend_result.parse.source_name

    for error in frontend_result.parse.errors:
        loc = _format_location(error.line, error.column)
        diagnostics.append(f"ERROR {source_name}{loc}: {error.description}")

    if frontend_result.render:
        for message in frontend_result.render.diagnostics:
            diagnostics.append(f"INFO {source_name}: {message}")

    return diagnostics


def render_command(args: argparse.Namespace) -> int:
    input_path = Path(args.input).resolve()
    if not input_path.exists():
        sys.stderr.write(f"ERROR: Input file not found: {input_path}\n")
        return 1

    try:
        source = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        sys.stderr.write(f"ERROR: Failed to read {input_path}: {exc}\n")
        return 1

    try:
        frontend_result = run_frontend(
            source,
            source_name=str(input_path),
            tolerant=not args.strict,
            preserve_quotes=args.keep_quotes,
        )
    except esprima.Error as exc:
        sys.stderr.write(f"ERROR: Parsing failed: {exc}\n")
        return 1
    except InvalidNodeError as exc:
        sys.stderr.write(f"ERROR: Rendering failed: {exc}\n")
        return 1

    if frontend_result.render is None:
        sys.stderr.write("ERROR: Parsing failed; no AST produced.\n")
        for error in frontend_result.parse.errors:
            loc = _format_location(error.line, error.column)
            sys.stderr.write(f"  {error.description}{loc}\n")
        return 1

    output = frontend_result.render.source
    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    _print_diagnostics(_collect_diagnostics(frontend_result))

    return 1 if frontend_result.parse.errors else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esmodgen", description="Regenerate ES module import/export statements"
    )
    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render", help="Render the import/export statements of a JS module"
    )
    render_parser.add_argument("input", help="Path to the JavaScript module")
    render_parser.add_argument(
        "--out",
        help="Output file path (defaults to standard output)",
    )
    render_parser.add_argument(
        "--strict",
        action="store_true",
        help="Disable tolerant parsing; the first syntax error aborts.",
    )
    render_parser.add_argument(
        "--keep-quotes",
        action="store_true",
        help="Keep the original quoting of module specifiers.",
    )
    render_parser.set_defaults(func=render_command)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
