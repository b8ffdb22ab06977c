"""
Declaration and expression renderers consumed by the export renderer.

`export function f() {}` and `export default <expr>` nest a full declaration
or expression node. Rendering those is the host toolchain's job, so the
export renderer takes two callables mapping a node to source text without a
trailing semicolon. `SourceSliceRenderer` is a ready-made implementation for
nodes parsed with ranges enabled: it reuses the original source text.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from specifiers import InvalidNodeError

NodeRenderer = Callable[[Any], str]


def reject_nested_node(node: Any) -> str:
    """Default collaborator: nested declarations need an explicit renderer."""
    raise InvalidNodeError(
        "No renderer configured for nested declaration/expression.",
        node if isinstance(node, dict) else None,
    )


class SourceSliceRenderer:
    """Render a node by slicing its `range` out of the original source."""

    def __init__(self, source: str):
        self.source = source

    def __call__(self, node: Dict[str, Any]) -> str:
        if not isinstance(node, dict):
            raise InvalidNodeError("Cannot slice source for a non-mapping node.")
        span = node.get("range")
        if not span or len(span) != 2:
            raise InvalidNodeError("Node has no source range.", node)
        start, end = span
        if not 0 <= start <= end <= len(self.source):
            raise InvalidNodeError("Node range lies outside the source text.", node)
        text = self.source[start:end].rstrip()
        # The export renderer appends the statement terminator itself.
        while text.endswith(";"):
            text = text[:-1].rstrip()
        return text


__all__ = ["NodeRenderer", "SourceSliceRenderer", "reject_nested_node"]
