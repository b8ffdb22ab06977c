"""Source generation for ES module import/export statements."""

from .collaborators import NodeRenderer, SourceSliceRenderer, reject_nested_node
from .renderer import (
    ModuleRenderer,
    RenderOptions,
    RenderResult,
    quote_string,
    render_export,
    render_import,
)

__all__ = [
    "ModuleRenderer",
    "NodeRenderer",
    "RenderOptions",
    "RenderResult",
    "SourceSliceRenderer",
    "quote_string",
    "reject_nested_node",
    "render_export",
    "render_import",
]
