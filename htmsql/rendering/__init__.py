"""Block rendering: payload records to element trees."""

from htmsql.rendering import blocks as _blocks  # noqa: F401  (registers renderers)
from htmsql.rendering.elements import Element, h
from htmsql.rendering.registry import (
    RENDERERS,
    BlockRenderer,
    list_block_types,
    register_renderer,
    render_block,
)

__all__ = [
    "RENDERERS",
    "BlockRenderer",
    "Element",
    "h",
    "list_block_types",
    "register_renderer",
    "render_block",
]
