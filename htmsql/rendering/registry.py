"""Block renderer registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, runtime_checkable

from htmsql.schemas.blocks import PayloadT, decode_payload

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from htmsql.rendering.elements import Element
    from htmsql.schemas.blocks import BlockPayload


@runtime_checkable
class BlockRenderer(Protocol):
    """Protocol for one block type's rendering strategy."""

    block_type: str

    def render(self, payload: Mapping[str, Any]) -> Element:
        """Render a decoded JSON payload into an element tree."""
        ...


@dataclass(frozen=True)
class TypedRenderer(Generic[PayloadT]):
    """Renderer that coerces the payload into a typed record before rendering."""

    block_type: str
    payload_model: type[PayloadT]
    render_fn: Callable[[PayloadT], Element]

    def render(self, payload: Mapping[str, Any]) -> Element:
        record = decode_payload(self.payload_model, payload)
        element = self.render_fn(record)
        _apply_block_metadata(element, record)
        return element


RENDERERS: dict[str, BlockRenderer] = {}


def register_renderer(
    block_type: str, payload_model: type[PayloadT]
) -> Callable[[Callable[[PayloadT], Element]], Callable[[PayloadT], Element]]:
    """Register a render function for a block type.

    Raises ValueError if the type already has a renderer.
    """

    def decorator(fn: Callable[[PayloadT], Element]) -> Callable[[PayloadT], Element]:
        if block_type in RENDERERS:
            msg = f"Renderer already registered for block type {block_type!r}"
            raise ValueError(msg)
        RENDERERS[block_type] = TypedRenderer(block_type, payload_model, fn)
        return fn

    return decorator


def render_block(block_type: str, payload: Mapping[str, Any]) -> Element | None:
    """Render one block, or return None for an unknown block type."""
    renderer = RENDERERS.get(block_type)
    if renderer is None:
        return None
    return renderer.render(payload)


def list_block_types() -> list[str]:
    """Return the registered block type tags."""
    return list(RENDERERS.keys())


def _apply_block_metadata(element: Element, payload: BlockPayload) -> None:
    if payload.id:
        element.attrs["id"] = payload.id
