"""Page service: compose stored blocks into rendered pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from htmsql.models import GLOBAL_SLUG
from htmsql.rendering import Element, h, render_block
from htmsql.schemas.blocks import load_payload
from htmsql.schemas.page import PageSummary

if TYPE_CHECKING:
    from htmsql.config import Settings
    from htmsql.storage.content_store import ContentStore

logger = logging.getLogger(__name__)

_BLOCKS_SQL = (
    "SELECT id, type, payload FROM blocks WHERE page_slug IN (?, ?) "
    "ORDER BY block_order ASC, id ASC"
)
ERROR_PREFIX = "Failed to load HTMSQL content"


@dataclass
class ComposedPage:
    """A page's rendered blocks, split into header, main region and footer."""

    slug: str
    title: str | None
    main: Element
    navs: list[Element] = field(default_factory=list)
    footer: Element | None = None

    def elements(self) -> list[Element]:
        """Top-level elements in document order: nav, main, footer."""
        ordered = [*self.navs, self.main]
        if self.footer is not None:
            ordered.append(self.footer)
        return ordered

    def to_html(self) -> str:
        return "".join(element.to_html() for element in self.elements())


def compose_page(store: ContentStore, slug: str) -> ComposedPage:
    """Render every block of ``slug`` plus the global scope.

    Blocks follow stored order, except that nav blocks always precede the main
    region and the footer always follows it. Unknown block types are skipped.
    """
    main = h("main", class_="page")
    page = ComposedPage(slug=slug, title=store.page_title(slug), main=main)

    for block in store.rows(_BLOCKS_SQL, [GLOBAL_SLUG, slug]):
        block_type = block["type"]
        payload = load_payload(block["payload"], context=f"{block_type} block #{block['id']}")
        element = render_block(block_type, payload)
        if element is None:
            logger.debug("Skipping block #%s with unknown type %r", block["id"], block_type)
            continue
        if block_type == "nav":
            page.navs.append(element)
        elif block_type == "footer":
            page.footer = element
        else:
            main.append(element)
    return page


def list_pages(store: ContentStore) -> list[PageSummary]:
    rows = store.rows("SELECT slug, title FROM pages ORDER BY rowid")
    return [PageSummary(slug=row["slug"], title=row["title"]) for row in rows]


def _document(title: str, body: Element, settings: Settings) -> str:
    head = h(
        "head",
        h("meta", charset="utf-8"),
        h("meta", name="viewport", content="width=device-width, initial-scale=1"),
        h("title", title),
        h("link", rel="stylesheet", href=settings.stylesheet_href),
    )
    return "<!DOCTYPE html>\n" + h("html", head, body, lang="en").to_html()


def render_document(page: ComposedPage, settings: Settings) -> str:
    """Serialize a composed page into a complete HTML document."""
    app_root = h("div", *page.elements(), id="app")
    body = h("body", app_root, **{"data-page": page.slug})
    return _document(page.title or settings.site_title, body, settings)


def render_error_document(message: str, settings: Settings, slug: str | None = None) -> str:
    """A document whose app root holds only a plaintext load error."""
    app_root = h("div", f"{ERROR_PREFIX}: {message}", id="app")
    body = h("body", app_root, **{"data-page": slug or settings.default_page})
    return _document(settings.site_title, body, settings)
