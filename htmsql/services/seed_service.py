"""Seeding of the canonical site content."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from htmsql.content.catalogue import BLOCKS, PAGES
from htmsql.models import Block, Page
from htmsql.schemas.blocks import dump_payload
from htmsql.services.pass_result import PassResult

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from htmsql.content.catalogue import SeedBlock, SeedPage

logger = logging.getLogger(__name__)


def seed_if_empty(
    session: Session,
    pages: tuple[SeedPage, ...] = PAGES,
    blocks: tuple[SeedBlock, ...] = BLOCKS,
) -> PassResult:
    """Insert the content catalogue unless any page already exists.

    Pages and blocks are committed together; block ids follow catalogue order.
    """
    page_count = session.scalar(select(func.count()).select_from(Page)) or 0
    if page_count > 0:
        return PassResult.UNCHANGED

    session.add_all(Page(slug=page.slug, title=page.title) for page in pages)
    session.add_all(
        Block(
            page_slug=block.page_slug,
            block_order=block.order,
            type=block.type,
            payload=dump_payload(block.payload),
        )
        for block in blocks
    )
    session.commit()
    logger.info("Seeded content store: %d pages, %d blocks", len(pages), len(blocks))
    return PassResult.CHANGED
