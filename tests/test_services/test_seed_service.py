"""Tests for seeding the content catalogue."""

from __future__ import annotations

import json

from htmsql.content.catalogue import BLOCKS, PAGES, SeedBlock, SeedPage
from htmsql.services.pass_result import PassResult
from htmsql.services.seed_service import seed_if_empty
from htmsql.storage.content_store import ContentStore


class TestSeedIfEmpty:
    def test_seeds_empty_store(self, store: ContentStore) -> None:
        with store.session() as session:
            assert seed_if_empty(session) is PassResult.CHANGED

        slugs = [row["slug"] for row in store.rows("SELECT slug FROM pages ORDER BY rowid")]
        assert slugs == ["home", "docs", "launch", "start", "generate", "sales"]
        assert store.count("blocks") == len(BLOCKS)

    def test_second_run_is_noop(self, store: ContentStore) -> None:
        with store.session() as session:
            seed_if_empty(session)
        before = store.export_bytes()

        with store.session() as session:
            assert seed_if_empty(session) is PassResult.UNCHANGED
        assert store.export_bytes() == before

    def test_existing_page_blocks_seeding(self, store: ContentStore) -> None:
        store.mutate("INSERT INTO pages (slug, title) VALUES (?, ?)", ["custom", "Custom"])
        with store.session() as session:
            assert seed_if_empty(session) is PassResult.UNCHANGED
        assert store.count("pages") == 1
        assert store.count("blocks") == 0

    def test_global_nav_and_footer_seeded(self, store: ContentStore) -> None:
        with store.session() as session:
            seed_if_empty(session)
        types = {
            row["type"]
            for row in store.rows("SELECT type FROM blocks WHERE page_slug = 'global'")
        }
        assert {"nav", "footer"} <= types

    def test_block_ids_follow_catalogue_order(self, store: ContentStore) -> None:
        with store.session() as session:
            seed_if_empty(session)
        rows = store.rows("SELECT page_slug, block_order, type FROM blocks ORDER BY id")
        assert [(r["page_slug"], r["block_order"], r["type"]) for r in rows] == [
            (b.page_slug, b.order, b.type) for b in BLOCKS
        ]

    def test_payloads_stored_as_json(self, store: ContentStore) -> None:
        with store.session() as session:
            seed_if_empty(session)
        raw = store.scalar("SELECT payload FROM blocks WHERE page_slug = 'home' AND type = 'hero'")
        assert json.loads(raw)["title"].startswith("HTMSQL")

    def test_custom_catalogue(self, store: ContentStore) -> None:
        pages = (SeedPage("only", "Only page"),)
        blocks = (SeedBlock("only", 10, "content", {"heading": "Hi"}),)
        with store.session() as session:
            assert seed_if_empty(session, pages, blocks) is PassResult.CHANGED
        assert store.page_title("only") == "Only page"
        assert store.count("blocks") == 1


class TestCatalogue:
    def test_every_block_targets_known_scope(self) -> None:
        known = {page.slug for page in PAGES} | {"global"}
        assert all(block.page_slug in known for block in BLOCKS)

    def test_every_page_has_blocks(self) -> None:
        used = {block.page_slug for block in BLOCKS}
        assert all(page.slug in used for page in PAGES)
