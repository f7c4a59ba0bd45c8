"""Integration tests for the HTTP surface."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from htmsql.main import create_app
from htmsql.runtime import SiteRuntime
from htmsql.storage.blob_store import MemoryBlobStore

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from htmsql.config import Settings


@pytest.fixture
async def broken_client(test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Client for an app whose stored database could not be loaded."""
    site = SiteRuntime(test_settings, blob_store=MemoryBlobStore(b"corrupted image " * 64))
    await site.start()
    app = create_app(test_settings, runtime=site)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestPages:
    async def test_list_pages(self, client: AsyncClient) -> None:
        resp = await client.get("/api/pages")
        assert resp.status_code == 200
        pages = resp.json()["pages"]
        assert [page["slug"] for page in pages] == [
            "home",
            "docs",
            "launch",
            "start",
            "generate",
            "sales",
        ]
        assert pages[0] == {"slug": "home", "title": "HTMSQL — HTML + SQL Framework"}

    async def test_root_serves_default_page(self, client: AsyncClient) -> None:
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert 'data-page="home"' in resp.text

    async def test_index_html_is_default_page(self, client: AsyncClient) -> None:
        root = await client.get("/")
        index = await client.get("/index.html")
        assert index.status_code == 200
        assert index.text == root.text

    @pytest.mark.parametrize("slug", ["docs", "launch", "start", "generate", "sales"])
    async def test_each_page_served(self, client: AsyncClient, slug: str) -> None:
        resp = await client.get(f"/{slug}.html")
        assert resp.status_code == 200
        assert f'data-page="{slug}"' in resp.text
        assert '<header class="site-header">' in resp.text
        assert '<footer class="footer">' in resp.text

    async def test_page_name_case_insensitive(self, client: AsyncClient) -> None:
        resp = await client.get("/Docs.html")
        assert resp.status_code == 200
        assert 'data-page="docs"' in resp.text

    async def test_unknown_page_404(self, client: AsyncClient) -> None:
        resp = await client.get("/pricing.html")
        assert resp.status_code == 404

    async def test_invalid_page_name_400(self, client: AsyncClient) -> None:
        resp = await client.get("/a.b.html")
        assert resp.status_code == 400


class TestQuery:
    async def test_select(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/query",
            json={"sql": "SELECT slug, title FROM pages WHERE slug = ?", "params": ["docs"]},
        )
        assert resp.status_code == 200
        assert resp.json() == {"rows": [{"slug": "docs", "title": "HTMSQL Docs"}]}

    async def test_named_params(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/query",
            json={"sql": "SELECT count(*) AS n FROM blocks WHERE type = :t", "params": {"t": "nav"}},
        )
        assert resp.status_code == 200
        assert resp.json()["rows"] == [{"n": 1}]

    async def test_mutation_returns_no_rows(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/query",
            json={"sql": "UPDATE pages SET title = ? WHERE slug = ?", "params": ["D", "docs"]},
        )
        assert resp.status_code == 200
        assert resp.json() == {"rows": []}

    async def test_bad_sql_is_400(self, client: AsyncClient) -> None:
        resp = await client.post("/api/query", json={"sql": "SELEC nonsense"})
        assert resp.status_code == 400
        assert "syntax error" in resp.json()["detail"]

    async def test_empty_sql_is_422(self, client: AsyncClient) -> None:
        resp = await client.post("/api/query", json={"sql": ""})
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["field"] == "sql"

    async def test_edit_then_render(self, client: AsyncClient) -> None:
        await client.post(
            "/api/query",
            json={
                "sql": "UPDATE blocks SET payload = json_set(payload, '$.title', ?) "
                "WHERE page_slug = 'docs' AND type = 'hero'",
                "params": ["Docs, rewritten"],
            },
        )
        resp = await client.post("/api/render")
        assert resp.status_code == 200
        assert "home" in resp.json()["pages"]

        page = await client.get("/docs.html")
        assert "Docs, rewritten" in page.text


class TestQueryConfinement:
    async def test_vacuum_into_rejected(self, client: AsyncClient, tmp_path: Path) -> None:
        target = tmp_path / "outside" / "copy.db"
        target.parent.mkdir()
        resp = await client.post("/api/query", json={"sql": f"VACUUM INTO '{target}'"})
        assert resp.status_code == 400
        assert not target.exists()

    async def test_plain_vacuum_rejected(self, client: AsyncClient) -> None:
        resp = await client.post("/api/query", json={"sql": "VACUUM"})
        assert resp.status_code == 400

    async def test_attach_rejected(self, client: AsyncClient, tmp_path: Path) -> None:
        target = tmp_path / "attached.db"
        resp = await client.post(
            "/api/query", json={"sql": f"ATTACH DATABASE '{target}' AS x"}
        )
        assert resp.status_code == 400
        assert "not authorized" in resp.json()["detail"]
        assert not target.exists()

        follow_up = await client.post("/api/query", json={"sql": "CREATE TABLE x.pwn (a)"})
        assert follow_up.status_code == 400
        assert not target.exists()

    async def test_schema_pragma_rejected(self, client: AsyncClient) -> None:
        resp = await client.post("/api/query", json={"sql": "PRAGMA writable_schema = 1"})
        assert resp.status_code == 400

    async def test_store_still_usable_after_rejection(self, client: AsyncClient) -> None:
        await client.post("/api/query", json={"sql": "VACUUM"})
        resp = await client.post("/api/query", json={"sql": "SELECT count(*) AS n FROM pages"})
        assert resp.json() == {"rows": [{"n": 6}]}


class TestQueryApiGate:
    @staticmethod
    async def _post_query(settings: Settings) -> int:
        site = SiteRuntime(settings, blob_store=MemoryBlobStore())
        await site.start()
        try:
            app = create_app(settings, runtime=site)
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                resp = await ac.post("/api/query", json={"sql": "SELECT 1"})
                pages = await ac.get("/api/pages")
                assert pages.status_code == 200
                return resp.status_code
        finally:
            await site.close()

    async def test_disabled_outside_debug(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"debug": False})
        assert await self._post_query(settings) == 404

    async def test_enabled_by_flag(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"debug": False, "query_api_enabled": True})
        assert await self._post_query(settings) == 200


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["database"] == "ok"


class TestBootstrapFailure:
    async def test_pages_show_load_error(self, broken_client: AsyncClient) -> None:
        resp = await broken_client.get("/")
        assert resp.status_code == 503
        assert "Failed to load HTMSQL content: " in resp.text
        assert 'data-page="home"' in resp.text

    async def test_api_unavailable(self, broken_client: AsyncClient) -> None:
        resp = await broken_client.post("/api/query", json={"sql": "SELECT 1"})
        assert resp.status_code == 503
        assert resp.json() == {"detail": "Content store unavailable"}

    async def test_health_degraded(self, broken_client: AsyncClient) -> None:
        resp = await broken_client.get("/api/health")
        assert resp.json() == {"status": "degraded", "version": "0.1.0", "database": "error"}


class TestLifespan:
    async def test_lifespan_starts_and_closes_runtime(
        self, test_settings: Settings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("htmsql.main._configure_logging", lambda debug: None)
        app = create_app(test_settings)
        site: SiteRuntime = app.state.runtime

        async with app.router.lifespan_context(app):
            assert site.is_ready
            assert site.store is not None
        assert site.store is None

    async def test_invalid_settings_refuse_startup(
        self, test_settings: Settings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("htmsql.main._configure_logging", lambda debug: None)
        settings = test_settings.model_copy(update={"default_page": "Not A Slug"})
        app = create_app(settings)
        with pytest.raises(ValueError, match="Invalid configuration"):
            async with app.router.lifespan_context(app):
                pass
