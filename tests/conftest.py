"""Shared test fixtures for the HTMSQL site."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from htmsql.config import Settings
from htmsql.main import create_app
from htmsql.runtime import SiteRuntime
from htmsql.services.migration_service import run_startup_migrations
from htmsql.storage.blob_store import MemoryBlobStore
from htmsql.storage.content_store import ContentStore

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterator
    from pathlib import Path


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings with a temporary data directory."""
    return Settings(
        _env_file=None,
        debug=True,
        data_dir=tmp_path / "data",
    )


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def store() -> Iterator[ContentStore]:
    """An empty content store with the schema in place."""
    content_store = ContentStore.open()
    content_store.ensure_schema()
    yield content_store
    content_store.close()


@pytest.fixture
def seeded_store(store: ContentStore, blob_store: MemoryBlobStore) -> ContentStore:
    """A content store after the full startup migration run."""
    run_startup_migrations(store, blob_store)
    return store


@pytest.fixture
async def runtime(test_settings: Settings) -> AsyncGenerator[SiteRuntime]:
    """A started runtime persisting under the temporary data directory."""
    site_runtime = SiteRuntime(test_settings)
    await site_runtime.start()
    yield site_runtime
    await site_runtime.close()


@pytest.fixture
async def client(runtime: SiteRuntime) -> AsyncGenerator[AsyncClient]:
    """HTTP client for an app whose runtime was started manually.

    ASGITransport does not trigger the lifespan, so startup happens in the
    ``runtime`` fixture instead.
    """
    app = create_app(runtime.settings, runtime=runtime)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
