"""Site runtime: the application context shared by every request.

One runtime is created per process. ``start()`` runs the startup flow
(hydrate, migrate, persist if changed, render the default page) and then
releases everything waiting in ``wait_ready()``. The content store handle is
not safe for concurrent use, so every store access after startup goes through
a single lock.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from htmsql.exceptions import BootstrapError, StoreError
from htmsql.services.migration_service import persist_store, run_startup_migrations
from htmsql.services.page_service import (
    compose_page,
    list_pages,
    render_document,
    render_error_document,
)
from htmsql.storage.blob_store import FileBlobStore, MemoryBlobStore
from htmsql.storage.content_store import ContentStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from htmsql.config import Settings
    from htmsql.schemas.page import PageSummary
    from htmsql.services.migration_service import MigrationReport
    from htmsql.storage.blob_store import BlobStore
    from htmsql.storage.content_store import Params

logger = logging.getLogger(__name__)


def create_blob_store(settings: Settings) -> BlobStore:
    """Build the blob store described by the settings."""
    if settings.ephemeral:
        return MemoryBlobStore()
    return FileBlobStore(settings.data_dir, name=settings.store_name, key=settings.store_key)


class SiteRuntime:
    """Owns the content store and the rendered output of each page."""

    def __init__(self, settings: Settings, blob_store: BlobStore | None = None) -> None:
        self.settings = settings
        self.blob_store = blob_store if blob_store is not None else create_blob_store(settings)
        self.store: ContentStore | None = None
        self.report: MigrationReport | None = None
        self.error: BootstrapError | None = None
        self.rendered: dict[str, str] = {}
        self._ready = asyncio.Event()
        self._lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    async def start(self) -> None:
        """Run the startup flow once. Failures are kept in ``error``, not raised."""
        if self._ready.is_set():
            return
        try:
            async with self._lock:
                await asyncio.to_thread(self._bootstrap)
        except BootstrapError as exc:
            logger.critical("%s", exc)
            self.error = exc
        finally:
            self._ready.set()

    def _bootstrap(self) -> None:
        try:
            self._hydrate_and_migrate()
        except BootstrapError:
            raise
        except Exception as exc:
            raise BootstrapError(f"Unexpected startup failure: {exc}") from exc

    def _hydrate_and_migrate(self) -> None:
        try:
            data = self.blob_store.load()
        except OSError as exc:
            raise BootstrapError(f"Cannot read stored content database: {exc}") from exc

        try:
            store = ContentStore.open(data)
        except StoreError as exc:
            raise BootstrapError(str(exc)) from exc

        default_page = self.settings.default_page
        try:
            self.report = run_startup_migrations(store, self.blob_store)
            self.rendered[default_page] = self._render_page(store, default_page)
        except Exception as exc:
            store.close()
            raise BootstrapError(str(exc)) from exc

        self.store = store
        logger.info(
            "Content store ready (%s)",
            "hydrated from blob" if data else "fresh",
        )

    async def wait_ready(self) -> ContentStore:
        """Block until startup has finished; raise BootstrapError if it failed."""
        await self._ready.wait()
        if self.error is not None:
            raise self.error
        if self.store is None:
            raise BootstrapError("Content store is not initialized")
        return self.store

    async def _locked(self, fn: Callable[[ContentStore], Any]) -> Any:
        store = await self.wait_ready()
        async with self._lock:
            return await asyncio.to_thread(fn, store)

    async def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        """Run an ad-hoc statement, then persist the whole store.

        Read statements return their rows; all others return []. A failed
        statement raises StoreError and nothing is persisted. A failed save is
        logged only.
        """

        def _run(store: ContentStore) -> list[dict[str, Any]]:
            rows = store.execute(sql, params)
            persist_store(store, self.blob_store)
            return rows

        result: list[dict[str, Any]] = await self._locked(_run)
        return result

    async def render(self) -> list[str]:
        """Recompose every cached page (and the default page) from current content."""

        def _run(store: ContentStore) -> list[str]:
            slugs = list(dict.fromkeys([self.settings.default_page, *self.rendered]))
            self.rendered = {slug: self._render_page(store, slug) for slug in slugs}
            return slugs

        slugs: list[str] = await self._locked(_run)
        logger.info("Re-rendered %d page(s)", len(slugs))
        return slugs

    async def page_html(self, slug: str) -> str | None:
        """Rendered document for a page, or None if no such page exists.

        Output is cached until the next ``render()``.
        """

        def _run(store: ContentStore) -> str | None:
            if slug in self.rendered:
                return self.rendered[slug]
            if store.page_title(slug) is None:
                return None
            document = self._render_page(store, slug)
            self.rendered[slug] = document
            return document

        result: str | None = await self._locked(_run)
        return result

    async def pages(self) -> list[PageSummary]:
        result: list[PageSummary] = await self._locked(list_pages)
        return result

    def error_html(self, slug: str | None = None) -> str:
        message = str(self.error) if self.error is not None else "not initialized"
        return render_error_document(message, self.settings, slug)

    def _render_page(self, store: ContentStore, slug: str) -> str:
        return render_document(compose_page(store, slug), self.settings)

    async def close(self) -> None:
        async with self._lock:
            if self.store is not None:
                self.store.close()
                self.store = None
