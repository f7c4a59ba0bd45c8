"""Startup migrations: schema, seeding and idempotent content fixups.

Every fixup pass targets one block of the global scope, computes a candidate
payload from the stored one and writes it back only when it differs. Passes
are safe to re-run on every startup. They must run in ``FIXUP_PASSES`` order,
since the nav passes touch the same ``actions`` field.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from htmsql.content.catalogue import DEFAULT_NAV_ACTIONS, DEFAULT_NAV_LINKS
from htmsql.exceptions import PersistError
from htmsql.models import GLOBAL_SLUG, Block
from htmsql.schemas.blocks import dump_payload, load_payload
from htmsql.services.pass_result import PassResult
from htmsql.services.seed_service import seed_if_empty

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session

    from htmsql.storage.blob_store import BlobStore
    from htmsql.storage.content_store import ContentStore

logger = logging.getLogger(__name__)

Payload = dict[str, Any]

DEFAULT_HOME_HREF = "index.html"
DEPRECATED_NAV_TERMS: tuple[str, ...] = ("changelog",)

# (keywords, href) in precedence order; the first match wins.
_LINK_TARGETS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("feature",), "index.html#features"),
    (("why", "performance"), "index.html#stats"),
    (("start", "get"), "index.html#cta"),
)
_ACTION_TARGETS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("launch",), "launch.html"),
    (("docs",), "docs.html"),
    (("start",), "start.html"),
)


def _text(value: Any) -> str:
    if not value:
        return ""
    return str(value).strip()


def infer_href(
    label: str,
    targets: tuple[tuple[tuple[str, ...], str], ...],
    fallback: str = DEFAULT_HOME_HREF,
) -> str:
    """Pick a link target from keywords in the label."""
    lowered = label.lower()
    for keywords, href in targets:
        if any(keyword in lowered for keyword in keywords):
            return href
    return fallback


def _mentions_deprecated(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    haystacks = (_text(entry.get("label")).lower(), _text(entry.get("href")).lower())
    return any(term in haystack for term in DEPRECATED_NAV_TERMS for haystack in haystacks)


def _normalize_entries(
    entries: list[Any],
    default_label: str,
    targets: tuple[tuple[tuple[str, ...], str], ...],
) -> list[Payload]:
    normalized: list[Payload] = []
    for entry in entries:
        updated: Payload = dict(entry) if isinstance(entry, dict) else {}
        label = _text(updated.get("label")) or default_label
        href = _text(updated.get("href")) or infer_href(label, targets)
        updated["label"] = label
        updated["href"] = href
        normalized.append(updated)
    return normalized


def fix_nav_logo_link(payload: Payload) -> Payload:
    if not payload.get("logoHref"):
        payload["logoHref"] = DEFAULT_HOME_HREF
    return payload


def fix_footer_brand_link(payload: Payload) -> Payload:
    if not payload.get("brandHref"):
        payload["brandHref"] = DEFAULT_HOME_HREF
    return payload


def fix_nav_actions_clean(payload: Payload) -> Payload:
    actions = payload.get("actions")
    if not isinstance(actions, list):
        return payload
    filtered = [action for action in actions if not _mentions_deprecated(action)]
    if len(filtered) != len(actions):
        payload["actions"] = filtered
    return payload


def fix_nav_links_valid(payload: Payload) -> Payload:
    links = payload.get("links")
    if isinstance(links, list) and links:
        payload["links"] = _normalize_entries(links, "Link", _LINK_TARGETS)
    else:
        payload["links"] = [dict(link) for link in DEFAULT_NAV_LINKS]

    actions = payload.get("actions")
    if isinstance(actions, list) and actions:
        payload["actions"] = _normalize_entries(actions, "Action", _ACTION_TARGETS)
    else:
        payload["actions"] = [dict(action) for action in DEFAULT_NAV_ACTIONS]
    return payload


def _global_block(session: Session, block_type: str) -> Block | None:
    stmt = (
        select(Block)
        .where(Block.page_slug == GLOBAL_SLUG, Block.type == block_type)
        .order_by(Block.id)
        .limit(1)
    )
    return session.scalars(stmt).first()


def _apply_fixup(
    session: Session,
    block_type: str,
    fix: Callable[[Payload], Payload],
) -> PassResult:
    block = _global_block(session, block_type)
    if block is None:
        return PassResult.NOT_APPLICABLE

    original = load_payload(block.payload, context=f"global {block_type} block #{block.id}")
    candidate = fix(copy.deepcopy(original))
    if candidate == original:
        return PassResult.UNCHANGED

    block.payload = dump_payload(candidate)
    session.commit()
    return PassResult.CHANGED


def ensure_nav_logo_link(session: Session) -> PassResult:
    """Give the global nav a logo link target."""
    return _apply_fixup(session, "nav", fix_nav_logo_link)


def ensure_footer_brand_link(session: Session) -> PassResult:
    """Give the global footer a brand link target."""
    return _apply_fixup(session, "footer", fix_footer_brand_link)


def ensure_nav_actions_clean(session: Session) -> PassResult:
    """Drop nav actions that point at deprecated content."""
    return _apply_fixup(session, "nav", fix_nav_actions_clean)


def ensure_nav_links_valid(session: Session) -> PassResult:
    """Guarantee non-empty nav links and actions, each with a label and a target."""
    return _apply_fixup(session, "nav", fix_nav_links_valid)


FIXUP_PASSES: tuple[Callable[[Session], PassResult], ...] = (
    ensure_nav_logo_link,
    ensure_footer_brand_link,
    ensure_nav_actions_clean,
    ensure_nav_links_valid,
)


@dataclass
class MigrationReport:
    """Per-step results of one startup migration run."""

    steps: list[tuple[str, PassResult]] = field(default_factory=list)
    persisted: bool = False

    def record(self, name: str, result: PassResult) -> None:
        self.steps.append((name, result))

    @property
    def changed(self) -> bool:
        return any(result is PassResult.CHANGED for _, result in self.steps)

    @property
    def changed_steps(self) -> list[str]:
        return [name for name, result in self.steps if result is PassResult.CHANGED]

    def result_of(self, name: str) -> PassResult | None:
        return next((result for step, result in self.steps if step == name), None)


def persist_store(store: ContentStore, blob_store: BlobStore) -> bool:
    """Export the store and save it. Save failures are logged, not raised.

    Returns True if the blob was written.
    """
    data = store.export_bytes()
    try:
        blob_store.save(data)
    except PersistError as exc:
        logger.error("Failed to persist content database: %s", exc)
        return False
    return True


def run_startup_migrations(store: ContentStore, blob_store: BlobStore) -> MigrationReport:
    """Ensure schema, seed, run every fixup pass, then persist once if anything changed."""
    store.ensure_schema()
    report = MigrationReport()
    with store.session() as session:
        report.record("seed_if_empty", seed_if_empty(session))
        for fixup in FIXUP_PASSES:
            report.record(fixup.__name__, fixup(session))

    if report.changed:
        logger.info("Content updated by: %s", ", ".join(report.changed_steps))
        report.persisted = persist_store(store, blob_store)
    else:
        logger.info("Content store up to date")
    return report
