"""Outcome of a seed or content fixup step."""

from __future__ import annotations

from enum import StrEnum


class PassResult(StrEnum):
    """What a startup step did to the content store."""

    UNCHANGED = "unchanged"
    CHANGED = "changed"
    NOT_APPLICABLE = "not-applicable"
