"""Typed block payloads.

Payloads are stored as free-form JSON. Each block type gets its own record
with every field optional; decoding coerces stored JSON into the record and
falls back to defaults for fields whose shape is wrong, so renderers never see
malformed data.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from htmsql.exceptions import DecodeError

logger = logging.getLogger(__name__)


class PayloadModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class Link(PayloadModel):
    label: str | None = None
    href: str | None = None


class Action(Link):
    style: str | None = None


class ValueLabel(PayloadModel):
    value: str | None = None
    label: str | None = None


class TitledItem(PayloadModel):
    title: str | None = None
    body: str | None = None


class CardItem(TitledItem):
    bullets: list[str] = Field(default_factory=list, alias="list")


class FaqItem(PayloadModel):
    question: str | None = None
    answer: str | None = None


class CardHeader(PayloadModel):
    left: str | None = None
    right: str | None = None


class HeroCard(PayloadModel):
    header: CardHeader = Field(default_factory=CardHeader)
    code: str | None = None
    footer: list[ValueLabel] = Field(default_factory=list)


class BlockPayload(PayloadModel):
    """Fields shared by every block type."""

    id: str | None = None


class NavPayload(BlockPayload):
    logo: str | None = None
    logo_href: str | None = Field(default=None, alias="logoHref")
    links: list[Link] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)


class HeroPayload(BlockPayload):
    badge: str | None = None
    title: str | None = None
    lead: str | None = None
    actions: list[Action] = Field(default_factory=list)
    meta: list[str] = Field(default_factory=list)
    card: HeroCard | None = None


class StatsPayload(BlockPayload):
    items: list[ValueLabel] = Field(default_factory=list)


class FeatureGridPayload(BlockPayload):
    heading: str | None = None
    lead: str | None = None
    items: list[TitledItem] = Field(default_factory=list)


class ContentPayload(BlockPayload):
    heading: str | None = None
    body: str | list[str] | None = None


class CardGridPayload(BlockPayload):
    heading: str | None = None
    lead: str | None = None
    items: list[CardItem] = Field(default_factory=list)


class StepsPayload(BlockPayload):
    heading: str | None = None
    items: list[TitledItem] = Field(default_factory=list)


class CodeSectionPayload(BlockPayload):
    heading: str | None = None
    body: str | list[str] | None = None
    code: str | None = None


class FaqPayload(BlockPayload):
    heading: str | None = None
    items: list[FaqItem] = Field(default_factory=list)


class CtaPayload(BlockPayload):
    heading: str | None = None
    body: str | None = None
    actions: list[Action] = Field(default_factory=list)


class FooterPayload(BlockPayload):
    brand: str | None = None
    brand_href: str | None = Field(default=None, alias="brandHref")
    tagline: str | None = None
    links: list[Link] = Field(default_factory=list)


PayloadT = TypeVar("PayloadT", bound=BlockPayload)


def parse_payload(raw: str | None) -> dict[str, Any]:
    """Decode stored payload text into a JSON object.

    Empty text decodes to ``{}``. Raises DecodeError for invalid JSON or a
    top-level value that is not an object.
    """
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Payload is not valid JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise DecodeError(f"Payload must be a JSON object, got {type(value).__name__}")
    return value


def load_payload(raw: str | None, *, context: str = "block") -> dict[str, Any]:
    """Like parse_payload, but a malformed payload is logged and treated as empty."""
    try:
        return parse_payload(raw)
    except DecodeError as exc:
        logger.warning("Ignoring malformed payload for %s: %s", context, exc)
        return {}


def dump_payload(payload: Mapping[str, Any]) -> str:
    """Encode a payload for storage."""
    return json.dumps(payload, ensure_ascii=False)


def decode_payload(model: type[PayloadT], payload: Mapping[str, Any]) -> PayloadT:
    """Coerce a JSON object into a typed payload record.

    Top-level fields that fail validation are dropped (so they take their
    defaults) rather than failing the whole block.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        invalid = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        logger.warning(
            "Dropping invalid %s fields: %s", model.__name__, ", ".join(sorted(invalid))
        )

    cleaned = {key: value for key, value in payload.items() if key not in invalid}
    try:
        return model.model_validate(cleaned)
    except ValidationError:
        return model()
