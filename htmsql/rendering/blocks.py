"""Render functions for each block type."""

from __future__ import annotations

from typing import TYPE_CHECKING

from htmsql.rendering.elements import Element, h
from htmsql.rendering.registry import register_renderer
from htmsql.schemas.blocks import (
    CardGridPayload,
    CodeSectionPayload,
    ContentPayload,
    CtaPayload,
    FaqPayload,
    FeatureGridPayload,
    FooterPayload,
    HeroPayload,
    NavPayload,
    StatsPayload,
    StepsPayload,
)

if TYPE_CHECKING:
    from htmsql.schemas.blocks import Action, HeroCard, Link

DEFAULT_BRAND = "HTMSQL"
DEFAULT_HOME_HREF = "index.html"


def button(action: Action, fallback_style: str = "secondary") -> Element:
    style = action.style or fallback_style
    return h(
        "a",
        action.label or "Learn more",
        class_=f"btn {style}",
        href=action.href or "#",
    )


def link_anchor(link: Link) -> Element:
    return h("a", link.label or "Link", href=link.href or "#")


def paragraphs(body: str | list[str] | None) -> list[Element]:
    """One ``<p>`` per string; a bare string is a single paragraph."""
    if not body:
        return []
    texts = body if isinstance(body, list) else [body]
    return [h("p", text) for text in texts]


def section_heading(heading: str, lead: str | None) -> Element:
    return h("div", h("h2", heading), h("p", lead) if lead else None, class_="section-heading")


@register_renderer("nav", NavPayload)
def render_nav(payload: NavPayload) -> Element:
    logo = h(
        "a",
        payload.logo or DEFAULT_BRAND,
        class_="logo",
        href=payload.logo_href or DEFAULT_HOME_HREF,
    )
    links = h("div", *(link_anchor(link) for link in payload.links), class_="nav-links")
    actions = h("div", *(button(action) for action in payload.actions), class_="nav-actions")
    return h("header", h("nav", logo, links, actions, class_="nav container"), class_="site-header")


def _hero_card(card: HeroCard) -> Element:
    header = h(
        "div",
        h("span", card.header.left or "app.htmsql"),
        h("span", card.header.right or "Live", class_="pill"),
        class_="card-header",
    )
    code = h("pre", h("code", card.code or ""), class_="code-block")
    footer = h(
        "div",
        *(h("div", h("strong", item.value), h("span", item.label)) for item in card.footer),
        class_="card-footer",
    )
    return h("div", header, code, footer, class_="hero-card")


@register_renderer("hero", HeroPayload)
def render_hero(payload: HeroPayload) -> Element:
    content = h("div", class_="hero-content")
    if payload.badge:
        content.append(h("span", payload.badge, class_="badge"))
    content.append(h("h1", payload.title or DEFAULT_BRAND))
    if payload.lead:
        content.append(h("p", payload.lead, class_="lead"))
    if payload.actions:
        content.append(
            h("div", *(button(action) for action in payload.actions), class_="hero-actions")
        )
    if payload.meta:
        content.append(h("div", *(h("span", item) for item in payload.meta), class_="hero-meta"))

    css_class = "hero container" if payload.card else "hero container hero-simple"
    section = h("section", content, class_=css_class)
    if payload.card:
        section.append(_hero_card(payload.card))
    return section


@register_renderer("stats", StatsPayload)
def render_stats(payload: StatsPayload) -> Element:
    return h(
        "section",
        *(
            h("div", h("h3", item.value), h("p", item.label), class_="stat-card")
            for item in payload.items
        ),
        class_="stats container",
    )


@register_renderer("feature-grid", FeatureGridPayload)
def render_feature_grid(payload: FeatureGridPayload) -> Element:
    grid = h(
        "div",
        *(
            h("article", h("h3", item.title), h("p", item.body), class_="feature-card")
            for item in payload.items
        ),
        class_="feature-grid",
    )
    return h(
        "section",
        section_heading(payload.heading or "Features", payload.lead),
        grid,
        class_="features container",
    )


@register_renderer("content", ContentPayload)
def render_content(payload: ContentPayload) -> Element:
    return h(
        "section",
        h("h2", payload.heading or "Overview"),
        *paragraphs(payload.body),
        class_="content-section container",
    )


@register_renderer("card-grid", CardGridPayload)
def render_card_grid(payload: CardGridPayload) -> Element:
    grid = h("div", class_="card-grid")
    for item in payload.items:
        card = h("article", h("h3", item.title), h("p", item.body), class_="card")
        if item.bullets:
            card.append(h("ul", *(h("li", bullet) for bullet in item.bullets)))
        grid.append(card)
    return h(
        "section",
        section_heading(payload.heading or "Highlights", payload.lead),
        grid,
        class_="card-grid-section container",
    )


@register_renderer("steps", StepsPayload)
def render_steps(payload: StepsPayload) -> Element:
    steps = h(
        "div",
        *(
            h(
                "div",
                h("span", f"{index:02d}", class_="step-number"),
                h("div", h("h3", item.title), h("p", item.body)),
                class_="step",
            )
            for index, item in enumerate(payload.items, start=1)
        ),
        class_="step-list",
    )
    return h("section", h("h2", payload.heading or "Steps"), steps, class_="steps container")


@register_renderer("code-section", CodeSectionPayload)
def render_code_section(payload: CodeSectionPayload) -> Element:
    return h(
        "section",
        h("h2", payload.heading or "Example"),
        *paragraphs(payload.body),
        h("pre", h("code", payload.code or ""), class_="code-block"),
        class_="code-section container",
    )


@register_renderer("faq", FaqPayload)
def render_faq(payload: FaqPayload) -> Element:
    grid = h(
        "div",
        *(
            h("article", h("h3", item.question), h("p", item.answer), class_="faq-item")
            for item in payload.items
        ),
        class_="faq-grid",
    )
    return h("section", h("h2", payload.heading or "FAQ"), grid, class_="faq container")


@register_renderer("cta", CtaPayload)
def render_cta(payload: CtaPayload) -> Element:
    content = h("div", h("h2", payload.heading or "Get started"), h("p", payload.body or ""))
    actions = h(
        "div",
        *(button(action, fallback_style="primary") for action in payload.actions),
        class_="cta-actions",
    )
    return h("section", h("div", content, actions, class_="cta-card container"), class_="cta")


@register_renderer("footer", FooterPayload)
def render_footer(payload: FooterPayload) -> Element:
    brand = h(
        "div",
        h("a", payload.brand or DEFAULT_BRAND, href=payload.brand_href or DEFAULT_HOME_HREF),
        h("p", payload.tagline or ""),
    )
    links = h("div", *(link_anchor(link) for link in payload.links), class_="footer-links")
    return h("footer", h("div", brand, links, class_="container footer-inner"), class_="footer")
