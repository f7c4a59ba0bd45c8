"""Canonical site content inserted into an empty content store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SeedPage:
    slug: str
    title: str


@dataclass(frozen=True)
class SeedBlock:
    page_slug: str
    order: int
    type: str
    payload: dict[str, Any] = field(default_factory=dict)


PAGES: tuple[SeedPage, ...] = (
    SeedPage("home", "HTMSQL — HTML + SQL Framework"),
    SeedPage("docs", "HTMSQL Docs"),
    SeedPage("launch", "Launch HTMSQL"),
    SeedPage("start", "Start Building"),
    SeedPage("generate", "Generate Project"),
    SeedPage("sales", "Talk to Sales"),
)

DEFAULT_NAV_LINKS: tuple[dict[str, str], ...] = (
    {"label": "Features", "href": "index.html#features"},
    {"label": "Why HTMSQL", "href": "index.html#stats"},
    {"label": "Get Started", "href": "index.html#cta"},
)

DEFAULT_NAV_ACTIONS: tuple[dict[str, str], ...] = (
    {"label": "Launch App", "href": "launch.html", "style": "primary"},
)


def _action(label: str, href: str, style: str) -> dict[str, str]:
    return {"label": label, "href": href, "style": style}


def _items(*pairs: tuple[str, str]) -> list[dict[str, str]]:
    return [{"title": title, "body": body} for title, body in pairs]


_GLOBAL: tuple[SeedBlock, ...] = (
    SeedBlock(
        "global",
        10,
        "nav",
        {
            "logo": "HTMSQL",
            "logoHref": "index.html",
            "links": [dict(link) for link in DEFAULT_NAV_LINKS],
            "actions": [dict(action) for action in DEFAULT_NAV_ACTIONS],
        },
    ),
    SeedBlock(
        "global",
        90,
        "footer",
        {
            "brand": "HTMSQL",
            "brandHref": "index.html",
            "tagline": "HTML & SQL. That is the stack.",
            "links": [
                {"label": "Features", "href": "index.html#features"},
                {"label": "Performance", "href": "index.html#stats"},
                {"label": "Get started", "href": "index.html#cta"},
            ],
        },
    ),
)

_HOME: tuple[SeedBlock, ...] = (
    SeedBlock(
        "home",
        20,
        "hero",
        {
            "badge": "New • The HTML + SQL runtime",
            "title": "HTMSQL is the web framework that speaks HTML & SQL.",
            "lead": (
                "Build data-driven interfaces without servers, without ORMs, and without "
                "build steps. The JS/WASM runtime is invisible glue—developers only "
                "write HTML and SQL."
            ),
            "actions": [
                _action("Start Building", "start.html", "primary"),
                _action("View Docs", "docs.html", "secondary"),
            ],
            "meta": ["Local-first", "Zero tooling", "Instant persistence"],
            "card": {
                "header": {"left": "app.htmsql", "right": "Live"},
                "code": (
                    "<section>\n  <h2>Latest Orders</h2>\n  <table>\n    {{ SQL:\n"
                    "      SELECT id, total, status\n      FROM orders\n"
                    "      ORDER BY created_at DESC\n      LIMIT 5;\n    }}\n"
                    "  </table>\n</section>"
                ),
                "footer": [
                    {"value": "12ms", "label": "query time"},
                    {"value": "99.98%", "label": "local uptime"},
                ],
            },
        },
    ),
    SeedBlock(
        "home",
        30,
        "stats",
        {
            "id": "stats",
            "items": [
                {"value": "0", "label": "servers required"},
                {"value": "1", "label": "language to ship"},
                {"value": "100%", "label": "browser-native"},
            ],
        },
    ),
    SeedBlock(
        "home",
        40,
        "feature-grid",
        {
            "id": "features",
            "heading": "Everything you need to ship data-rich UI.",
            "lead": (
                "HTMSQL keeps your data and UI in sync with a SQL-first renderer and a "
                "modern HTML runtime."
            ),
            "items": _items(
                (
                    "SQL-native components",
                    "Compose layouts with SQL blocks that render directly into HTML. "
                    "No ORM mapping, no glue code.",
                ),
                (
                    "Instant persistence",
                    "Local-first storage means your app keeps state even offline. "
                    "Sync later, ship now.",
                ),
                (
                    "Zero-build pipeline",
                    "Drop in a single HTML file. HTMSQL handles execution in the browser "
                    "with no bundlers or tooling.",
                ),
                (
                    "Enterprise-grade security",
                    "Your data stays in the client. No servers, no leaked credentials, "
                    "no surprises.",
                ),
            ),
        },
    ),
    SeedBlock(
        "home",
        50,
        "cta",
        {
            "id": "cta",
            "heading": "Ship your first HTMSQL app in minutes.",
            "body": "Join the developers replacing stacks with a single HTML file.",
            "actions": [
                _action("Generate Project", "generate.html", "primary"),
                _action("Talk to Sales", "sales.html", "secondary"),
            ],
        },
    ),
)

_DOCS: tuple[SeedBlock, ...] = (
    SeedBlock(
        "docs",
        20,
        "hero",
        {
            "badge": "Docs",
            "title": "HTMSQL Documentation",
            "lead": (
                "Learn the primitives that power HTMSQL and build production-ready "
                "HTML + SQL apps."
            ),
            "actions": [
                _action("Start Building", "start.html", "primary"),
                _action("Launch App", "launch.html", "secondary"),
            ],
        },
    ),
    SeedBlock(
        "docs",
        30,
        "content",
        {
            "id": "overview",
            "heading": "What is HTMSQL?",
            "body": [
                "HTMSQL is a browser-native runtime that pairs HTML with SQL queries to "
                "render UI instantly.",
                "Developers author only HTML and SQL; a lightweight JS/WASM layer runs the "
                "queries and handles persistence behind the scenes.",
            ],
        },
    ),
    SeedBlock(
        "docs",
        40,
        "card-grid",
        {
            "heading": "Core concepts",
            "lead": "Master the three building blocks that make HTMSQL feel effortless.",
            "items": _items(
                (
                    "Blocks",
                    "Define sections that render from SQL with the runtime handling execution.",
                ),
                (
                    "Stores",
                    "Local-first persistence keeps data fast and reliable everywhere via "
                    "WASM SQLite.",
                ),
                ("Flows", "Composable steps that capture, transform, and render data."),
            ),
        },
    ),
    SeedBlock(
        "docs",
        50,
        "code-section",
        {
            "heading": "Your first HTMSQL query",
            "body": "Drop SQL directly into HTML and the runtime renders the table.",
            "code": (
                "<section>\n  <h2>Accounts</h2>\n  {{ SQL:\n    SELECT name, tier, status\n"
                "    FROM accounts\n    WHERE status = 'active';\n  }}\n</section>"
            ),
        },
    ),
    SeedBlock(
        "docs",
        60,
        "steps",
        {
            "heading": "Recommended workflow",
            "items": _items(
                ("Design the HTML layout", "Sketch sections and components as plain HTML."),
                (
                    "Attach SQL blocks",
                    "Bind each section to a SQL statement while the runtime handles JS/WASM.",
                ),
                ("Ship and iterate", "Persist data locally, then sync when you are ready."),
            ),
        },
    ),
    SeedBlock(
        "docs",
        80,
        "cta",
        {
            "heading": "Ready to dive deeper?",
            "body": "Generate a project and explore the runtime with real data.",
            "actions": [
                _action("Generate Project", "generate.html", "primary"),
                _action("Launch App", "launch.html", "secondary"),
            ],
        },
    ),
)

_LAUNCH: tuple[SeedBlock, ...] = (
    SeedBlock(
        "launch",
        20,
        "hero",
        {
            "badge": "Runtime",
            "title": "Launch the HTMSQL App",
            "lead": (
                "Run the full HTMSQL runtime in minutes and start exploring the "
                "HTML + SQL workflow."
            ),
            "actions": [
                _action("Start Building", "start.html", "primary"),
                _action("Generate Project", "generate.html", "secondary"),
            ],
        },
    ),
    SeedBlock(
        "launch",
        40,
        "steps",
        {
            "heading": "Launch in three steps",
            "items": _items(
                ("Open the runtime", "Launch the local HTMSQL runtime from any modern browser."),
                ("Connect your data", "Load your SQLite data or start with a starter dataset."),
                ("Build live UI", "Compose HTML sections and see SQL results instantly."),
            ),
        },
    ),
    SeedBlock(
        "launch",
        50,
        "card-grid",
        {
            "heading": "Runtime modes",
            "lead": "Pick the workflow that matches your team.",
            "items": _items(
                ("Local-first", "Everything runs inside the browser with persistent storage."),
                ("Hybrid sync", "Work offline, then sync to your team database later."),
                ("Demo mode", "Share a self-contained HTML file with live data."),
            ),
        },
    ),
    SeedBlock(
        "launch",
        80,
        "cta",
        {
            "heading": "Ready for the live runtime?",
            "body": "Start the app and render your first SQL-powered UI.",
            "actions": [
                _action("Launch App", "launch.html", "primary"),
                _action("View Docs", "docs.html", "secondary"),
            ],
        },
    ),
)

_START: tuple[SeedBlock, ...] = (
    SeedBlock(
        "start",
        20,
        "hero",
        {
            "badge": "Quickstart",
            "title": "Start Building with HTMSQL",
            "lead": (
                "Spin up a project in minutes and ship an HTML + SQL experience "
                "without tooling."
            ),
            "actions": [
                _action("Generate Project", "generate.html", "primary"),
                _action("View Docs", "docs.html", "secondary"),
            ],
        },
    ),
    SeedBlock(
        "start",
        40,
        "steps",
        {
            "heading": "Quickstart checklist",
            "items": _items(
                (
                    "Create an HTML shell",
                    "Start with your layout and mark where SQL should render.",
                ),
                ("Define SQL blocks", "Bind data queries directly in the markup."),
                ("Deploy instantly", "Share the file or host it anywhere with no build step."),
            ),
        },
    ),
    SeedBlock(
        "start",
        50,
        "code-section",
        {
            "heading": "Sample HTMSQL layout",
            "body": "HTMSQL lets you co-locate UI and data without a framework.",
            "code": (
                "<section>\n  <h2>Active Tasks</h2>\n  {{ SQL:\n    SELECT title, owner\n"
                "    FROM tasks\n    WHERE status = 'open'\n    LIMIT 10;\n  }}\n</section>"
            ),
        },
    ),
    SeedBlock(
        "start",
        60,
        "card-grid",
        {
            "heading": "Starter templates",
            "lead": "Jump into common use cases with prebuilt layouts.",
            "items": _items(
                ("Operations Dashboard", "Track KPIs with SQL-driven cards."),
                ("Customer Workspace", "Keep everything local-first."),
                ("Offline Field App", "Use SQLite with instant sync."),
            ),
        },
    ),
    SeedBlock(
        "start",
        80,
        "cta",
        {
            "heading": "Build your first HTMSQL experience.",
            "body": "Generate a project and start editing the content database.",
            "actions": [
                _action("Generate Project", "generate.html", "primary"),
                _action("Talk to Sales", "sales.html", "secondary"),
            ],
        },
    ),
)

_GENERATE: tuple[SeedBlock, ...] = (
    SeedBlock(
        "generate",
        20,
        "hero",
        {
            "badge": "Generator",
            "title": "Generate an HTMSQL Project",
            "lead": "Scaffold a production-ready HTMSQL app with templates for every team.",
            "actions": [
                _action("Start Building", "start.html", "primary"),
                _action("View Docs", "docs.html", "secondary"),
            ],
        },
    ),
    SeedBlock(
        "generate",
        40,
        "card-grid",
        {
            "heading": "Choose your template",
            "lead": "Every template ships with SQL-ready layouts and sample data.",
            "items": _items(
                ("Analytics Studio", "Dashboards, KPIs, and alerts."),
                ("Support Console", "Queues, triage, and customer history."),
                ("Project Hub", "Tasks, roadmaps, and team updates."),
            ),
        },
    ),
    SeedBlock(
        "generate",
        50,
        "code-section",
        {
            "heading": "Generate from the CLI",
            "body": "Create a new project in seconds.",
            "code": "htmsql new my-project --template analytics\ncd my-project\nopen index.html",
        },
    ),
    SeedBlock(
        "generate",
        80,
        "cta",
        {
            "heading": "Need a custom template?",
            "body": "Talk to us about enterprise-ready HTMSQL starter kits.",
            "actions": [
                _action("Talk to Sales", "sales.html", "primary"),
                _action("Launch App", "launch.html", "secondary"),
            ],
        },
    ),
)

_SALES: tuple[SeedBlock, ...] = (
    SeedBlock(
        "sales",
        20,
        "hero",
        {
            "badge": "Sales",
            "title": "Talk to the HTMSQL team",
            "lead": "See how HTMSQL replaces traditional stacks with a single HTML + SQL file.",
            "actions": [
                _action("Book a demo", "sales.html#contact", "primary"),
                _action("View Docs", "docs.html", "secondary"),
            ],
        },
    ),
    SeedBlock(
        "sales",
        40,
        "card-grid",
        {
            "id": "contact",
            "heading": "Contact options",
            "lead": "Reach us in the format that works for you.",
            "items": _items(
                ("Live demo", "Schedule a walkthrough with our engineers."),
                ("Enterprise sales", "Plan your rollout and security review."),
                ("Partnerships", "Explore integrations and co-marketing."),
            ),
        },
    ),
    SeedBlock(
        "sales",
        50,
        "faq",
        {
            "heading": "Frequently asked questions",
            "items": [
                {
                    "question": "Does HTMSQL work offline?",
                    "answer": "Yes. HTMSQL runs entirely in-browser and persists data locally.",
                },
                {
                    "question": "How do we sync to our backend?",
                    "answer": (
                        "Use the hybrid sync runtime to export SQLite changes when you are ready."
                    ),
                },
                {
                    "question": "Can we white-label the runtime?",
                    "answer": "Enterprise plans include custom branding and templates.",
                },
            ],
        },
    ),
    SeedBlock(
        "sales",
        80,
        "cta",
        {
            "heading": "Ready to make the switch?",
            "body": "Let us tailor HTMSQL for your team.",
            "actions": [
                _action("Book a demo", "sales.html#contact", "primary"),
                _action("Generate Project", "generate.html", "secondary"),
            ],
        },
    ),
)

BLOCKS: tuple[SeedBlock, ...] = _GLOBAL + _HOME + _DOCS + _LAUNCH + _START + _GENERATE + _SALES
