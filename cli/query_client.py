"""CLI client for the HTMSQL runtime API: ad-hoc SQL and re-rendering."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any
from urllib.parse import urlparse

import httpx

DEFAULT_SERVER = "http://localhost:8000"
_LOCALHOST_HOSTS = {"localhost", "127.0.0.1", "::1"}


def validate_server_url(server_url: str, allow_insecure_http: bool = False) -> str:
    """Normalize a server URL; plain HTTP is only accepted for localhost."""
    normalized = server_url.strip().rstrip("/")
    parsed = urlparse(normalized)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("Server URL must include scheme and host (e.g. https://example.com)")

    hostname = parsed.hostname
    if parsed.scheme == "http" and not allow_insecure_http and hostname not in _LOCALHOST_HOSTS:
        raise ValueError(
            "HTTPS is required for non-localhost servers. "
            "Use --allow-insecure-http only on trusted networks."
        )

    return normalized


def parse_param(raw: str) -> Any:
    """Interpret a ``--param`` value as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


class QueryClient:
    """Client for the runtime endpoints of an HTMSQL server."""

    def __init__(self, server_url: str, transport: httpx.BaseTransport | None = None) -> None:
        self.server_url = server_url.rstrip("/")
        self.client = httpx.Client(base_url=self.server_url, timeout=30.0, transport=transport)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> QueryClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def query(self, sql: str, params: list[Any] | None = None) -> list[dict[str, Any]]:
        """Run one statement; returns rows for reads and [] for mutations."""
        resp = self.client.post("/api/query", json={"sql": sql, "params": params or []})
        if resp.status_code == 400:
            raise ValueError(resp.json().get("detail", "Query failed"))
        resp.raise_for_status()
        rows: list[dict[str, Any]] = resp.json()["rows"]
        return rows

    def render(self) -> list[str]:
        """Ask the server to re-render its pages from current content."""
        resp = self.client.post("/api/render")
        resp.raise_for_status()
        pages: list[str] = resp.json()["pages"]
        return pages


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="htmsql-query",
        description="Query and re-render a running HTMSQL site",
    )
    parser.add_argument("--server", "-s", default=DEFAULT_SERVER, help="Server URL")
    parser.add_argument(
        "--allow-insecure-http",
        action="store_true",
        help="Allow http:// server URLs for non-localhost hosts",
    )

    subparsers = parser.add_subparsers(dest="command")
    query_parser = subparsers.add_parser("query", help="Execute a SQL statement")
    query_parser.add_argument("sql", help="Statement to execute")
    query_parser.add_argument(
        "--param",
        "-p",
        action="append",
        default=[],
        help="Positional parameter (JSON literal or plain string); repeatable",
    )
    subparsers.add_parser("render", help="Re-render pages from the content store")

    args = parser.parse_args(argv)
    try:
        server_url = validate_server_url(args.server, args.allow_insecure_http)
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    with QueryClient(server_url) as client:
        try:
            if args.command == "query":
                rows = client.query(args.sql, [parse_param(p) for p in args.param])
                print(json.dumps(rows, indent=2, ensure_ascii=False))
            elif args.command == "render":
                pages = client.render()
                print(f"Re-rendered {len(pages)} page(s): {', '.join(pages)}")
            else:
                parser.print_help()
        except ValueError as exc:
            print(f"Error: {exc}")
            sys.exit(1)
        except httpx.HTTPError as exc:
            print(f"Error: request failed ({exc})")
            sys.exit(1)


if __name__ == "__main__":
    main()
