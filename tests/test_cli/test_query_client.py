"""Tests for the query CLI client."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest

from cli.query_client import QueryClient, main, parse_param, validate_server_url


def _mock_transport(handler_log: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        handler_log.append(request)
        if request.url.path == "/api/query":
            body = json.loads(request.content)
            if body["sql"].startswith("BAD"):
                return httpx.Response(400, json={"detail": 'near "BAD": syntax error'})
            if body["sql"].startswith("SELECT"):
                return httpx.Response(200, json={"rows": [{"slug": "home"}]})
            return httpx.Response(200, json={"rows": []})
        if request.url.path == "/api/render":
            return httpx.Response(200, json={"pages": ["home", "docs"]})
        return httpx.Response(500)

    return httpx.MockTransport(handler)


class TestValidateServerUrl:
    def test_rejects_insecure_http_for_remote_hosts(self) -> None:
        with pytest.raises(ValueError, match="HTTPS is required"):
            validate_server_url("http://example.com")

    def test_allows_https_for_remote_hosts(self) -> None:
        assert validate_server_url("https://example.com/") == "https://example.com"

    def test_allows_http_for_localhost(self) -> None:
        assert validate_server_url("http://127.0.0.1:8000") == "http://127.0.0.1:8000"

    def test_allows_insecure_http_when_flag_enabled(self) -> None:
        assert (
            validate_server_url("http://example.com:8000", allow_insecure_http=True)
            == "http://example.com:8000"
        )

    def test_rejects_missing_scheme(self) -> None:
        with pytest.raises(ValueError, match="scheme and host"):
            validate_server_url("example.com")


class TestParseParam:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("3", 3), ("1.5", 1.5), ("null", None), ("true", True), ('"7"', "7"), ("home", "home")],
    )
    def test_json_or_raw(self, raw: str, expected: object) -> None:
        assert parse_param(raw) == expected


class TestQueryClient:
    def test_query_posts_sql_and_params(self) -> None:
        log: list[httpx.Request] = []
        with QueryClient("http://localhost:8000", transport=_mock_transport(log)) as client:
            rows = client.query("SELECT slug FROM pages WHERE slug = ?", ["home"])

        assert rows == [{"slug": "home"}]
        assert json.loads(log[0].content) == {
            "sql": "SELECT slug FROM pages WHERE slug = ?",
            "params": ["home"],
        }

    def test_query_error_detail_raised(self) -> None:
        with (
            QueryClient("http://localhost:8000", transport=_mock_transport([])) as client,
            pytest.raises(ValueError, match="syntax error"),
        ):
            client.query("BAD SQL")

    def test_render(self) -> None:
        with QueryClient("http://localhost:8000", transport=_mock_transport([])) as client:
            assert client.render() == ["home", "docs"]


class TestMain:
    def test_query_command_prints_rows(self, capsys: pytest.CaptureFixture[str]) -> None:
        log: list[httpx.Request] = []
        transport = _mock_transport(log)
        with patch(
            "cli.query_client.QueryClient",
            side_effect=lambda url: QueryClient(url, transport=transport),
        ):
            main(["query", "SELECT slug FROM pages WHERE id = ?", "-p", "3"])

        assert json.loads(capsys.readouterr().out) == [{"slug": "home"}]
        assert json.loads(log[0].content)["params"] == [3]

    def test_render_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        transport = _mock_transport([])
        with patch(
            "cli.query_client.QueryClient",
            side_effect=lambda url: QueryClient(url, transport=transport),
        ):
            main(["render"])

        assert "Re-rendered 2 page(s): home, docs" in capsys.readouterr().out

    def test_query_error_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        transport = _mock_transport([])
        with (
            patch(
                "cli.query_client.QueryClient",
                side_effect=lambda url: QueryClient(url, transport=transport),
            ),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["query", "BAD"])

        assert exc_info.value.code == 1
        assert "syntax error" in capsys.readouterr().out

    def test_insecure_server_rejected(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["--server", "http://example.com", "render"])
        assert "HTTPS is required" in capsys.readouterr().out
