"""Tests for swagger_convert.convert.servers."""

from __future__ import annotations

from swagger_convert.convert.servers import synthesize_servers
from swagger_convert.models import TransferScheme


class TestSynthesizeServers:
    """Test server URL synthesis."""

    def test_no_schemes(self) -> None:
        assert synthesize_servers(None, "api.example.com", "/v1") == []

    def test_no_host(self) -> None:
        assert synthesize_servers([TransferScheme.HTTPS], None, "/v1") == []

    def test_empty_schemes(self) -> None:
        assert synthesize_servers([], "api.example.com", "/v1") == []

    def test_default_base_path(self) -> None:
        assert synthesize_servers([TransferScheme.HTTP], "localhost:8080", None) == [
            {"url": "http://localhost:8080/"}
        ]

    def test_one_server_per_scheme_in_order(self) -> None:
        servers = synthesize_servers(
            [TransferScheme.WSS, TransferScheme.HTTPS], "api.example.com", "/v2"
        )
        assert servers == [
            {"url": "wss://api.example.com/v2"},
            {"url": "https://api.example.com/v2"},
        ]

    def test_duplicates_are_kept(self) -> None:
        servers = synthesize_servers(
            [TransferScheme.HTTPS, TransferScheme.HTTPS], "api.example.com", "/"
        )
        assert len(servers) == 2

    def test_server_count_matches_scheme_count(self) -> None:
        schemes = list(TransferScheme)
        servers = synthesize_servers(schemes, "h", "/b")
        assert [s["url"].split("://")[0] for s in servers] == [s.value for s in schemes]
