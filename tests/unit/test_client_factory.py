"""Unit tests for building a RemoteClient from settings."""

import httpx
import pytest

from commit_headless.config import Settings
from commit_headless.errors import MissingToken
from commit_headless.schemas import Target
from commit_headless.services import open_remote_client


class TestOpenRemoteClient:
    def test_missing_token(self):
        with pytest.raises(MissingToken):
            with open_remote_client(Settings(), Target.parse("o/r"), "main"):
                pass

    def test_client_uses_settings(self, monkeypatch):
        monkeypatch.setenv("GH_TOKEN", "fallback")
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.test/api/v3")
        monkeypatch.setenv("GITHUB_SERVER_URL", "https://ghe.example.test")
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"name": "main", "commit": {"sha": "abc"}})

        with open_remote_client(
            Settings(),
            Target.parse("o/r"),
            "main",
            dry_run=True,
            transport=httpx.MockTransport(handler),
        ) as client:
            assert client.get_head_commit_hash() == "abc"
            assert client.dry_run is True
            assert client.compare_url("a", "b") == "https://ghe.example.test/o/r/compare/a...b"

        assert str(seen[0].url) == "https://ghe.example.test/api/v3/repos/o/r/branches/main"
        assert seen[0].headers["Authorization"] == "Bearer fallback"
