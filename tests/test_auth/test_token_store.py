"""Tests for the token cache."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from cloudcontrol.auth.token_store import TokenCache


@pytest.fixture()
def cache(tmp_path: Path) -> TokenCache:
    return TokenCache(tmp_path / ".cloudControl" / "token.json")


class TestTokenCache:
    def test_missing_file_loads_empty(self, cache: TokenCache) -> None:
        assert cache.load() == ""

    def test_save_and_load(self, cache: TokenCache) -> None:
        cache.save("abc123")
        assert cache.load() == "abc123"
        assert json.loads(cache.path.read_text()) == {"token": "abc123"}

    def test_save_creates_parent_directory(self, cache: TokenCache) -> None:
        assert not cache.path.parent.exists()
        cache.save("x")
        assert cache.path.is_file()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_permissions(self, cache: TokenCache) -> None:
        cache.save("secret")
        mode = stat.S_IMODE(cache.path.stat().st_mode)
        assert mode == 0o600

    def test_overwrite(self, cache: TokenCache) -> None:
        cache.save("one")
        cache.save("two")
        assert cache.load() == "two"

    def test_no_temp_files_left(self, cache: TokenCache) -> None:
        cache.save("one")
        assert [p.name for p in cache.path.parent.iterdir()] == ["token.json"]

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"token": 5}', '{"other": "x"}'])
    def test_unusable_content_loads_empty(self, cache: TokenCache, content: str) -> None:
        cache.path.parent.mkdir(parents=True)
        cache.path.write_text(content)
        assert cache.load() == ""

    def test_clear(self, cache: TokenCache) -> None:
        cache.save("x")
        cache.clear()
        assert not cache.path.exists()
        cache.clear()  # no-op when absent

    def test_default_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert TokenCache().path == tmp_path / ".cloudControl" / "token.json"
