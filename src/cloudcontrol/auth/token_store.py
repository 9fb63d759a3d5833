"""Persistent token cache.

A token issued by ``POST /token/`` is stored as ``{"token": "<value>"}`` in
``~/.cloudControl/token.json`` (see
:func:`~cloudcontrol.config.default_token_cache_path`).  Writes are atomic
and the file is created with ``0o600`` permissions so the token is never
world-readable, even momentarily.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from cloudcontrol.config import _atomic_write, default_token_cache_path


class TokenCache:
    """Read/write the cached token.

    Args:
        path: Location of the cache file.  Defaults to
            ``~/.cloudControl/token.json``.

    Example::

        cache = TokenCache(tmp_path / "token.json")
        cache.save("abc123")
        assert cache.load() == "abc123"
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or default_token_cache_path()

    @property
    def path(self) -> Path:
        """The filesystem path of the cache file."""
        return self._path

    def load(self) -> str:
        """Return the cached token, or ``""`` if the file is missing or unreadable."""
        if not self._path.is_file():
            return ""
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, ValueError, OSError):
            return ""
        if not isinstance(data, dict):
            return ""
        token = data.get("token")
        return token if isinstance(token, str) else ""

    def save(self, token: str) -> None:
        """Persist *token* atomically with ``0o600`` permissions.

        Raises:
            OSError: If the file cannot be written.
        """
        text = json.dumps({"token": token}, indent=2) + "\n"
        _atomic_write(self._path, text, mode=0o600)

    def clear(self) -> None:
        """Delete the cache file if it exists."""
        if self._path.is_file():
            self._path.unlink()
