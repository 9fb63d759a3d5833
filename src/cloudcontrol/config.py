"""Environment lookup, token cache location, and settings resolution.

Credentials are read from two environment variables sharing a prefix
(``CCTRL_EMAIL`` and ``CCTRL_PASSWORD`` by default).  A token issued in an
earlier session may be cached in ``~/.cloudControl/token.json`` so that the
first request can skip the token exchange.

Nothing in the client core reads the environment directly: these helpers
produce a :class:`~cloudcontrol.models.ClientSettings` which is then passed
to the client explicitly.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from cloudcontrol.models import ClientSettings

DEFAULT_ENV_PREFIX = "CCTRL"
_TOKEN_DIRNAME = ".cloudControl"
_TOKEN_FILENAME = "token.json"


def get_from_environment(element: str, prefix: str = DEFAULT_ENV_PREFIX) -> Optional[str]:
    """Return ``os.environ["<PREFIX>_<ELEMENT>"]`` or ``None`` when unset or empty."""
    value = os.environ.get(f"{prefix}_{element.upper()}")
    return value or None


def default_token_cache_path() -> Path:
    """Path of the per-user token cache (``~/.cloudControl/token.json``)."""
    return Path.home() / _TOKEN_DIRNAME / _TOKEN_FILENAME


def resolve_settings(prefix: str = DEFAULT_ENV_PREFIX, **overrides: Any) -> ClientSettings:
    """Resolve client settings from explicit overrides, the environment, and the token cache.

    Precedence (high to low):
        1. Keyword *overrides* whose value is not ``None``
        2. ``<PREFIX>_EMAIL`` / ``<PREFIX>_PASSWORD``
        3. Token cache file (token only)
        4. Model defaults

    Args:
        prefix: Environment variable prefix.
        **overrides: Any :class:`ClientSettings` field.

    Returns:
        The resolved :class:`ClientSettings`.
    """
    from cloudcontrol.auth.token_store import TokenCache

    values: dict[str, Any] = {k: v for k, v in overrides.items() if v is not None}

    if "email" not in values:
        values["email"] = get_from_environment("email", prefix)
    if "password" not in values:
        values["password"] = get_from_environment("password", prefix)
    if "token" not in values:
        cache_path = values.get("token_cache_path") or default_token_cache_path()
        values["token"] = TokenCache(Path(cache_path)).load()

    return ClientSettings.model_validate(values)


def _atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.  When *mode* is
    given the permissions are applied before any content is written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
