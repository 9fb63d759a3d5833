"""Session state and request plumbing shared by the sync and async clients.

:class:`BaseClient` owns everything that does not depend on the I/O model:

- **Session state** -- the held token, the request counter, and the
  stale-token retry counter.
- **Surface** -- the descriptor compiled against this client; public
  attribute lookups that miss on the client fall through to it, so
  ``client.app("foo").get()`` works directly.  A top-level resource named
  like a client attribute (``token``, ``close``, ...) is rejected with
  :class:`~cloudcontrol.exceptions.DescriptorError`.
- **Auth headers** -- ``cc_auth_token`` when a token is held, Basic
  credentials otherwise.
- **Retry budget** -- a stale-token reply clears the token and is replayed
  only while the lifetime retry counter stays below
  :attr:`~cloudcontrol.models.ClientSettings.max_reauth_retries`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from cloudcontrol.auth.schemes import select_scheme
from cloudcontrol.auth.token_store import TokenCache
from cloudcontrol.exceptions import AuthError, DescriptorError
from cloudcontrol.generator.surface import Node, compile_surface
from cloudcontrol.models import ClientSettings, EndpointDescriptor
from cloudcontrol.output import get_output
from cloudcontrol.structure import STRUCTURE

Descriptor = Union[EndpointDescriptor, Mapping[str, Any]]


class BaseClient:
    """State and helpers common to :class:`SyncClient` and :class:`AsyncClient`.

    Args:
        settings: Connection and credential settings.
        descriptor: Endpoint descriptor to compile.  Defaults to the
            built-in cloudControl :data:`~cloudcontrol.structure.STRUCTURE`.
    """

    def __init__(
        self,
        settings: ClientSettings,
        descriptor: Optional[Descriptor] = None,
    ) -> None:
        self._settings = settings
        self._token = settings.token
        self._requests = 0
        self._retries = 0
        self._surface = compile_surface(
            descriptor if descriptor is not None else STRUCTURE, self,
        )
        shadowed = sorted(name for name in self._surface.children if hasattr(type(self), name))
        if shadowed:
            raise DescriptorError(
                f"Top-level resource(s) {', '.join(shadowed)} clash with client attributes"
            )

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def surface(self) -> Node:
        """Root of the compiled endpoint tree."""
        return self._surface

    @property
    def token(self) -> str:
        return self._token

    @property
    def is_authorized(self) -> bool:
        return self._token != ""

    @property
    def requests(self) -> int:
        """Number of HTTP requests issued, token exchanges included."""
        return self._requests

    @property
    def retries(self) -> int:
        """Number of stale-token replies seen over the client's lifetime."""
        return self._retries

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._surface, name)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _build_headers(self) -> dict[str, str]:
        """Headers for the next request, chosen by whether a token is held."""
        scheme = select_scheme(self._token)
        auth = scheme.authenticate(self._settings, self._token)
        return {"Accept": "application/json", **auth.headers}

    def _register_stale_token(self, method: str, path: str) -> bool:
        """Drop the held token and count the event.

        Returns:
            ``True`` if the request may be replayed after re-authenticating.
        """
        output = get_output()
        self._token = ""
        self._retries += 1
        ceiling = self._settings.max_reauth_retries
        if self._retries < ceiling:
            output.debug(
                f"Token rejected on {method} {path}, re-authenticating "
                f"(retry {self._retries}/{ceiling - 1})"
            )
            return True
        output.warning(
            f"Token rejected on {method} {path}; re-authentication budget exhausted"
        )
        return False

    def _store_token(self, payload: Any) -> None:
        """Keep the token from a ``POST /token/`` reply.

        Raises:
            AuthError: If the reply carries no token.
        """
        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthError(f"Token exchange returned no token: {payload!r}")
        self._token = token
        get_output().debug("Obtained a new API token")

        if self._settings.persist_token:
            cache = TokenCache(self._settings.token_cache_path)
            try:
                cache.save(token)
            except OSError as exc:
                get_output().warning(f"Could not write token cache {cache.path}: {exc}")
