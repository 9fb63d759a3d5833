"""Synchronous cloudControl client.

:class:`SyncClient` wraps :class:`httpx.Client` and layers on:

- **Compiled surface** -- ``client.app("foo").deployment("default").get()``.
- **Transparent authentication** -- an unauthenticated client performs the
  token exchange (``POST /token/``) before its first operation.
- **Stale-token recovery** -- an ``Authorization Required`` reply clears
  the token, re-authenticates, and replays the request while the lifetime
  retry budget lasts.

See Also:
    :class:`~cloudcontrol.client.async_client.AsyncClient` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

import httpx

from cloudcontrol.client.base import BaseClient, Descriptor
from cloudcontrol.client.response import build_url, decode_body, is_stale_token
from cloudcontrol.exceptions import AuthError, AuthorizationRequired, ConnectionError_, ResponseError
from cloudcontrol.models import ClientSettings, HTTPMethod
from cloudcontrol.output import get_output
from cloudcontrol.structure import TOKEN_PATH

Params = Union[Mapping[str, Any], str, None]


class SyncClient(BaseClient):
    """Blocking client for the cloudControl API.

    May be used as a context manager; otherwise the underlying
    :class:`httpx.Client` is created on first use and released by
    :meth:`close`.

    Args:
        settings: Connection and credential settings.
        descriptor: Endpoint descriptor to compile (defaults to the
            built-in cloudControl structure).
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`.

    Example::

        with SyncClient(ClientSettings(email="me@example.com", password="pw")) as client:
            deployments = client.app("myapp").deployment("default").get()
    """

    def __init__(
        self,
        settings: ClientSettings,
        descriptor: Optional[Descriptor] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(settings, descriptor)
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        self._ensure_client()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client, if open."""
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def invoke(self, method: HTTPMethod, path: str, params: Params = None) -> Any:
        """Run a surface operation: authenticate if no token is held, then request."""
        if not self.is_authorized:
            self.authenticate()
        return self.request(method, path, params)

    def request(self, method: HTTPMethod, path: str, params: Params = None) -> Any:
        """Issue a request and decode its JSON body.

        Args:
            method: HTTP verb.
            path: Absolute URL path.
            params: Query parameters (mapping or preformatted string).

        Returns:
            The decoded JSON body, or ``None`` if the body is empty.

        Raises:
            ConnectionError_: On network / timeout errors.
            AuthorizationRequired: When the token is rejected and the
                re-authentication budget is exhausted.
            ResponseError: When the body is not JSON.
            AuthError: When a re-authentication triggered here fails.
        """
        response = self._send(method, path, params)
        try:
            return decode_body(response)
        except ResponseError as exc:
            if not is_stale_token(exc.text):
                raise
        if not self._register_stale_token(method.value, path):
            raise AuthorizationRequired(response.text, response.status_code)
        self.authenticate()
        return self.request(method, path, params)

    def authenticate(self) -> str:
        """Exchange the configured credentials for a new token.

        Failures are raised immediately and never retried.

        Returns:
            The new token.

        Raises:
            AuthError: If credentials are missing or the exchange is rejected.
            ConnectionError_: On network / timeout errors.
        """
        self._token = ""
        response = self._send(HTTPMethod.POST, TOKEN_PATH)
        try:
            payload = decode_body(response)
        except ResponseError as exc:
            raise AuthError(f"Token exchange failed: {exc.text}") from exc
        self._store_token(payload)
        return self._token

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._settings.timeout,
                verify=self._settings.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def _send(self, method: HTTPMethod, path: str, params: Params = None) -> httpx.Response:
        headers = self._build_headers()
        url = build_url(self._settings.base_url, path, params)
        client = self._ensure_client()
        self._requests += 1
        get_output().debug(f"{method.value} {url}")
        try:
            return client.request(method.value, url, headers=headers)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"{method.value} {url} failed: {exc}") from exc
