"""Asynchronous cloudControl client -- mirrors :class:`~cloudcontrol.client.sync_client.SyncClient`.

:class:`AsyncClient` wraps :class:`httpx.AsyncClient`.  Surface operations
return awaitables::

    async with AsyncClient(settings) as client:
        apps = await client.app.get()

Concurrent calls are not serialised: two unauthenticated operations
awaited together may each perform their own token exchange.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from cloudcontrol.client.base import BaseClient, Descriptor
from cloudcontrol.client.response import build_url, decode_body, is_stale_token
from cloudcontrol.client.sync_client import Params
from cloudcontrol.exceptions import AuthError, AuthorizationRequired, ConnectionError_, ResponseError
from cloudcontrol.models import ClientSettings, HTTPMethod
from cloudcontrol.output import get_output
from cloudcontrol.structure import TOKEN_PATH


class AsyncClient(BaseClient):
    """Non-blocking client for the cloudControl API.

    Args:
        settings: Connection and credential settings.
        descriptor: Endpoint descriptor to compile (defaults to the
            built-in cloudControl structure).
        transport: Optional async httpx transport.
    """

    def __init__(
        self,
        settings: ClientSettings,
        descriptor: Optional[Descriptor] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(settings, descriptor)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        self._ensure_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client, if open."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def invoke(self, method: HTTPMethod, path: str, params: Params = None) -> Any:
        """Run a surface operation: authenticate if no token is held, then request."""
        if not self.is_authorized:
            await self.authenticate()
        return await self.request(method, path, params)

    async def request(self, method: HTTPMethod, path: str, params: Params = None) -> Any:
        """Issue a request and decode its JSON body.

        Behaves identically to
        :meth:`~cloudcontrol.client.sync_client.SyncClient.request`.
        """
        response = await self._send(method, path, params)
        try:
            return decode_body(response)
        except ResponseError as exc:
            if not is_stale_token(exc.text):
                raise
        if not self._register_stale_token(method.value, path):
            raise AuthorizationRequired(response.text, response.status_code)
        await self.authenticate()
        return await self.request(method, path, params)

    async def authenticate(self) -> str:
        """Exchange the configured credentials for a new token. Never retried."""
        self._token = ""
        response = await self._send(HTTPMethod.POST, TOKEN_PATH)
        try:
            payload = decode_body(response)
        except ResponseError as exc:
            raise AuthError(f"Token exchange failed: {exc.text}") from exc
        self._store_token(payload)
        return self._token

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.timeout,
                verify=self._settings.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def _send(self, method: HTTPMethod, path: str, params: Params = None) -> httpx.Response:
        headers = self._build_headers()
        url = build_url(self._settings.base_url, path, params)
        client = self._ensure_client()
        self._requests += 1
        get_output().debug(f"{method.value} {url}")
        try:
            return await client.request(method.value, url, headers=headers)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"{method.value} {url} failed: {exc}") from exc
