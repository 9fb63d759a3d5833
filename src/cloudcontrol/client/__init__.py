"""HTTP clients for the cloudControl API.

Classes:
    :class:`SyncClient` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.

Both take an explicit :class:`~cloudcontrol.models.ClientSettings`.
:func:`create_client` and :func:`create_async_client` build one from the
environment (``CCTRL_EMAIL``, ``CCTRL_PASSWORD``, and the token cache).

Example::

    from cloudcontrol.client import create_client

    with create_client() as client:
        client.app("myapp").deployment("default").worker.get()
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from cloudcontrol.client.async_client import AsyncClient
from cloudcontrol.client.base import Descriptor
from cloudcontrol.client.sync_client import SyncClient
from cloudcontrol.config import DEFAULT_ENV_PREFIX, resolve_settings


def create_client(
    descriptor: Optional[Descriptor] = None,
    transport: Optional[httpx.BaseTransport] = None,
    prefix: str = DEFAULT_ENV_PREFIX,
    **overrides: Any,
) -> SyncClient:
    """Create a :class:`SyncClient` from environment-derived settings.

    Args:
        descriptor: Endpoint descriptor; defaults to the built-in structure.
        transport: Optional httpx transport.
        prefix: Environment variable prefix for the credentials.
        **overrides: :class:`~cloudcontrol.models.ClientSettings` fields that
            take precedence over the environment.
    """
    return SyncClient(resolve_settings(prefix, **overrides), descriptor, transport)


def create_async_client(
    descriptor: Optional[Descriptor] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    prefix: str = DEFAULT_ENV_PREFIX,
    **overrides: Any,
) -> AsyncClient:
    """Create an :class:`AsyncClient` from environment-derived settings."""
    return AsyncClient(resolve_settings(prefix, **overrides), descriptor, transport)


__all__ = ["AsyncClient", "SyncClient", "create_async_client", "create_client"]
