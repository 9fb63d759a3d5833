"""Pydantic models and enums shared across cloudcontrol modules.

:class:`ClientSettings` is the explicit configuration object every client is
constructed with.  It can be built by hand (tests, embedding applications)
or resolved from the process environment with
:meth:`ClientSettings.from_environment`.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HTTPMethod(str, enum.Enum):
    """HTTP verbs that may appear in an endpoint descriptor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# Operation name exposed on the compiled surface for each verb.
METHOD_TO_VERB: dict[HTTPMethod, str] = {
    HTTPMethod.GET: "get",
    HTTPMethod.POST: "create",
    HTTPMethod.PUT: "update",
    HTTPMethod.DELETE: "delete",
}

CRUD: list[HTTPMethod] = [HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.GET, HTTPMethod.DELETE]


class EndpointDescriptor(BaseModel):
    """A normalised node of the endpoint descriptor tree.

    Produced by :func:`~cloudcontrol.generator.descriptor.parse_descriptor`
    from the raw nested mapping and consumed by the surface compiler.

    Attributes:
        methods: HTTP verbs valid at this path.
        children: Named sub-resources, each extending the path by its key.
        parameterized: Continuation reached by supplying an identifier.
    """

    model_config = ConfigDict(frozen=True)

    methods: list[HTTPMethod] = Field(default_factory=list)
    children: dict[str, EndpointDescriptor] = Field(default_factory=dict)
    parameterized: Optional[EndpointDescriptor] = None


class ClientSettings(BaseModel):
    """Connection and credential settings for a single client instance.

    Example::

        settings = ClientSettings(email="me@example.com", password="secret")
        client = SyncClient(settings)
    """

    host: str = Field(default="api.cloudcontrol.com", description="API host name")
    protocol: str = Field(default="https", description="URL scheme")
    email: Optional[str] = Field(default=None, description="Account e-mail for Basic auth")
    password: Optional[str] = Field(default=None, description="Account password for Basic auth")
    token: str = Field(default="", description="Previously issued token; empty means unauthenticated")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_reauth_retries: int = Field(
        default=3,
        ge=0,
        description="Ceiling on stale-token re-authentications over the client's lifetime",
    )
    persist_token: bool = Field(
        default=False, description="Write freshly issued tokens to the token cache"
    )
    token_cache_path: Optional[Path] = Field(
        default=None, description="Override for the token cache file location"
    )

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}"

    @classmethod
    def from_environment(cls, prefix: str = "CCTRL", **overrides: object) -> ClientSettings:
        """Build settings from ``<PREFIX>_EMAIL``, ``<PREFIX>_PASSWORD`` and the token cache.

        Explicit *overrides* win over anything found in the environment.
        """
        from cloudcontrol.config import resolve_settings

        return resolve_settings(prefix, **overrides)
