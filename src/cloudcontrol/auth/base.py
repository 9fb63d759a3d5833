"""Foundational types of the auth subsystem.

- :class:`AuthResult` -- the headers an auth scheme contributes to a request.
- :class:`AuthScheme` -- abstract base class for the two header schemes the
  cloudControl API accepts (see :mod:`cloudcontrol.auth.schemes`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from cloudcontrol.models import ClientSettings


class AuthResult:
    """Container for authentication headers to inject into HTTP requests.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Basic ..."}``).

    Example::

        result = AuthResult(headers={"Authorization": 'cc_auth_token="abc"'})
        assert result.headers["Authorization"] == 'cc_auth_token="abc"'
    """

    def __init__(self, headers: dict[str, str] | None = None):
        self.headers = headers or {}


class AuthScheme(ABC):
    """Abstract base class for request authentication schemes."""

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the unique identifier of this scheme (``"basic"``, ``"token"``)."""
        ...

    @abstractmethod
    def authenticate(self, settings: ClientSettings, token: str) -> AuthResult:
        """Return the headers that authenticate a request.

        Args:
            settings: The client's settings (credentials live here).
            token: The token currently held by the session; may be empty.

        Raises:
            AuthError: If the scheme cannot produce credentials.
        """
        ...
