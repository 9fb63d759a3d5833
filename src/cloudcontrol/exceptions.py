"""Exception hierarchy for cloudcontrol.

All exceptions inherit from :class:`CloudControlError` so that callers can
catch every client failure with a single ``except`` clause.

Subclass hierarchy::

    CloudControlError
    +-- ConfigError
    +-- DescriptorError
    +-- AuthError
    +-- ConnectionError_
    +-- ResponseError
        +-- AuthorizationRequired
"""

from __future__ import annotations

from typing import Optional


class CloudControlError(Exception):
    """Base exception for all cloudcontrol errors."""


class ConfigError(CloudControlError):
    """Raised for configuration problems (unreadable token cache, bad settings)."""


class DescriptorError(CloudControlError):
    """Raised when an endpoint descriptor is malformed or cannot be loaded."""


class AuthError(CloudControlError):
    """Raised when the token exchange fails.

    Token exchange failures are never retried.
    """


class ConnectionError_(CloudControlError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """


class ResponseError(CloudControlError):
    """Raised when the API answers with a body that is not JSON.

    Args:
        text: The raw response body.
        status_code: HTTP status of the response, when known.
    """

    def __init__(self, text: str, status_code: Optional[int] = None):
        super().__init__(text)
        self.text = text
        self.status_code = status_code


class AuthorizationRequired(ResponseError):
    """Raised when the server keeps rejecting the token after the retry budget is spent."""
