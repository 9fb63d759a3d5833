"""The two ``Authorization`` header schemes understood by the cloudControl API.

* :class:`BasicAuth` -- ``Authorization: Basic <base64(email:password)>``,
  used for the token exchange and whenever no token is held.
* :class:`TokenAuth` -- ``Authorization: cc_auth_token="<token>"``, used once
  a token has been issued.

:func:`select_scheme` picks the right one for the current session state.
"""

from __future__ import annotations

import base64

from cloudcontrol.auth.base import AuthResult, AuthScheme
from cloudcontrol.exceptions import AuthError
from cloudcontrol.models import ClientSettings


class BasicAuth(AuthScheme):
    """Authenticate with the account e-mail and password per :rfc:`7617`."""

    @property
    def auth_type(self) -> str:
        return "basic"

    def authenticate(self, settings: ClientSettings, token: str) -> AuthResult:
        """Base64-encode ``email:password`` into a Basic header.

        Raises:
            AuthError: If either the e-mail or the password is missing.
        """
        if not settings.email or not settings.password:
            raise AuthError(
                "No credentials configured: set an e-mail and password "
                "(CCTRL_EMAIL / CCTRL_PASSWORD)"
            )
        raw = f"{settings.email}:{settings.password}"
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        return AuthResult(headers={"Authorization": f"Basic {encoded}"})


class TokenAuth(AuthScheme):
    """Authenticate with a previously issued ``cc_auth_token``."""

    @property
    def auth_type(self) -> str:
        return "token"

    def authenticate(self, settings: ClientSettings, token: str) -> AuthResult:
        if not token:
            raise AuthError("No token held")
        return AuthResult(headers={"Authorization": f'cc_auth_token="{token}"'})


_BASIC = BasicAuth()
_TOKEN = TokenAuth()


def select_scheme(token: str) -> AuthScheme:
    """Return :class:`TokenAuth` when *token* is non-empty, else :class:`BasicAuth`."""
    return _TOKEN if token else _BASIC
