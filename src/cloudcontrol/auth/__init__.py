"""Authentication for the cloudControl API.

- :class:`AuthScheme` / :class:`AuthResult` -- scheme interface and its output.
- :class:`BasicAuth`, :class:`TokenAuth` -- the two header formats.
- :class:`TokenCache` -- on-disk cache of the last issued token.
"""

from cloudcontrol.auth.base import AuthResult, AuthScheme
from cloudcontrol.auth.schemes import BasicAuth, TokenAuth, select_scheme
from cloudcontrol.auth.token_store import TokenCache

__all__ = [
    "AuthResult",
    "AuthScheme",
    "BasicAuth",
    "TokenAuth",
    "TokenCache",
    "select_scheme",
]
