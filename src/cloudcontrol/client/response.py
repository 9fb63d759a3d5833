"""Response interpretation and request URL construction.

The cloudControl API answers with JSON, except when it rejects a token: the
body is then the bare text ``Authorization Required``.  :func:`decode_body`
turns a response into a Python value or a :class:`ResponseError`, and
:func:`is_stale_token` recognises the rejection text.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union
from urllib.parse import quote

import httpx

from cloudcontrol.exceptions import ResponseError

AUTHORIZATION_REQUIRED = "Authorization Required"


def decode_body(response: httpx.Response) -> Any:
    """Decode the JSON body of *response*.

    Returns:
        The decoded value, or ``None`` for an empty body.

    Raises:
        ResponseError: If the body is not JSON.  The raw text and status
            code are attached.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        raise ResponseError(response.text, response.status_code) from None


def is_stale_token(text: str) -> bool:
    """True if *text* is the server's token rejection message."""
    return text.strip() == AUTHORIZATION_REQUIRED


def build_url(
    base_url: str,
    path: str,
    params: Union[Mapping[str, Any], str, None] = None,
) -> str:
    """Join *base_url* and *path* and append *params* as a query string.

    A string is appended verbatim.  A mapping becomes ``key=value`` pairs
    joined by ``&``; each value is percent-escaped once and keys are left
    as they are.

    Example::

        >>> build_url("https://api.cloudcontrol.com", "/app/", {"q": "a b"})
        'https://api.cloudcontrol.com/app/?q=a%20b'
    """
    url = f"{base_url}{path}"
    if not params:
        return url
    if isinstance(params, str):
        return f"{url}?{params}"
    query = "&".join(f"{key}={quote(str(value), safe='')}" for key, value in params.items())
    return f"{url}?{query}"
