"""cloudcontrol -- a dynamically generated client for the cloudControl API.

The REST resources of the cloudControl hosting platform (users, keys,
applications, deployments, workers, logs) are described once as a nested
*endpoint descriptor* in :mod:`cloudcontrol.structure`.  At client
construction the descriptor is compiled into a tree of callable objects, so
that ``GET /app/myapp/deployment/default/`` becomes::

    client.app("myapp").deployment("default").get()

Authentication is handled transparently: the first call exchanges the
configured e-mail and password for a token, and a stale token is refreshed
a bounded number of times.

Typical usage::

    from cloudcontrol import create_client

    with create_client() as client:
        apps = client.app.get()

Modules:
    models: Pydantic models and HTTP verb enum.
    config: Environment and token-cache resolution.
    exceptions: Exception hierarchy.
    structure: The built-in cloudControl endpoint descriptor.
    output: stderr diagnostics with Rich support.
"""

__version__ = "0.3.0"

from cloudcontrol.client import AsyncClient, SyncClient, create_async_client, create_client  # noqa: E402
from cloudcontrol.models import ClientSettings  # noqa: E402

__all__ = [
    "AsyncClient",
    "ClientSettings",
    "SyncClient",
    "create_async_client",
    "create_client",
]
