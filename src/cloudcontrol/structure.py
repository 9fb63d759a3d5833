"""The built-in cloudControl endpoint descriptor.

URLs covered::

    /user/                                              GET
    /user/<user>/                                       GET PUT DELETE
    /user/<user>/key/<key_id>/                          GET POST DELETE

    /app/                                               GET
    /app/<app>/                                         GET POST PUT DELETE
    /app/<app>/user/                                    GET POST DELETE
    /app/<app>/deployment/<dep>/                        GET POST PUT DELETE
    /app/<app>/deployment/<dep>/log/{access,error,worker}/  GET
    /app/<app>/deployment/<dep>/worker/                 GET POST
    /app/<app>/deployment/<dep>/worker/<worker_id>/     GET DELETE
    /app/<app>/deployment/<dep>/boxes/                  GET
    /app/<app>/deployment/<dep>/addon/                  GET

The token exchange (``POST /token/``) is not part of the surface; it is
issued by the client itself.
"""

from __future__ import annotations

from typing import Any

from cloudcontrol.models import CRUD, HTTPMethod

GET = HTTPMethod.GET
POST = HTTPMethod.POST
PUT = HTTPMethod.PUT
DELETE = HTTPMethod.DELETE

TOKEN_PATH = "/token/"

STRUCTURE: dict[str, Any] = {
    "app": {
        "methods": [GET],
        "parameterized": {
            "methods": CRUD,
            "user": [GET, POST, DELETE],
            "deployment": {
                "parameterized": {
                    "methods": CRUD,
                    "log": {
                        "access": [GET],
                        "error": [GET],
                        "worker": [GET],
                    },
                    "worker": {
                        "methods": [GET, POST],
                        "parameterized": [GET, DELETE],
                    },
                    "boxes": [GET],
                    "addon": [GET],
                },
            },
        },
    },
    "user": {
        "methods": [GET],
        "parameterized": {
            "methods": [GET, PUT, DELETE],
            "key": {
                "parameterized": {
                    "methods": [GET, POST, DELETE],
                },
            },
        },
    },
}
