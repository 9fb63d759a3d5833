"""Compile an endpoint descriptor into a tree of callable objects.

This is the core algorithm of cloudcontrol.  :func:`compile_surface` walks
an :class:`~cloudcontrol.models.EndpointDescriptor` recursively and returns
a :class:`Node` that mirrors the REST hierarchy:

* each declared verb becomes a bound :class:`Operation` named after it
  (``GET`` -> ``get``, ``POST`` -> ``create``, ``PUT`` -> ``update``,
  ``DELETE`` -> ``delete``);
* each child key becomes a child node whose path is extended by
  ``key + "/"``;
* a ``parameterized`` continuation makes the node callable: ``node("foo")``
  compiles the continuation at ``node.path + "foo/"``.

A node is simultaneously callable, a namespace of children, and a bag of
operations, so both ``client.app.get()`` and ``client.app("foo").get()``
work.  Compiled nodes are immutable.

No network I/O happens during compilation; operations dispatch through the
*session* they were compiled against.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional, Protocol, Union

from cloudcontrol.generator.descriptor import parse_descriptor
from cloudcontrol.models import METHOD_TO_VERB, EndpointDescriptor, HTTPMethod

PATH_SEPARATOR = "/"


class Session(Protocol):
    """What a compiled operation needs from its client."""

    def invoke(self, method: HTTPMethod, path: str, params: Any = None) -> Any:
        ...


class Operation:
    """A single HTTP verb bound to a path and a session.

    Calling the operation authenticates first when the session holds no
    token, then issues the request.  With an async session the call returns
    an awaitable.

    Args:
        method: The HTTP verb.
        path: Absolute URL path, always ending in ``/``.
        session: The client that executes the request.
    """

    __slots__ = ("_method", "_path", "_session")

    def __init__(self, method: HTTPMethod, path: str, session: Session) -> None:
        self._method = method
        self._path = path
        self._session = session

    @property
    def method(self) -> HTTPMethod:
        return self._method

    @property
    def path(self) -> str:
        return self._path

    @property
    def name(self) -> str:
        return METHOD_TO_VERB[self._method]

    def __call__(self, params: Any = None) -> Any:
        """Issue the request.

        Args:
            params: Query parameters, either a mapping or a preformatted
                query string.

        Returns:
            The decoded JSON response (or an awaitable of it).
        """
        return self._session.invoke(self._method, self._path, params)

    def __repr__(self) -> str:
        return f"<Operation {self._method.value} {self._path}>"


class Node:
    """A compiled resource: callable, namespace, and bag of operations at once.

    Children and operations are reachable as attributes (``node.deployment``,
    ``node.get``) or by subscription (``node["deployment"]``).
    """

    __slots__ = ("_path", "_children", "_operations", "_continuation", "_session")

    def __init__(
        self,
        path: str,
        children: dict[str, Node],
        operations: dict[str, Operation],
        continuation: Optional[EndpointDescriptor],
        session: Session,
    ) -> None:
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_children", MappingProxyType(children))
        object.__setattr__(self, "_operations", MappingProxyType(operations))
        object.__setattr__(self, "_continuation", continuation)
        object.__setattr__(self, "_session", session)

    @property
    def path(self) -> str:
        return self._path

    @property
    def children(self) -> Mapping[str, Node]:
        return self._children

    @property
    def operations(self) -> Mapping[str, Operation]:
        return self._operations

    @property
    def is_parameterized(self) -> bool:
        return self._continuation is not None

    def __call__(self, identifier: str) -> Node:
        """Descend into the parameterized continuation for *identifier*.

        Raises:
            TypeError: If this resource takes no identifier.
            ValueError: If *identifier* is empty, not a string, or contains ``/``.
        """
        if self._continuation is None:
            raise TypeError(f"Resource {self._path} does not take an identifier")
        if not isinstance(identifier, str) or not identifier or PATH_SEPARATOR in identifier:
            raise ValueError(f"Invalid identifier for {self._path}: {identifier!r}")
        return _compile_node(
            self._continuation, self._session, self._path + identifier + PATH_SEPARATOR,
        )

    def __getitem__(self, name: str) -> Union[Node, Operation]:
        if name in self._children:
            return self._children[name]
        return self._operations[name]

    def __getattr__(self, name: str) -> Union[Node, Operation]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(
                f"Resource {self._path} has no child or operation '{name}'"
            ) from None

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Compiled resources are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Compiled resources are immutable")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._children) | set(self._operations))

    def __repr__(self) -> str:
        parts = sorted(self._operations) + sorted(f"{c}/" for c in self._children)
        if self._continuation is not None:
            parts.append("(<id>)")
        return f"<Node {self._path} [{', '.join(parts)}]>"


def compile_surface(
    descriptor: Union[EndpointDescriptor, Mapping[str, Any]],
    session: Session,
    path: str = PATH_SEPARATOR,
) -> Node:
    """Compile *descriptor* into a :class:`Node` tree rooted at *path*.

    Args:
        descriptor: A parsed :class:`~cloudcontrol.models.EndpointDescriptor`
            or a raw descriptor mapping (validated with
            :func:`~cloudcontrol.generator.descriptor.parse_descriptor`).
        session: The client every operation dispatches through.
        path: URL path prefix; must end with ``/``.

    Returns:
        The root :class:`Node`.

    Raises:
        DescriptorError: If a raw descriptor is malformed.

    Example::

        root = compile_surface({"app": {"methods": ["GET"]}}, client)
        root.app.get()   # GET /app/
    """
    if not isinstance(descriptor, EndpointDescriptor):
        descriptor = parse_descriptor(descriptor, path)
    if not path.endswith(PATH_SEPARATOR):
        path += PATH_SEPARATOR
    return _compile_node(descriptor, session, path)


def _compile_node(descriptor: EndpointDescriptor, session: Session, path: str) -> Node:
    operations = {
        METHOD_TO_VERB[method]: Operation(method, path, session)
        for method in descriptor.methods
    }
    children = {
        name: _compile_node(child, session, path + name + PATH_SEPARATOR)
        for name, child in descriptor.children.items()
    }
    return Node(path, children, operations, descriptor.parameterized, session)
