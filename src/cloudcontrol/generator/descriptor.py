"""Parse, validate, and load endpoint descriptors.

An endpoint descriptor is a nested mapping describing the REST surface::

    {
        "app": {
            "methods": ["GET"],
            "parameterized": {
                "methods": ["GET", "POST", "PUT", "DELETE"],
                "user": ["GET", "POST", "DELETE"],
            },
        },
    }

Two keys are reserved:

* ``methods`` -- the HTTP verbs valid at this path.
* ``parameterized`` -- the continuation reached by supplying an identifier
  (``/app/<name>/``).

Every other key names a child resource.  A list wherever a descriptor is
expected is shorthand for ``{"methods": [...]}``.

:func:`parse_descriptor` turns the raw mapping into an immutable
:class:`~cloudcontrol.models.EndpointDescriptor`; :func:`load_descriptor`
does the same for a JSON or YAML file.
"""

from __future__ import annotations

import json
import keyword
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

import yaml

from cloudcontrol.exceptions import DescriptorError
from cloudcontrol.models import METHOD_TO_VERB, EndpointDescriptor, HTTPMethod

METHODS_KEY = "methods"
PARAMETERIZED_KEY = "parameterized"

# Attribute names of a compiled node that a child resource must not shadow.
RESERVED_NAMES = frozenset({"path", "children", "operations", "is_parameterized"})


def parse_descriptor(raw: Union[Mapping[str, Any], list, tuple], where: str = "/") -> EndpointDescriptor:
    """Normalise and validate a raw descriptor tree.

    The input is not modified.

    Args:
        raw: A descriptor mapping, or a verb list shorthand.
        where: Path of this node, used in error messages.

    Returns:
        The equivalent :class:`~cloudcontrol.models.EndpointDescriptor`.

    Raises:
        DescriptorError: On unknown verbs, duplicate verbs, bad key types,
            invalid child names, or child names that collide with an
            operation of the same node.
    """
    if isinstance(raw, (list, tuple)):
        raw = {METHODS_KEY: raw}
    if not isinstance(raw, Mapping):
        raise DescriptorError(
            f"Descriptor at {where} must be a mapping or a list of verbs "
            f"(got {type(raw).__name__})"
        )

    methods: list[HTTPMethod] = []
    children: dict[str, EndpointDescriptor] = {}
    parameterized = None

    for key, value in raw.items():
        if not isinstance(key, str):
            raise DescriptorError(f"Descriptor keys must be strings at {where} (got {key!r})")
        if key == METHODS_KEY:
            methods = _parse_methods(value, where)
        elif key == PARAMETERIZED_KEY:
            parameterized = parse_descriptor(value, f"{where}<{PARAMETERIZED_KEY}>/")
        else:
            _check_child_name(key, where)
            children[key] = parse_descriptor(value, f"{where}{key}/")

    operation_names = {METHOD_TO_VERB[m] for m in methods}
    clashes = sorted(operation_names & children.keys())
    if clashes:
        raise DescriptorError(
            f"Child resource(s) {', '.join(clashes)} at {where} clash with operation names"
        )

    return EndpointDescriptor(methods=methods, children=children, parameterized=parameterized)


def _parse_methods(value: Any, where: str) -> list[HTTPMethod]:
    if not isinstance(value, (list, tuple)):
        raise DescriptorError(f"'{METHODS_KEY}' at {where} must be a list of verbs")
    methods: list[HTTPMethod] = []
    for item in value:
        name = item.value if isinstance(item, HTTPMethod) else str(item).upper()
        try:
            method = HTTPMethod(name)
        except ValueError:
            allowed = ", ".join(m.value for m in HTTPMethod)
            raise DescriptorError(
                f"Unknown HTTP verb {item!r} at {where}. Allowed: {allowed}"
            ) from None
        if method in methods:
            raise DescriptorError(f"Duplicate HTTP verb {method.value} at {where}")
        methods.append(method)
    return methods


def _check_child_name(name: str, where: str) -> None:
    if not name.isidentifier() or keyword.iskeyword(name):
        raise DescriptorError(
            f"Invalid resource name {name!r} at {where}: must be a Python identifier"
        )
    if name.startswith("_") or name in RESERVED_NAMES:
        raise DescriptorError(f"Resource name {name!r} at {where} is reserved")


def load_descriptor(source: Union[str, Path]) -> EndpointDescriptor:
    """Load a descriptor from a JSON or YAML file.

    The format is chosen by extension (``.json``, ``.yaml``, ``.yml``);
    unknown extensions try JSON first, then YAML.

    Raises:
        DescriptorError: If the file cannot be read or parsed, or is not
            a valid descriptor.
    """
    file_path = Path(source)
    if not file_path.is_file():
        raise DescriptorError(f"Descriptor file not found: {source}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DescriptorError(f"Failed to read descriptor file {source}: {exc}") from exc
    if not content.strip():
        raise DescriptorError(f"Descriptor file is empty: {source}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return parse_descriptor(_parse_content(content, hint))


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML (JSON first unless hinted as YAML)."""
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise DescriptorError(f"Invalid JSON: {exc}") from exc
            json_error = exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse descriptor as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise DescriptorError(msg) from exc
    return _require_mapping(result)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DescriptorError(f"Descriptor must be a JSON/YAML object (got {kind})")
    return result
