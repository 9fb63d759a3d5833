"""Endpoint tree compiler -- turn a descriptor into a callable client surface.

Sub-modules:

* :mod:`~cloudcontrol.generator.descriptor` -- normalise and validate raw
  descriptors, or load them from JSON/YAML files.
* :mod:`~cloudcontrol.generator.surface` -- the recursive compiler and the
  :class:`Node` / :class:`Operation` types it produces.
"""

from cloudcontrol.generator.descriptor import load_descriptor, parse_descriptor
from cloudcontrol.generator.surface import Node, Operation, compile_surface

__all__ = ["Node", "Operation", "compile_surface", "load_descriptor", "parse_descriptor"]
