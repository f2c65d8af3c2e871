# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-DeepPath - Deep property-path access for nested containers.

Get, set, check and pluck values inside trees of dicts, lists and objects
using dotted paths ('a.b.0') or explicit key sequences (['a', 'b', 0]).
"""

__version__ = "0.1.0"

from .exceptions import (
    DeepPathError,
    EmptyPathError,
    PathAssignmentError,
    PathSyntaxError,
)
from .node import NOT_FOUND, DeepNode, NodeKind
from .operations import (
    MIXINS,
    deep_escape_property_name,
    deep_get,
    deep_get_own_value,
    deep_get_value,
    deep_has,
    deep_in,
    deep_own,
    deep_pluck,
    deep_set,
    deep_set_value,
)
from .path import ESCAPE, SEPARATOR, PathParser, escape_key, join_path, parse_path
from .wrapper import DeepWrapper, deep, mixin

__all__ = [
    # Operations
    "deep_in",
    "deep_has",
    "deep_get",
    "deep_own",
    "deep_set",
    "deep_pluck",
    "NOT_FOUND",
    # Legacy names
    "deep_set_value",
    "deep_get_value",
    "deep_get_own_value",
    "deep_escape_property_name",
    # Paths
    "PathParser",
    "parse_path",
    "escape_key",
    "join_path",
    "SEPARATOR",
    "ESCAPE",
    # Nodes
    "DeepNode",
    "NodeKind",
    # Wrapper
    "DeepWrapper",
    "deep",
    "mixin",
    "MIXINS",
    # Exceptions
    "DeepPathError",
    "PathSyntaxError",
    "EmptyPathError",
    "PathAssignmentError",
]
