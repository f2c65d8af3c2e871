# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Deep operations on trees of nested containers.

Every operation takes the root of a tree and a path, parses the path once
and walks the keys left to right:

    - deep_in / deep_has: existence checks (any access / own access)
    - deep_get / deep_own: lookups returning NOT_FOUND when unreachable
    - deep_set: assignment creating missing intermediate containers
    - deep_pluck: deep_get mapped over a collection of trees

Example:
    >>> tree = deep_set({}, 'config.servers.0.host', 'localhost')
    >>> tree
    {'config': {'servers': [{'host': 'localhost'}]}}
    >>> deep_get(tree, 'config.servers.0.host')
    'localhost'
    >>> deep_get(tree, 'config.missing.host')
    NOT_FOUND
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from boltons.iterutils import is_iterable

from .exceptions import EmptyPathError
from .node import NOT_FOUND, DeepNode
from .path import Key, escape_key, is_index_key, join_path, parse_path

logger = logging.getLogger(__name__)


def _traverse(
    tree: Any, keys: Sequence[Key], own: bool, fetch: bool = True
) -> tuple[bool, Any]:
    """Follow keys from tree.

    Presence is tested without running attribute getters. A getter is only
    run to read a value: if one raises while descending to a later key,
    the path is unreachable. The getter of the last key runs only when
    fetch is True, and its errors propagate.

    Returns:
        Tuple of (found, value). value is NOT_FOUND when found is False,
        or when fetch is False.
    """
    current = DeepNode(tree)
    last = len(keys) - 1
    for i, key in enumerate(keys):
        present = current.has_own(key) if own else current.has_any(key)
        if not present:
            return False, NOT_FOUND
        getter = current.get_own if own else current.get_any
        if i == last:
            return True, getter(key) if fetch else NOT_FOUND
        try:
            child = getter(key)
        except Exception as exc:
            logger.debug("Cannot descend into %r: %r", key, exc)
            return False, NOT_FOUND
        current = DeepNode(child)
    return True, current.value if fetch else NOT_FOUND


def deep_in(tree: Any, path: Any) -> bool:
    """Check that path is reachable in tree through any access.

    Args:
        tree: The root object/sequence of the tree.
        path: Dotted string path or sequence of keys.

    Returns:
        True if every key is found. An empty path is always found.
    """
    return _traverse(tree, parse_path(path), own=False, fetch=False)[0]


def deep_has(tree: Any, path: Any) -> bool:
    """Check that path is reachable in tree through own members only.

    Inherited members (ChainMap parents, class attributes) do not count.

    Args:
        tree: The root object/sequence of the tree.
        path: Dotted string path or sequence of keys.

    Returns:
        True if every key is an own member of its container.
    """
    return _traverse(tree, parse_path(path), own=True, fetch=False)[0]


def deep_get(tree: Any, path: Any, default: Any = NOT_FOUND) -> Any:
    """Get the value at path in tree.

    Args:
        tree: The root object/sequence of the tree.
        path: Dotted string path or sequence of keys.
        default: Returned when the path is not reachable.

    Returns:
        The value, or default (NOT_FOUND unless given).

    Example:
        >>> deep_get({'a': {'b': {'c': 1}}}, 'a.b.c')
        1
        >>> deep_get({'a': {'b': {'c': 1}}}, 'a.x.c', default=None) is None
        True
    """
    found, value = _traverse(tree, parse_path(path), own=False)
    return value if found else default


def deep_own(tree: Any, path: Any, default: Any = NOT_FOUND) -> Any:
    """Get the value at path in tree, following own members only.

    Args:
        tree: The root object/sequence of the tree.
        path: Dotted string path or sequence of keys.
        default: Returned when the path is not reachable.

    Returns:
        The value, or default (NOT_FOUND unless given).
    """
    found, value = _traverse(tree, parse_path(path), own=True)
    return value if found else default


def deep_set(tree: Any, path: Any, value: Any) -> Any:
    """Set the value at path in tree, creating missing containers.

    Walking all keys but the last, any value that is not a container is
    replaced with a new one: a list when the next key is an index
    ('0', 12), a dict otherwise. The tree is modified in place.

    Args:
        tree: The root object/sequence of the tree.
        path: Dotted string path or sequence of keys.
        value: The value to set.

    Returns:
        The same tree object, for chaining.

    Raises:
        EmptyPathError: If path has no keys.
        PathAssignmentError: If a container cannot hold its key
            (scalar root, tuple, read-only mapping, non-index key on a list).

    Example:
        >>> deep_set({}, 'a.b.0', 'x')
        {'a': {'b': ['x']}}
    """
    keys = parse_path(path)
    if not keys:
        raise EmptyPathError(f"Cannot set a value at empty path {path!r}")

    current = DeepNode(tree)
    last = len(keys) - 1
    for i in range(last):
        key = keys[i]
        child = DeepNode(current.get_any(key))
        if not child.is_container:
            container: Any = [] if is_index_key(keys[i + 1]) else {}
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Creating %s at %r (replacing %r)",
                    type(container).__name__,
                    join_path(keys[j] for j in range(i + 1)),
                    child.value,
                )
            current.set_at(key, container)
            child = DeepNode(container)
        current = child

    current.set_at(keys[last], value)
    return tree


def deep_pluck(collection: Any, path: Any) -> list[Any]:
    """Get the value at path in every tree of a collection.

    Args:
        collection: Iterable of trees. For a mapping, its values are used.
        path: Dotted string path or sequence of keys.

    Returns:
        One result per tree, in iteration order, NOT_FOUND where the path
        does not resolve. A non-iterable collection gives [].

    Example:
        >>> deep_pluck([{'a': {'v': 1}}, {'a': {}}, {}], 'a.v')
        [1, NOT_FOUND, NOT_FOUND]
    """
    if isinstance(collection, Mapping):
        items = collection.values()
    elif is_iterable(collection):
        items = collection
    else:
        return []
    keys = parse_path(path)
    return [deep_get(item, keys) for item in items]


# Legacy names
deep_set_value = deep_set
deep_get_value = deep_get
deep_get_own_value = deep_own
deep_escape_property_name = escape_key

MIXINS: dict[str, Callable[..., Any]] = {
    'deep_in': deep_in,
    'deep_has': deep_has,
    'deep_get': deep_get,
    'deep_own': deep_own,
    'deep_set': deep_set,
    'deep_pluck': deep_pluck,
    'deep_escape_property_name': escape_key,
    'deep_set_value': deep_set_value,
    'deep_get_value': deep_get_value,
    'deep_get_own_value': deep_get_own_value,
}
