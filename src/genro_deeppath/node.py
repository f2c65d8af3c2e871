# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Uniform view over the values found while walking a tree."""

from __future__ import annotations

import enum
import inspect
import numbers
import types
from collections import ChainMap
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any

from boltons.typeutils import make_sentinel

from .exceptions import PathAssignmentError
from .path import as_index

NOT_FOUND = make_sentinel('NOT_FOUND', var_name='NOT_FOUND')

_SCALAR_TYPES = (type(None), str, bytes, bytearray, bool, numbers.Number)

# Largest number of None slots set_at adds before an index past the end
MAX_PADDING = 10_000


class NodeKind(enum.Enum):
    """How a value behaves when a key is looked up in it."""

    MAPPING = 'mapping'
    SEQUENCE = 'sequence'
    OBJECT = 'object'
    SCALAR = 'scalar'
    ABSENT = 'absent'


def classify(value: Any) -> NodeKind:
    """Return the NodeKind of value."""
    if value is NOT_FOUND:
        return NodeKind.ABSENT
    if isinstance(value, _SCALAR_TYPES):
        return NodeKind.SCALAR
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, Sequence):
        return NodeKind.SEQUENCE
    return NodeKind.OBJECT


def _slot_names(cls: type) -> set[str]:
    names: set[str] = set()
    for klass in cls.__mro__:
        slots = klass.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        names.update(slots)
    return names


def _has_attribute(obj: Any, name: str) -> bool:
    """True if name is an attribute of obj, without running getters.

    Properties count as present whatever their getter does. Empty slots
    are absent. Classes defining __getattr__ are asked through hasattr
    for names not found statically.
    """
    try:
        attr = inspect.getattr_static(obj, name)
    except AttributeError:
        if any('__getattr__' in klass.__dict__ for klass in type(obj).__mro__):
            return hasattr(obj, name)
        return False
    if isinstance(attr, types.MemberDescriptorType):
        return _slot_is_set(obj, attr)
    return True


def _slot_is_set(obj: Any, member: Any) -> bool:
    try:
        member.__get__(obj, type(obj))
    except AttributeError:
        return False
    return True


class DeepNode:
    """A value seen as a node of a tree.

    Each node has:
    - value: The wrapped value
    - kind: Its NodeKind, computed once

    Membership comes in two flavours:
    - any access: everything a lookup can reach. For a ChainMap this
      includes the parent maps, for an object the class attributes.
    - own access: only members held directly. The first map of a
      ChainMap, the instance __dict__ (and filled slots) of an object.

    For mappings and sequences without inheritance both flavours agree.
    Sequences accept int keys and all-digit string keys as indexes.

    Example:
        >>> node = DeepNode(ChainMap({'a': 1}, {'b': 2}))
        >>> node.has_any('b'), node.has_own('b')
        (True, False)
        >>> DeepNode(['x', 'y']).get_any('1')
        'y'
    """

    __slots__ = ('value', 'kind')

    def __init__(self, value: Any) -> None:
        self.value = value
        self.kind = classify(value)

    def __repr__(self) -> str:
        return f"DeepNode({self.kind.value}, {self.value!r})"

    @property
    def is_container(self) -> bool:
        """True if keys can be looked up in this node."""
        return self.kind in (NodeKind.MAPPING, NodeKind.SEQUENCE, NodeKind.OBJECT)

    def _index(self, key: Any) -> int | None:
        index = as_index(key)
        if index is None or index >= len(self.value):
            return None
        return index

    def has_any(self, key: Any) -> bool:
        """True if key is reachable through any access."""
        kind = self.kind
        if kind is NodeKind.MAPPING:
            try:
                return key in self.value
            except TypeError:
                # unhashable key
                return False
        if kind is NodeKind.SEQUENCE:
            return self._index(key) is not None
        if kind is NodeKind.OBJECT:
            return isinstance(key, str) and _has_attribute(self.value, key)
        return False

    def has_own(self, key: Any) -> bool:
        """True if key is a member held directly by this node."""
        kind = self.kind
        if kind is NodeKind.MAPPING:
            owner = self.value.maps[0] if isinstance(self.value, ChainMap) else self.value
            try:
                return key in owner
            except TypeError:
                return False
        if kind is NodeKind.SEQUENCE:
            return self._index(key) is not None
        if kind is NodeKind.OBJECT:
            if not isinstance(key, str):
                return False
            if key in getattr(self.value, '__dict__', {}):
                return True
            return key in _slot_names(type(self.value)) and _has_attribute(self.value, key)
        return False

    def get_any(self, key: Any, default: Any = NOT_FOUND) -> Any:
        """Get the value under key through any access, or default."""
        if not self.has_any(key):
            return default
        if self.kind is NodeKind.SEQUENCE:
            return self.value[as_index(key)]
        if self.kind is NodeKind.OBJECT:
            return getattr(self.value, key)
        return self.value[key]

    def get_own(self, key: Any, default: Any = NOT_FOUND) -> Any:
        """Get the value under key through own access, or default."""
        if not self.has_own(key):
            return default
        value = self.value
        if self.kind is NodeKind.SEQUENCE:
            return value[as_index(key)]
        if self.kind is NodeKind.OBJECT:
            instance_dict = getattr(value, '__dict__', {})
            if key in instance_dict:
                return instance_dict[key]
            return getattr(value, key)
        if isinstance(value, ChainMap):
            return value.maps[0][key]
        return value[key]

    def set_at(self, key: Any, item: Any) -> None:
        """Store item under key, creating the slot if needed.

        Lists are padded with None when index is past the end, by at most
        MAX_PADDING slots.

        Raises:
            PathAssignmentError: If this node cannot hold key.
        """
        value = self.value
        kind = self.kind
        if kind is NodeKind.MAPPING:
            if not isinstance(value, MutableMapping):
                raise PathAssignmentError(key, value, "mapping is read-only")
            value[key] = item
        elif kind is NodeKind.SEQUENCE:
            if not isinstance(value, MutableSequence):
                raise PathAssignmentError(key, value, "sequence is immutable")
            index = as_index(key)
            if index is None:
                raise PathAssignmentError(key, value, "key is not a sequence index")
            if index < len(value):
                value[index] = item
            else:
                if index - len(value) > MAX_PADDING:
                    raise PathAssignmentError(
                        key, value, f"index too large (more than {MAX_PADDING} slots past the end)"
                    )
                value.extend([None] * (index - len(value)))
                value.append(item)
        elif kind is NodeKind.OBJECT:
            if not isinstance(key, str):
                raise PathAssignmentError(key, value, "attribute names must be strings")
            try:
                setattr(value, key, item)
            except AttributeError as exc:
                raise PathAssignmentError(key, value, str(exc)) from exc
        else:
            raise PathAssignmentError(key, value, "not a container")
