# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Fluent wrapper exposing the deep operations as methods of a value.

The operations are plain functions. DeepWrapper binds them to a wrapped
value through a registry of named functions, so a host library can add
its own by deriving a new wrapper class with mixin(). Nothing is patched
into a shared namespace.

Example:
    >>> tree = deep({}).deep_set('a.b', 1).deep_set('a.c.0', 2).value
    >>> tree
    {'a': {'b': 1, 'c': [2]}}
    >>> deep(tree).deep_get('a.c.0')
    2
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Iterable, Mapping

from .operations import MIXINS


class DeepWrapper:
    """Wraps a tree and delegates attribute access to registered functions.

    Each registered function is called with the wrapped value as first
    argument. Functions listed as chainable return the wrapper instead of
    their result, so writes can be chained.

    Attributes:
        value: The wrapped tree.
    """

    __slots__ = ('_value',)

    _registry: ClassVar[dict[str, Callable[..., Any]]] = dict(MIXINS)
    _chainable: ClassVar[frozenset[str]] = frozenset({'deep_set', 'deep_set_value'})

    def __init__(self, value: Any) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._registry))

    @property
    def value(self) -> Any:
        """Return the wrapped tree."""
        return self._value

    def __getattr__(self, name: str) -> Any:
        """Return the registered function name bound to the wrapped value.

        Raises:
            AttributeError: If name is private or not registered.
        """
        if name.startswith('_'):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )

        handler = type(self)._registry.get(name)
        if handler is None:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )

        if name in self._chainable:
            def chained(*args: Any, **kwargs: Any) -> DeepWrapper:
                handler(self._value, *args, **kwargs)
                return self
            return chained
        return lambda *args, **kwargs: handler(self._value, *args, **kwargs)

    @classmethod
    def mixin(
        cls,
        functions: Mapping[str, Callable[..., Any]],
        chainable: Iterable[str] = (),
    ) -> type[DeepWrapper]:
        """Derive a wrapper class with additional registered functions.

        The class mixin() is called on is left untouched.

        Args:
            functions: Mapping of method name to function. Each function
                takes the wrapped value as first argument.
            chainable: Names whose calls return the wrapper.

        Returns:
            A new DeepWrapper subclass.

        Raises:
            ValueError: If a name starts with '_'.
            TypeError: If a function is not callable.

        Example:
            >>> Wrapper = DeepWrapper.mixin({'size': lambda tree: len(tree)})
            >>> Wrapper([1, 2]).size()
            2
        """
        for name, func in functions.items():
            if name.startswith('_'):
                raise ValueError(f"Cannot register private name '{name}'")
            if not callable(func):
                raise TypeError(
                    f"'{name}' must be callable, not {type(func).__name__}"
                )
        chainable = frozenset(chainable)
        unknown = chainable - set(functions) - set(cls._registry)
        if unknown:
            raise ValueError(f"Chainable names not registered: {sorted(unknown)}")

        return type(
            cls.__name__,
            (cls,),
            {
                '__slots__': (),
                '_registry': {**cls._registry, **functions},
                '_chainable': cls._chainable | chainable,
            },
        )


def deep(value: Any) -> DeepWrapper:
    """Wrap value for fluent deep access."""
    return DeepWrapper(value)


def mixin(
    functions: Mapping[str, Callable[..., Any]],
    chainable: Iterable[str] = (),
) -> type[DeepWrapper]:
    """Derive a DeepWrapper class with additional functions (see DeepWrapper.mixin)."""
    return DeepWrapper.mixin(functions, chainable)
