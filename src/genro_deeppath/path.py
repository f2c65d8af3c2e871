# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path parsing for deep property access.

A path is either an explicit sequence of keys or a single string where
keys are joined by a separator character ('.' by default). A key may
contain the separator or the escape character itself ('\\' by default)
when they are escaped:

    - 'a.b.c'          -> ['a', 'b', 'c']
    - 'a\\.b.c'        -> ['a.b', 'c']
    - 'a\\\\.b'        -> ['a\\', 'b']   (escaped escape, then a real separator)

A separator is escaped when it is preceded by an odd number of consecutive
escape characters. The parser resolves this with a single left-to-right
scan, so runs of escape characters of any length are handled.

Example:
    >>> parse_path('config.db\\\\.main.port')
    ['config', 'db.main', 'port']
    >>> escape_key('db.main')
    'db\\\\.main'
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, Iterable, Union

from .exceptions import PathSyntaxError

Key = Union[str, int]

SEPARATOR = '.'
ESCAPE = '\\'

# ASCII digits only: '٣' and friends are not indexes
_INDEX_PATTERN = re.compile(r'[0-9]+')


def as_index(key: Any) -> int | None:
    """Return the sequence index a key stands for, or None.

    A key is an index if it is a non-negative int (bool excluded) or a
    string made only of ASCII digits.

    Examples:
        >>> as_index(3), as_index('03'), as_index('-1'), as_index('x')
        (3, 3, None, None)
    """
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key >= 0 else None
    if isinstance(key, str) and _INDEX_PATTERN.fullmatch(key):
        try:
            return int(key)
        except ValueError:
            # over the interpreter's int string conversion limit
            return None
    return None


def is_index_key(key: Any) -> bool:
    """True if key addresses a sequence slot (see as_index)."""
    return as_index(key) is not None


class PathParser:
    """Splits string paths into keys and escapes keys for string paths.

    Attributes:
        separator: Character separating keys in a string path.
        escape: Character escaping a separator or another escape.

    Example:
        >>> parser = PathParser(separator='/')
        >>> parser.parse('a/b\\\\/c')
        ['a', 'b/c']
    """

    __slots__ = ('separator', 'escape')

    def __init__(self, separator: str = SEPARATOR, escape: str = ESCAPE) -> None:
        """Initialize a PathParser.

        Args:
            separator: Single character separating keys.
            escape: Single character used for escaping.

        Raises:
            PathSyntaxError: If either is not a single character, or both
                are the same character.
        """
        for name, char in (('separator', separator), ('escape', escape)):
            if not isinstance(char, str) or len(char) != 1:
                raise PathSyntaxError(
                    f"{name} must be a single character, not {char!r}"
                )
        if separator == escape:
            raise PathSyntaxError(
                f"separator and escape must differ, both are {separator!r}"
            )
        self.separator = separator
        self.escape = escape

    def __repr__(self) -> str:
        return f"PathParser(separator={self.separator!r}, escape={self.escape!r})"

    def parse(self, spec: Any) -> Sequence[Key]:
        """Convert a path specification into a key sequence.

        Args:
            spec: A string path or an already split sequence of keys.

        Returns:
            The same object if spec is a sequence of keys, the parsed keys
            if spec is a string, or an empty list for anything else.
        """
        if isinstance(spec, str):
            return self.split(spec)
        if isinstance(spec, Sequence) and not isinstance(spec, (bytes, bytearray)):
            return spec
        return []

    def split(self, path: str) -> list[str]:
        """Split a string path on unescaped separators and unescape the keys.

        Escaped escapes collapse to one escape, escaped separators collapse
        to a literal separator, any other escape character is kept.

        Args:
            path: The string path.

        Returns:
            List of string keys. Never empty: '' gives [''].
        """
        sep, esc = self.separator, self.escape
        keys: list[str] = []
        current: list[str] = []
        i = 0
        length = len(path)
        while i < length:
            char = path[i]
            if char == esc and i + 1 < length and path[i + 1] in (esc, sep):
                current.append(path[i + 1])
                i += 2
                continue
            if char == sep:
                keys.append(''.join(current))
                current = []
            else:
                current.append(char)
            i += 1
        keys.append(''.join(current))
        return keys

    def escape_key(self, name: str) -> str:
        """Escape a key so it survives as one key inside a string path.

        The escape character is doubled first, then separators are escaped,
        otherwise the escapes added for separators would be doubled too.
        """
        esc = self.escape
        return name.replace(esc, esc + esc).replace(self.separator, esc + self.separator)

    def join(self, keys: Iterable[Any]) -> str:
        """Build a string path from keys, escaping each one.

        Non-string keys are converted with str().
        """
        return self.separator.join(self.escape_key(str(key)) for key in keys)


default_parser = PathParser()


def parse_path(spec: Any) -> Sequence[Key]:
    """Convert a path specification into a key sequence.

    Args:
        spec: Dotted string path or sequence of keys.

    Returns:
        Key sequence (see PathParser.parse).

    Example:
        >>> parse_path('level1.level2.0')
        ['level1', 'level2', '0']
        >>> parse_path(['a', 0])
        ['a', 0]
        >>> parse_path(None)
        []
    """
    return default_parser.parse(spec)


def escape_key(name: str) -> str:
    """Escape separator and escape characters in a key."""
    return default_parser.escape_key(name)


def join_path(keys: Iterable[Any]) -> str:
    """Join keys into a dotted string path, escaping as needed."""
    return default_parser.join(keys)
