# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DeepPath exceptions."""

from __future__ import annotations


class DeepPathError(Exception):
    """Base exception for DeepPath errors."""

    pass


class PathSyntaxError(DeepPathError, ValueError):
    """Raised when a path parser is configured with invalid characters."""

    pass


class EmptyPathError(DeepPathError, ValueError):
    """Raised when a write is attempted with an empty key sequence."""

    pass


class PathAssignmentError(DeepPathError, TypeError):
    """Raised when a container cannot accept a write at the given key."""

    def __init__(self, key: object, container: object, reason: str | None = None) -> None:
        self.key = key
        self.container = container
        message = f"Cannot assign key {key!r} into {type(container).__name__}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
