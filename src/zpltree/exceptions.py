# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""zpltree exceptions."""

from __future__ import annotations


class ZplError(Exception):
    """Base exception for zpltree errors."""

    pass


class InvalidNameError(ZplError, ValueError):
    """Raised when a key contains characters outside the ZPL name set."""

    def __init__(
        self,
        name: str,
        lineno: int | None = None,
        line: str | None = None,
    ) -> None:
        self.name = name
        self.lineno = lineno
        self.line = line
        message = f"Invalid name {name!r}"
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class NotFoundError(ZplError, KeyError):
    """Raised when a path segment cannot be resolved."""

    def __init__(self, path: str, segment: str) -> None:
        self.path = path
        self.segment = segment
        super().__init__(f"Path segment {segment!r} not found in {path!r}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class ZplSyntaxError(ZplError):
    """Raised when the structure of the ZPL text cannot be parsed."""

    def __init__(self, message: str, lineno: int | None = None, line: str | None = None) -> None:
        self.lineno = lineno
        self.line = line
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class StructuralLimitError(ZplSyntaxError):
    """Raised when nesting exceeds the parser depth limit."""

    pass


class TabIndentationError(ZplSyntaxError):
    """Raised when a tab is found in the indentation and tabs are rejected."""

    pass


class DestroyedNodeError(ZplError):
    """Raised when a destroyed node is used."""

    pass
