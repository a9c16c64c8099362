# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Name validation for ZPL keys.

A valid name is non-empty and made only of ASCII letters, digits
and the marks ``$ - _ @ . & + /``.
"""

from __future__ import annotations

import string
from typing import Any

from .exceptions import InvalidNameError

NAME_CHARS = frozenset(string.ascii_letters + string.digits + '$-_@.&+/')


def is_valid_name(name: Any) -> bool:
    """Return True if ``name`` is a valid ZPL key.

    Example:
        >>> is_valid_name('bind')
        True
        >>> is_valid_name('with space')
        False
    """
    if not isinstance(name, str) or not name:
        return False
    return all(ch in NAME_CHARS for ch in name)


def check_name(name: str, lineno: int | None = None, line: str | None = None) -> str:
    """Return ``name`` unchanged, or raise InvalidNameError."""
    if not is_valid_name(name):
        raise InvalidNameError(name, lineno=lineno, line=line)
    return name
