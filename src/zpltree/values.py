# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Decoding of the raw text found after ``=`` on a ZPL line."""

from __future__ import annotations

QUOTES = ("'", '"')


def decode_value(raw: str) -> str:
    """Decode a raw value token.

    Trims surrounding whitespace, drops a trailing ``#`` comment that is
    not inside quotes and removes one pair of matching outer quotes.
    Values are never typed: the result is always a string, possibly empty.

    Args:
        raw: Text following the ``=`` sign.

    Returns:
        The decoded value.

    Example:
        >>> decode_value(' v # comment')
        'v'
        >>> decode_value("'v # literal'")
        'v # literal'
        >>> decode_value('')
        ''
    """
    text = raw.strip(' \t\r\n')
    if not text:
        return text

    in_single = False
    in_double = False
    for i, ch in enumerate(text):
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == '#' and not in_single and not in_double:
            text = text[:i].rstrip(' \t')
            break

    if len(text) >= 2 and text[0] in QUOTES and text[0] == text[-1]:
        return text[1:-1]
    return text
