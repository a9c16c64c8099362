# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parser for ZPL configuration text.

Each non blank, non comment line declares one node, either ``key`` or
``key = value``. Nesting comes from the count of leading spaces, banded
in units of four: an indent of 0 is level 0, an indent of 1 to 4 is
level 1, 5 to 8 is level 2, and so on.

Example input::

    context
        iothreads = 1
    main
        type = zqueue           #  ZMQ_DEVICE type
        frontend
            bind = 'inproc://addr1'
            bind = 'ipc://addr2'

The result is always a synthetic node named ``root`` whose children are
the unindented entries of the text.

Example:
    >>> root = parse_zpl('main\\n    type = zqueue')
    >>> root.locate('main/type').value
    'zqueue'
"""

from __future__ import annotations

import logging
from typing import Any, TYPE_CHECKING

from .exceptions import StructuralLimitError, TabIndentationError
from .names import check_name
from .node import ZplNode
from .values import decode_value

if TYPE_CHECKING:
    from .configuration import Configuration

LOG = logging.getLogger(__name__)

ROOT_NAME = 'root'
DEFAULT_MAX_DEPTH = 64
INDENT_WIDTH = 4
TAB_POLICIES = ('literal', 'error')


def indent_level(indent: int) -> int:
    """Map a count of leading spaces to a nesting level."""
    if indent <= 0:
        return 0
    return 1 + (indent - 1) // INDENT_WIDTH


class ZplParser:
    """Indentation driven parser building a ZplNode tree.

    Attributes:
        container: Configuration providing the node class, or None to
            build plain ZplNode trees.
        max_depth: Maximum number of entries on the indentation stack,
            the root included, or None for no limit.
        tab_policy: 'literal' measures indentation by leading spaces only
            and logs a warning when a tab is found in the indentation;
            'error' raises TabIndentationError instead.
        encoding: Codec used when parse() receives bytes.
    """

    def __init__(
        self,
        container: Configuration | None = None,
        max_depth: int | None = DEFAULT_MAX_DEPTH,
        tab_policy: str = 'literal',
        encoding: str = 'utf-8',
    ) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer or None, not {max_depth!r}")
        if tab_policy not in TAB_POLICIES:
            raise ValueError(
                f"tab_policy must be one of {', '.join(TAB_POLICIES)}, not {tab_policy!r}"
            )
        self.container = container
        self.max_depth = max_depth
        self.tab_policy = tab_policy
        self.encoding = encoding

    def _new_root(self) -> ZplNode:
        node_class = self.container.node_class if self.container is not None else ZplNode
        return node_class(ROOT_NAME, container=self.container, owned=True)

    def parse(self, text: str | bytes) -> ZplNode:
        """Parse ZPL text and return the synthetic root node.

        Args:
            text: The configuration text. Bytes are decoded with the
                parser's encoding; a leading byte order mark is dropped.

        Returns:
            The root node, named 'root'.

        Raises:
            InvalidNameError: If a key is not a valid ZPL name.
            StructuralLimitError: If nesting exceeds max_depth.
            TabIndentationError: If tab_policy is 'error' and a line is
                indented with tabs.

        On error, every node created so far is destroyed before the
        exception propagates.
        """
        if isinstance(text, (bytes, bytearray, memoryview)):
            text = bytes(text).decode(self.encoding)
        if text.startswith('\ufeff'):
            text = text[1:]

        root = self._new_root()
        try:
            lines, nodes = self._parse_lines(root, text)
        except Exception as e:
            LOG.debug("Parse aborted, releasing partial tree: %s", str(e))
            root.destroy()
            raise
        LOG.debug("Parsed %d lines into %d nodes", lines, nodes)
        return root

    def _parse_lines(self, root: ZplNode, text: str) -> tuple[int, int]:
        stack: list[tuple[ZplNode, int]] = [(root, 0)]
        nodes = 0
        lineno = 0

        for lineno, raw_line in enumerate(text.split('\n'), 1):
            line = raw_line[:-1] if raw_line.endswith('\r') else raw_line
            stripped = line.strip(' \t')
            if not stripped or stripped.startswith('#'):
                continue

            indent = len(line) - len(line.lstrip(' '))
            self._check_tabs(line, indent, lineno)
            level = indent_level(indent)

            while stack[-1][1] >= level + 1:
                stack.pop()
            parent = stack[-1][0]

            key, sep, rest = line[indent:].partition('=')
            key = key.strip(' \t')
            check_name(key, lineno=lineno, line=line)

            if self.max_depth is not None and len(stack) >= self.max_depth:
                raise StructuralLimitError(
                    f"indentation stack exceeds {self.max_depth} entries", lineno, line
                )

            node = parent.add(key)
            if sep:
                node.set_value(decode_value(rest.lstrip(' \t')))
            nodes += 1
            stack.append((node, level + 1))

        return lineno, nodes

    def _check_tabs(self, line: str, indent: int, lineno: int) -> None:
        leading = line[:len(line) - len(line.lstrip(' \t'))]
        if '\t' not in leading:
            return
        if self.tab_policy == 'error':
            raise TabIndentationError("tab in indentation", lineno, line)
        LOG.warning(
            "line %d: tab in indentation, measured as %d leading spaces", lineno, indent
        )


def parse_zpl(text: str | bytes, **options: Any) -> ZplNode:
    """Parse ZPL text with a one-off ZplParser.

    Args:
        text: The configuration text.
        **options: ZplParser keyword arguments (container, max_depth,
            tab_policy, encoding).

    Returns:
        The root node.
    """
    return ZplParser(**options).parse(text)
