# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Configuration - entry points for building ZPL trees.

A Configuration bundles the node class used for every node it creates
together with the parser options. It holds no state beyond those
options, so one instance can build any number of independent trees.

Example:
    >>> config = create_container()
    >>> root = config.parse_text('context\\n    iothreads = 1')
    >>> root.locate('context/iothreads').value
    '1'
    >>> root.destroy()
"""

from __future__ import annotations

import logging
import os
from typing import IO

from .node import ZplNode
from .parser import DEFAULT_MAX_DEPTH, ZplParser

LOG = logging.getLogger(__name__)


class Configuration:
    """Factory for parsed and programmatically built ZPL trees.

    Attributes:
        node_class: Class instantiated for every node (ZplNode or a
            subclass).
        max_depth: Parser indentation stack limit, None for no limit.
        tab_policy: Parser handling of tabs in indentation.
        encoding: Codec for byte input.
    """

    def __init__(
        self,
        node_class: type[ZplNode] = ZplNode,
        max_depth: int | None = DEFAULT_MAX_DEPTH,
        tab_policy: str = 'literal',
        encoding: str = 'utf-8',
    ) -> None:
        if not (isinstance(node_class, type) and issubclass(node_class, ZplNode)):
            raise TypeError(f"node_class must be a ZplNode subclass, not {node_class!r}")
        self.node_class = node_class
        self._parser = ZplParser(
            self, max_depth=max_depth, tab_policy=tab_policy, encoding=encoding
        )

    def __repr__(self) -> str:
        return (
            f"Configuration(node_class={self.node_class.__name__}, "
            f"max_depth={self.max_depth!r}, tab_policy={self.tab_policy!r})"
        )

    @property
    def max_depth(self) -> int | None:
        return self._parser.max_depth

    @property
    def tab_policy(self) -> str:
        return self._parser.tab_policy

    @property
    def encoding(self) -> str:
        return self._parser.encoding

    def new_tree(self, name: str) -> ZplNode:
        """Create an empty root node for programmatic construction.

        Args:
            name: The root's name.

        Returns:
            A root node not owned by the library (owned=False).

        Raises:
            InvalidNameError: If name is not a valid ZPL name.
        """
        return self.node_class(name, container=self, owned=False)

    def parse_text(self, text: str | bytes) -> ZplNode:
        """Parse ZPL text and return its 'root' node."""
        return self._parser.parse(text)

    def parse_source(self, source: IO[bytes] | IO[str]) -> ZplNode:
        """Read a binary or text stream to the end and parse it.

        Args:
            source: Any object with a read() method.

        Raises:
            OSError: Propagated unchanged from the stream.
        """
        return self.parse_text(source.read())

    def load(self, filename: str | os.PathLike[str]) -> ZplNode:
        """Read and parse a ZPL file.

        Args:
            filename: Path of the file to read.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        LOG.debug("Loading %s", os.fspath(filename))
        with open(filename, 'rb') as fp:
            return self.parse_source(fp)


def create_container(
    node_class: type[ZplNode] = ZplNode,
    max_depth: int | None = DEFAULT_MAX_DEPTH,
    tab_policy: str = 'literal',
    encoding: str = 'utf-8',
) -> Configuration:
    """Create a Configuration.

    Args:
        node_class: Class instantiated for every node.
        max_depth: Parser indentation stack limit, None for no limit.
        tab_policy: 'literal' or 'error', see ZplParser.
        encoding: Codec for byte input.
    """
    return Configuration(
        node_class=node_class, max_depth=max_depth, tab_policy=tab_policy, encoding=encoding
    )


def parse_text(text: str | bytes) -> ZplNode:
    """Parse ZPL text with default options."""
    return Configuration().parse_text(text)


def parse_source(source: IO[bytes] | IO[str]) -> ZplNode:
    """Read and parse a stream with default options."""
    return Configuration().parse_source(source)


def load(filename: str | os.PathLike[str]) -> ZplNode:
    """Read and parse a ZPL file with default options."""
    return Configuration().load(filename)
